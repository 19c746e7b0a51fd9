# fastfind/criteria.py

from dataclasses import dataclass, fields
from typing import Mapping, Optional

from fastfind.extract import FIELDS


@dataclass(frozen=True)
class Criteria:
    """
    Conjunctive query: every present field must match exactly.

    A field is absent when it is None or "" (falsy values never constrain
    the result). Values are opaque strings, matched case-sensitively.
    """

    surname: Optional[str] = None
    province: Optional[str] = None
    year: Optional[str] = None

    def __post_init__(self):
        for f in fields(self):
            v = getattr(self, f.name)
            if v is not None and not isinstance(v, str):
                raise TypeError(f"criterion {f.name!r} must be str or None, got {type(v).__name__}")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping]) -> "Criteria":
        """
        Build from a dict-like object (JSON body, query args, kwargs).
        Unknown keys raise ValueError.
        """
        if data is None:
            return cls()
        unknown = set(data) - set(FIELDS)
        if unknown:
            raise ValueError(f"unknown criteria: {sorted(unknown)}, expected a subset of {FIELDS}")
        return cls(**{k: data.get(k) for k in FIELDS})

    def present(self):
        """(field, key) pairs that actually constrain the result, in field order."""
        return [(name, getattr(self, name)) for name in FIELDS if getattr(self, name)]

    def is_empty(self) -> bool:
        return not self.present()
