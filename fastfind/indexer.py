"""
fastfind/indexer.py

Builds the three in-memory inverted indexes (surname, province, year)
from a corpus of text lines in a single scan.

Each index maps:
    key (str) -> posting list (list[int] of record positions)

Positions are appended in scan order, which is increasing, so every
posting list comes out strictly increasing without a sort. The query
side (fastfind/intersect.py) relies on that, so the scan must stay in
corpus order.

A build always produces a fresh IndexSet; nothing is merged into a
previous one.
"""

import time
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from profkit import timeit, tick
from fastfind.extract import FIELDS, extract_keys


class IndexSet:
    """
    Read-only snapshot of one build: field -> {key -> posting list}.

    Typical usage:
        idx = Indexer().build(lines)
        idx.postings("surname", "S")   # [0, 2] or None
    """

    __slots__ = ("surname", "province", "year", "num_records")

    def __init__(self, surname: Dict[str, List[int]], province: Dict[str, List[int]],
                 year: Dict[str, List[int]], num_records: int):
        self.surname = surname
        self.province = province
        self.year = year
        self.num_records = num_records

    @classmethod
    def empty(cls):
        return cls({}, {}, {}, 0)

    def field(self, name: str) -> Dict[str, List[int]]:
        if name not in FIELDS:
            raise ValueError(f"unknown field {name!r}, expected one of {FIELDS}")
        return getattr(self, name)

    def postings(self, field: str, key: str) -> Optional[List[int]]:
        return self.field(field).get(key)

    def stats(self) -> dict:
        return {
            "records": self.num_records,
            "surname_keys": len(self.surname),
            "province_keys": len(self.province),
            "year_keys": len(self.year),
        }


class Indexer:
    """
    In-memory inverted index builder.

    Maintains a temporary mapping per field:
        key -> [position, position, ...]

    build() scans the corpus once and freezes the result into an IndexSet.
    """

    def __init__(self, verbose: bool = True):
        self.verbose = verbose
        self.index = IndexSet.empty()

    def build(self, corpus: Sequence[Optional[str]]) -> IndexSet:
        """
        Construct the surname/province/year indexes for `corpus`.

        Args:
            corpus: ordered sequence of records; a record may be "" or None

        Returns:
            IndexSet : fresh snapshot, replacing any previous build
        """
        t0 = time.perf_counter()
        # Defaultdict creates the empty posting list on first sight of a key
        surname = defaultdict(list)
        province = defaultdict(list)
        year = defaultdict(list)

        with timeit("build_index"):
            for i, line in enumerate(corpus):
                if line is not None and not isinstance(line, str):
                    raise TypeError(f"record {i} must be str or None, got {type(line).__name__}")
                s, p, y = extract_keys(line)
                if s is None:
                    tick("records_skipped")
                    continue
                surname[s].append(i)
                if p is not None:
                    province[p].append(i)
                if y is not None:
                    year[y].append(i)

        self.index = IndexSet(dict(surname), dict(province), dict(year), len(corpus))

        if self.verbose:
            dt = (time.perf_counter() - t0) * 1000
            st = self.index.stats()
            print(f"[Indexer] Built index: {st['records']} records, "
                  f"{st['surname_keys']} surname / {st['province_keys']} province / "
                  f"{st['year_keys']} year keys in {dt:.2f}ms")
        return self.index

    def get_postings(self, field: str, key: str) -> List[int]:
        """
        Retrieve the posting list for (field, key) from the last build.
        Returns an empty list if the key is not present.
        """
        return self.index.postings(field, key) or []


# -------------------------------
# Optional manual test / smoke run
# -------------------------------
if __name__ == "__main__":
    from fastfind.parser import Parser
    from fastfind.paths import SAMPLE_CORPUS_PATH

    print("[Indexer] Building index from", SAMPLE_CORPUS_PATH)
    lines = Parser().load_lines(SAMPLE_CORPUS_PATH)

    indexer = Indexer()
    indexer.build(lines)

    sample_key = "S"
    postings = indexer.get_postings("surname", sample_key)
    print(f"Sample postings for surname '{sample_key}': {postings}")
