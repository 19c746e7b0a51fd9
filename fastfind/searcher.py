import threading
from typing import List, Mapping, Optional, Sequence, Tuple, Union

from profkit import timeit, tick
from fastfind.criteria import Criteria
from fastfind.indexer import Indexer, IndexSet
from fastfind.intersect import boolean_and

CriteriaLike = Union[Criteria, Mapping, None]


class Searcher:
    """
    In-memory multi-field searcher.

    - Owns one corpus (tuple of lines) and the IndexSet built from it.
    - load() rebuilds everything from scratch and swaps the pair in with a
      single assignment, so a query never sees a half-built index.
    - search() answers conjunctive surname/province/year queries by
      intersecting posting lists, shortest first, and returns the matching
      lines in corpus order.
    """

    def __init__(self, corpus: Optional[Sequence[Optional[str]]] = None, verbose: bool = True):
        self.verbose = verbose
        self._unloaded: Tuple[tuple, IndexSet] = ((), IndexSet.empty())
        self._state = self._unloaded
        # Serializes reloads; queries never take it
        self._reload_lock = threading.Lock()
        if corpus is not None:
            self.load(corpus)

    def load(self, corpus: Sequence[Optional[str]]) -> IndexSet:
        """
        Replace the corpus and rebuild all indexes.
        The caller's sequence is copied, so mutating it afterwards has no effect.
        """
        data = tuple(corpus)
        with self._reload_lock:
            index = Indexer(verbose=self.verbose).build(data)
            self._state = (data, index)
        return index

    # Same operation under the frontend's historical name
    set_data = load

    @property
    def loaded(self) -> bool:
        """True once any corpus (even an empty one) has been loaded."""
        return self._state is not self._unloaded

    @property
    def corpus(self) -> tuple:
        return self._state[0]

    @property
    def index(self) -> IndexSet:
        return self._state[1]

    @property
    def size(self) -> int:
        return len(self._state[0])

    def stats(self) -> dict:
        return self._state[1].stats()

    def _postings_for(self, index: IndexSet, criteria: Criteria) -> Optional[List[List[int]]]:
        """
        Posting lists for every present criterion.
        Returns None as soon as one key is unknown (nothing can match).
        """
        lists = []
        for field, key in criteria.present():
            plist = index.postings(field, key)
            if not plist:
                return None
            lists.append(plist)
        return lists

    def _match(self, state, criteria: CriteriaLike) -> Optional[List[int]]:
        """Positions matching `criteria`, or None for the match-everything case."""
        if not isinstance(criteria, Criteria):
            criteria = Criteria.from_mapping(criteria)
        if criteria.is_empty():
            return None
        lists = self._postings_for(state[1], criteria)
        if lists is None:
            return []
        return boolean_and(lists)

    @staticmethod
    def _resolve(criteria: CriteriaLike, kwargs: dict) -> CriteriaLike:
        if not kwargs:
            return criteria
        if criteria is not None:
            raise TypeError("pass criteria either positionally or as keyword arguments, not both")
        return Criteria.from_mapping(kwargs)

    def search_positions(self, criteria: CriteriaLike = None, **kwargs) -> List[int]:
        """Ascending corpus positions of matching records."""
        criteria = self._resolve(criteria, kwargs)
        state = self._state
        positions = self._match(state, criteria)
        if positions is None:
            return list(range(len(state[0])))
        return positions

    def search(self, criteria: CriteriaLike = None, **kwargs) -> List[str]:
        """
        Execute a query.
        - criteria: Criteria, a dict with any of surname/province/year, or
          None; keyword arguments are accepted instead of a dict.
        - Returns matching lines in ascending corpus position.
        - No criteria -> the whole corpus. Unknown key -> [].
        """
        criteria = self._resolve(criteria, kwargs)
        tick("search_calls")
        state = self._state
        with timeit("search"):
            positions = self._match(state, criteria)
            data = state[0]
            if positions is None:
                return list(data)
            return [data[p] for p in positions]

    def count(self, criteria: CriteriaLike = None, **kwargs) -> int:
        criteria = self._resolve(criteria, kwargs)
        return len(self.search_positions(criteria))


if __name__ == "__main__":
    # Run from project root:  python -m fastfind.searcher
    import time
    from fastfind.parser import Parser
    from fastfind.paths import SAMPLE_CORPUS_PATH

    s = Searcher(Parser().load_lines(SAMPLE_CORPUS_PATH))

    queries = [
        {},
        {"surname": "S"},
        {"province": "06"},
        {"province": "06", "year": "1990"},
        {"surname": "S", "province": "34", "year": "1985"},
        {"surname": "Q"},
    ]
    for q in queries:
        t0 = time.perf_counter()
        res = s.search(q)
        dt = (time.perf_counter() - t0) * 1000
        print(f"{q!s:<55} -> {len(res)} hits in {dt:.3f}ms  {res[:3]}")
