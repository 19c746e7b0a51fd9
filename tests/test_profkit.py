# tests/test_profkit.py
import profkit
from fastfind.searcher import Searcher


def test_disabled_is_noop(monkeypatch):
    monkeypatch.setattr(profkit, "ENABLED", False)
    profkit.reset()
    Searcher(["Smith6700121990XX"], verbose=False).search(surname="S")
    assert profkit.report() == {}


def test_enabled_counts(monkeypatch):
    monkeypatch.setattr(profkit, "ENABLED", True)
    profkit.reset()
    s = Searcher(["Smith6700121990XX", "", "Sahin6799881990DD"], verbose=False)
    s.search(surname="S", province="67", year="1990")
    s.search(surname="S")
    counters = profkit.report()
    profkit.reset()

    assert counters["search_calls"] == 2
    assert counters["intersections"] == 2
    assert counters["records_skipped"] == 1
    assert counters["build_index"] >= 0
    assert counters["search"] >= 0
