# tests/test_indexer.py
import random
import pytest

from fastfind.extract import FIELDS, extract_keys
from fastfind.indexer import Indexer, IndexSet

SCENARIO = ["Smith6701234561990XX", "Jones6709876541985YY", "Smithx671111111999ZZ"]
RANDOM_SEED = 2026


def random_corpus(n, seed=RANDOM_SEED):
    rng = random.Random(seed)
    alphabet = "SsJjKk0123456789 xyz"
    out = []
    for _ in range(n):
        if rng.random() < 0.05:
            out.append("")
            continue
        out.append("".join(rng.choice(alphabet) for _ in range(rng.randint(1, 18))))
    return out


def test_scenario_indexes():
    idx = Indexer(verbose=False).build(SCENARIO)
    assert idx.surname == {"S": [0, 2], "J": [1]}
    assert idx.province == {"67": [0, 1, 2]}
    assert idx.year == {"4561": [0], "6541": [1], "1119": [2]}
    assert idx.num_records == 3


def test_every_record_indexed_under_its_surname():
    corpus = random_corpus(2000)
    idx = Indexer(verbose=False).build(corpus)
    for p, line in enumerate(corpus):
        if line:
            assert p in idx.surname[line[0]]


def test_posting_lists_strictly_increasing():
    idx = Indexer(verbose=False).build(random_corpus(2000))
    for field in FIELDS:
        for key, plist in idx.field(field).items():
            assert plist, f"empty posting list for {field}:{key}"
            assert all(a < b for a, b in zip(plist, plist[1:])), f"{field}:{key} not strictly increasing"


def test_postings_match_brute_force():
    corpus = random_corpus(1500, seed=7)
    idx = Indexer(verbose=False).build(corpus)
    expected = {f: {} for f in FIELDS}
    for p, line in enumerate(corpus):
        for field, key in zip(FIELDS, extract_keys(line)):
            if key is not None:
                expected[field].setdefault(key, []).append(p)
    for field in FIELDS:
        assert idx.field(field) == expected[field]


def test_malformed_records_are_skipped_not_fatal():
    corpus = ["", None, "Demir", "yilmaz34", "Ozturk 7"]
    idx = Indexer(verbose=False).build(corpus)
    assert idx.surname == {"D": [2], "y": [3], "O": [4]}
    assert idx.province == {"34": [3]}
    assert idx.year == {}
    assert idx.num_records == 5


def test_empty_corpus():
    idx = Indexer(verbose=False).build([])
    assert idx.stats() == {"records": 0, "surname_keys": 0, "province_keys": 0, "year_keys": 0}


def test_non_string_record_raises():
    with pytest.raises(TypeError):
        Indexer(verbose=False).build(["Smith6700121990", 42])


def test_rebuild_replaces_previous_index():
    indexer = Indexer(verbose=False)
    first = indexer.build(SCENARIO)
    second = indexer.build(["Brown3400001970"])
    assert first is not second
    assert indexer.get_postings("surname", "S") == []
    assert indexer.get_postings("surname", "B") == [0]
    assert indexer.get_postings("year", "1970") == [0]
    # the old snapshot is left intact
    assert first.surname["S"] == [0, 2]


def test_unknown_field_rejected():
    idx = IndexSet.empty()
    with pytest.raises(ValueError):
        idx.postings("name", "S")


def test_build_logs_summary(capsys):
    Indexer().build(SCENARIO)
    out = capsys.readouterr().out
    assert "[Indexer] Built index: 3 records" in out
