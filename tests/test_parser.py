# tests/test_parser.py
import os
import pytest

from fastfind.parser import Parser, make_synthetic_lines
from fastfind.extract import extract_keys
from fastfind.searcher import Searcher

DATA_PATH = os.path.join(os.path.dirname(__file__), os.pardir, "data", "sample.txt")


def test_file_exists():
    """Verify that sample.txt exists and is readable."""
    assert os.path.exists(DATA_PATH), f"{DATA_PATH} not found"
    with open(DATA_PATH, "r", encoding="utf8") as f:
        first_line = f.readline()
        assert first_line.strip(), "File is empty or unreadable"


def test_load_sample_keeps_positions():
    lines = Parser(verbose=False).load_lines(DATA_PATH)
    assert len(lines) == 11
    assert lines[0] == "Smith6700121990XX"
    assert lines[8] == ""          # blank line kept as an empty record
    assert lines[10] == "Ozturk 7"  # inner whitespace preserved
    assert all("\n" not in l for l in lines)


def test_limit(tmp_path):
    p = tmp_path / "c.txt"
    p.write_text("a1\nb2\nc3\n", encoding="utf-8")
    assert Parser(verbose=False).load_lines(str(p), limit=2) == ["a1", "b2"]


def test_crlf_and_missing_final_newline(tmp_path):
    p = tmp_path / "c.txt"
    p.write_bytes(b"Smith6700121990XX\r\nJones0601051985YY")
    assert Parser(verbose=False).load_lines(str(p)) == ["Smith6700121990XX", "Jones0601051985YY"]


def test_mojibake_repair(tmp_path):
    p = tmp_path / "c.txt"
    p.write_text("Ã¼nicode3400001990\n", encoding="utf-8")
    assert Parser(verbose=False).load_lines(str(p)) == ["ünicode3400001990"]
    assert Parser(fix_encoding=False, verbose=False).load_lines(str(p)) == ["Ã¼nicode3400001990"]


def test_iter_lines_streams(tmp_path):
    p = tmp_path / "c.txt"
    p.write_text("a1\nb2\n", encoding="utf-8")
    it = Parser(verbose=False).iter_lines(str(p))
    assert next(it) == "a1"
    assert next(it) == "b2"


def test_load_logs(capsys):
    Parser().load_lines(DATA_PATH)
    assert "[Parser] Loaded 11 lines" in capsys.readouterr().out


def test_synthetic_lines_follow_the_fixed_layout():
    lines = make_synthetic_lines(500, seed=3)
    assert len(lines) == 500
    assert lines == make_synthetic_lines(500, seed=3)
    for line in lines:
        s, p, y = extract_keys(line)
        assert s == line[0]
        assert 1 <= int(p) <= 81
        assert 1930 <= int(y) <= 2010


@pytest.mark.parametrize("raw", [
    "Ali６７001219901XX",      # fullwidth digits are not ASCII digits
    "Smith&amp;6700121990",    # HTML entities stay literal
    "O’Brien3400001990",       # curly quote
    "ﬁnn0600001985",           # ligature
])
def test_repair_leaves_valid_text_untouched(tmp_path, raw):
    p = tmp_path / "c.txt"
    p.write_text(raw + "\n", encoding="utf-8")
    assert Parser(verbose=False).load_lines(str(p)) == [raw]


def test_loaded_records_keep_their_keys(tmp_path):
    p = tmp_path / "c.txt"
    p.write_text("Ali６７001219901XX\nSmith&amp;6700121990\n", encoding="utf-8")
    s = Searcher(Parser(verbose=False).load_lines(str(p)), verbose=False)
    # first ASCII digit of record 0 is the "0" after the fullwidth pair
    assert s.search(province="67") == ["Smith&amp;6700121990"]
    assert s.search(province="00") == ["Ali６７001219901XX"]
