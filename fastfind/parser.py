import random
import ftfy


class Parser:
    """
    Corpus loader for line-per-record text files.
    Uses ftfy.fix_encoding to repair mojibake in names (e.g. "Ã‡elik" -> "Çelik").
    Everything else (width, HTML entities, quotes, Unicode normalization) is
    kept as-is: records are opaque and keys are read at fixed offsets.

    What it does:
    - One line in the file -> one record, trailing newline stripped
    - Blank lines are kept as "" so record positions equal line numbers
      (the indexer skips them)
    - No tokenization: records stay opaque strings

    Methods:
        load_lines(path, limit=None) -> list[str]
        iter_lines(path, limit=None) -> Iterator[str]
    """

    def __init__(self, fix_encoding: bool = True, verbose: bool = True):
        self.fix_encoding = fix_encoding
        self.verbose = verbose

    def parse_line(self, line: str) -> str:
        """
        Normalize one raw line into a record.
        Only the line terminator is removed; inner whitespace is significant.
        """
        line = line.rstrip("\r\n")
        if self.fix_encoding and line:
            line = ftfy.fix_encoding(line)
        return line

    def iter_lines(self, path: str, limit: int | None = None):
        """
        Stream records from a text file without accumulating them.

        Yields:
            str (possibly "")
        """
        with open(path, "r", encoding="utf-8", errors="ignore") as f:
            for i, line in enumerate(f):
                if limit is not None and i >= limit:
                    break
                yield self.parse_line(line)

    def load_lines(self, path: str, limit: int | None = None) -> list[str]:
        lines = list(self.iter_lines(path, limit=limit))
        if self.verbose:
            print(f"[Parser] Loaded {len(lines)} lines from {path}")
        return lines


SURNAMES = [
    "Yilmaz", "Kaya", "Demir", "Sahin", "Celik", "Yildiz", "Yildirim",
    "Ozturk", "Aydin", "Ozdemir", "Arslan", "Dogan", "Kilic", "Aslan",
    "Smith", "Jones",
]


def make_synthetic_lines(n: int, seed: int = 1234) -> list[str]:
    """
    Generate `n` records shaped like the real corpus:
        <surname><province:2><serial:4><year:4><suffix>
    so that the fixed offsets land on province and year.
    """
    rng = random.Random(seed)
    out = []
    for _ in range(n):
        name = rng.choice(SURNAMES)
        prov = rng.randint(1, 81)
        serial = rng.randint(0, 9999)
        year = rng.randint(1930, 2010)
        out.append(f"{name}{prov:02d}{serial:04d}{year}")
    return out


if __name__ == "__main__":
    from fastfind.paths import SAMPLE_CORPUS_PATH

    parser = Parser()
    for i, rec in enumerate(parser.load_lines(SAMPLE_CORPUS_PATH)):
        print(i, repr(rec))
