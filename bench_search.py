"""
bench_search.py

Quick-and-dirty benchmark for the in-memory Searcher.
Measures index build time and query latency on random criteria.

By default, a synthetic corpus is generated and criteria are sampled from
the keys actually present in the index (1-3 fields per query).
You can also pass a corpus file with one record per line.

Run examples:
  python bench_search.py
  python bench_search.py --corpus data/corpus.txt --num-queries 500
  PROFKIT=1 python bench_search.py --size 1000000
"""

import argparse
import random
import time
import statistics

from fastfind.parser import Parser, make_synthetic_lines
from fastfind.searcher import Searcher
from fastfind.extract import FIELDS
import profkit


def sample_criteria(index, n=100, max_fields=3, seed=1234):
    rng = random.Random(seed)
    keys = {f: list(index.field(f).keys()) for f in FIELDS}
    usable = [f for f in FIELDS if keys[f]]
    if not usable:
        return []
    queries = []
    for _ in range(n):
        k = rng.randint(1, min(max_fields, len(usable)))
        chosen = rng.sample(usable, k)
        queries.append({f: rng.choice(keys[f]) for f in chosen})
    return queries


def bench(searcher, queries):
    times = []
    hits = 0
    for q in queries:
        t0 = time.perf_counter()
        res = searcher.search(q)
        dt = (time.perf_counter() - t0) * 1000  # ms
        times.append(dt)
        hits += len(res)
    return {
        "n": len(times),
        "hits": hits,
        "avg_ms": statistics.mean(times),
        "p50_ms": statistics.median(times),
        "p95_ms": statistics.quantiles(times, n=20)[18] if len(times) >= 20 else max(times),
        "max_ms": max(times),
    }


def main(args):
    if args.corpus:
        lines = Parser(fix_encoding=not args.raw).load_lines(args.corpus, limit=args.limit)
    else:
        lines = make_synthetic_lines(args.size, seed=args.seed)
        print(f"[Bench] Generated {len(lines)} synthetic records")

    t0 = time.perf_counter()
    s = Searcher(lines)
    build_ms = (time.perf_counter() - t0) * 1000

    queries = sample_criteria(s.index, n=args.num_queries, max_fields=args.max_fields, seed=args.seed)
    if not queries:
        print("[Bench] Index is empty; nothing to query.")
        return

    stats = bench(s, queries)
    print(f"Build={build_ms:.2f}ms  Records={s.size}  Queries={stats['n']}  Hits={stats['hits']}  "
          f"avg={stats['avg_ms']:.3f}ms  p50={stats['p50_ms']:.3f}ms  "
          f"p95={stats['p95_ms']:.3f}ms  max={stats['max_ms']:.3f}ms")

    if profkit.ENABLED:
        for name, value in profkit.report().items():
            print(f"  {name:<20} {value:.2f}")


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--corpus", type=str, default=None, help="file with one record per line")
    ap.add_argument("--limit", type=int, default=None, help="read at most this many lines from --corpus")
    ap.add_argument("--raw", action="store_true", help="skip ftfy repair when reading --corpus")
    ap.add_argument("--size", type=int, default=200000, help="synthetic corpus size if --corpus not provided")
    ap.add_argument("--num-queries", type=int, default=200, help="number of sampled criteria")
    ap.add_argument("--max-fields", type=int, default=3, help="max fields per sampled query")
    ap.add_argument("--seed", type=int, default=1234)
    args = ap.parse_args()
    main(args)
