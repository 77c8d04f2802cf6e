"""
One-button runner: random search bench with every logger attached,
results written to a JSONL file plus a printed attainment summary.
"""

from __future__ import annotations
import argparse

from benches.runners.random_search import run_random_search
from evalwatch.sinks import JSONLSink


def run_all(out_path: str = "results/random_search.jsonl", runs: int = 5, budget: int = 200):
    sink = JSONLSink(out_path)
    out = run_random_search(runs=runs, budget=budget, sink=sink)
    eah = out["eah"]
    n_err, n_eval = eah.size
    print("=== random search attainment (EAH) ===")
    for e in range(n_err):
        lo, hi = eah.error_range.bounds(e)
        print(f"error <= {hi:10.3g}: {eah.fraction(e, n_eval - 1):.2f}")
    return out


def main():
    parser = argparse.ArgumentParser()
    parser.add_argument("--out", default="results/random_search.jsonl")
    parser.add_argument("--runs", type=int, default=5)
    parser.add_argument("--budget", type=int, default=200)
    args = parser.parse_args()
    run_all(args.out, args.runs, args.budget)


if __name__ == "__main__":
    main()
