# scripts/smoke.py
import sys
from pathlib import Path

from gridbet.config import BacktestConfig
from gridbet.errors import InvalidResultCode, MalformedRound
from gridbet.grid import GRID_MATCH_COUNT
from gridbet.outcomes import result_code_to_outcome
from gridbet.rounds import load_round

def near(a, b, eps=1e-9):
    return abs(a - b) <= eps

def fail(msg):
    print(f"[SMOKE FAIL] {msg}")
    sys.exit(1)

def warn(msg):
    print(f"[SMOKE WARN] {msg}")

def main():
    data_dir = BacktestConfig.from_env().data_dir
    files = sorted(Path(data_dir).glob("*.json"))
    if not files:
        fail(f"No round files in {data_dir}")

    bad = []
    finalized = 0
    for p in files:
        try:
            r = load_round(p)
        except MalformedRound as e:
            bad.append(str(e))
            continue

        # 1) Implied probabilities must be proper triples
        for i, t in enumerate(r.probabilities):
            if not near(sum(t), 1.0):
                bad.append(f"{r.date} match {i} probabilities sum to {sum(t):.6f}")

        # 2) Result characters must all resolve
        if r.result is not None:
            finalized += 1
            try:
                [result_code_to_outcome(c) for c in r.result]
            except InvalidResultCode as e:
                bad.append(f"{r.date}: {e}")

        # 3) Short rounds are scorable but worth knowing about
        if r.match_count < GRID_MATCH_COUNT:
            warn(f"{r.date} has only {r.match_count} matches; grid will have free cells")

    if bad:
        for b in bad:
            print(f"  - {b}")
        fail(f"{len(bad)} problem(s) across {len(files)} round files")

    print(f"[SMOKE OK] {len(files)} round files look sane ({finalized} finalized).")
    sys.exit(0)

if __name__ == "__main__":
    main()
