#!/usr/bin/env python3
"""Stage layout structural diagnostics for specific seeds.

Usage:
  python scripts/diagnose_seeds.py 292372 730727
  python scripts/diagnose_seeds.py --render --grid-size 30 --room-count 12 42

If no seeds are provided as CLI args, a default list is used. Other settings
come from STAGEGEN_* environment variables / .env (see StageConfig.from_env).
Exits with non-zero status if structural issues are detected.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List

from colorama import Fore, Style
from colorama import init as color_init

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from stagegen import StageConfig, generate_layout  # noqa: E402 import after path fix
from stagegen.debug_checks import analyze, render_lines  # noqa: E402 import after path fix

DEFAULT_SEEDS = [292372, 730727]

COLORS = {
    "S": Fore.GREEN,
    "E": Fore.RED,
    "$": Fore.YELLOW,
    "B": Fore.MAGENTA,
    "b": Fore.MAGENTA,
    "D": Fore.CYAN,
    "W": Fore.WHITE + Style.BRIGHT,
    "#": Fore.BLUE,
    "@": Fore.GREEN + Style.BRIGHT,
}


def colorize(line: str) -> str:
    return "".join(COLORS.get(ch, "") + ch + Style.RESET_ALL if ch in COLORS else ch for ch in line)


def run_for_seed(seed: int, overrides: dict) -> dict:
    config = StageConfig.from_env(seed=seed, **overrides)
    layout = generate_layout(config)
    if layout is None:
        return {"seed": seed, "issues": {"generation_failed": 1}, "ok": False, "layout": None}
    res = analyze(layout)
    issues = {
        "overlapping_rooms": len(res["overlapping_rooms"]),
        "broken_hallways": len(res["broken_hallways"]),
        "out_of_bounds_cells": len(res["out_of_bounds_cells"]),
        "unreachable_rooms": len(res["unreachable_rooms"]),
        "exit_door_mismatch": int(res["exit_door_count"] != 1),
    }
    return {
        "seed": seed,
        "rooms": len(layout.rooms),
        "hallways": len(layout.hallways),
        "issues": issues,
        "ok": all(v == 0 for v in issues.values()),
        "layout": layout,
    }


def main(argv: List[str]) -> int:
    parser = argparse.ArgumentParser(description="Diagnose generated stage layouts for given seeds.")
    parser.add_argument("seeds", nargs="*", type=int)
    parser.add_argument("--render", action="store_true", help="print an ASCII map per seed")
    parser.add_argument("--grid-size", type=int)
    parser.add_argument("--room-count", type=int)
    args = parser.parse_args(argv)
    overrides = {}
    if args.grid_size is not None:
        overrides["grid_size"] = args.grid_size
    if args.room_count is not None:
        overrides["room_count"] = args.room_count
    seeds = args.seeds or DEFAULT_SEEDS
    results = [run_for_seed(s, overrides) for s in seeds]
    if args.render:
        color_init(strip=not sys.stdout.isatty())
        for r in results:
            if r["layout"] is None:
                continue
            print(f"seed={r['seed']}")
            for line in render_lines(r["layout"]):
                print(colorize(line))
    print(json.dumps({"results": [{k: v for k, v in r.items() if k != "layout"} for r in results]}, indent=2))
    # Non-zero exit if any failure
    if not all(r["ok"] for r in results):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
