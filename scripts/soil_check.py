#!/usr/bin/env python3
"""Check an acidity reading against the soil threshold."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
from scripts import ensure_repo_root_on_path

ROOT = ensure_repo_root_on_path()

from rotation_engine.exceptions import RotationError
from rotation_engine.soil_matcher import check_acidity, set_soil


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Match an acidity reading to the soil threshold")
    parser.add_argument("acidity", help="Acidity reading to compare")
    parser.add_argument("--threshold", help="Soil threshold (hp) to apply first")
    args = parser.parse_args(argv)

    try:
        if args.threshold is not None:
            set_soil(args.threshold)
        result = check_acidity(args.acidity)
    except RotationError as err:
        print(f"error: {err}", file=sys.stderr)
        return 2

    print(json.dumps(result.to_dict()))
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
