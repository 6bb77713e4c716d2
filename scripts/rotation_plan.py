#!/usr/bin/env python3
"""Rank candidate crops for a rotation plan file."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
from scripts import ensure_repo_root_on_path

ROOT = ensure_repo_root_on_path()

import pandas as pd

from rotation_engine.config import get_config, load_config
from rotation_engine.context import STRATEGY_FACTORIES
from rotation_engine.exceptions import RotationError
from rotation_engine.rotation_service import RotationService
from rotation_engine.utils import load_data

CSV_COLUMNS = ["crop", "cropName", "score", "reason", "expectedYield"]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Generate crop rotation recommendations")
    parser.add_argument("plan", nargs="?", type=Path, help="Plan file (JSON or YAML)")
    parser.add_argument(
        "--strategy",
        choices=sorted(STRATEGY_FACTORIES),
        help="Scoring strategy, defaults to the plan's rotationStrategy",
    )
    parser.add_argument("--limit", type=int, help="Number of recommendations to keep")
    parser.add_argument("--format", choices=["json", "csv"], default="json")
    parser.add_argument("--output", type=Path, help="Optional path to write results")
    parser.add_argument("--config", type=Path, help="Settings file overriding defaults")
    parser.add_argument(
        "--list-strategies", action="store_true", help="List available strategies and exit"
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else get_config()
    except RotationError as err:
        print(f"error: {err}", file=sys.stderr)
        return 2
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config["log_level"],
        format="%(levelname)s %(name)s: %(message)s",
    )
    service = RotationService(config=config)

    if args.list_strategies:
        text = json.dumps(service.list_strategies(), indent=2)
    else:
        if args.plan is None:
            parser.error("a plan file is required unless --list-strategies is given")
        try:
            record = load_data(args.plan)
            if not isinstance(record, dict):
                raise ValueError(f"{args.plan} must contain a plan mapping")
            plan = service.plan_from_record(record)
            key = args.strategy or record.get("rotationStrategy") or record.get("rotation_strategy")
            recommendations = service.generate_recommendations(plan, key, limit=args.limit)
        except (RotationError, OSError, ValueError) as err:
            print(f"error: {err}", file=sys.stderr)
            return 2

        rows = [rec.to_dict() for rec in recommendations]
        if args.format == "csv":
            text = pd.DataFrame(rows, columns=CSV_COLUMNS).to_csv(index=False)
        else:
            text = json.dumps(rows, indent=2)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text)
    else:
        print(text)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
