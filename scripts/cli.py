"""Single entry point for the crop rotation scripts.

Usage::

    python -m scripts <command> [args]

Each command maps to a script module exposing ``main(argv) -> int``. The
exit status of the script is returned unchanged.
"""

from __future__ import annotations

import argparse
import importlib

COMMANDS: dict[str, str] = {
    "rotation-plan": "scripts.rotation_plan",
    "soil-check": "scripts.soil_check",
}


def _summary(module_name: str) -> str:
    """Return the first docstring line of ``module_name``."""
    doc = importlib.import_module(module_name).__doc__ or ""
    return doc.strip().splitlines()[0] if doc.strip() else ""


def build_parser() -> argparse.ArgumentParser:
    epilog = "commands:\n" + "\n".join(
        f"  {name:<15}{_summary(module)}" for name, module in COMMANDS.items()
    )
    parser = argparse.ArgumentParser(
        prog="python -m scripts",
        description="Crop rotation utilities",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("command", choices=sorted(COMMANDS))
    parser.add_argument("args", nargs=argparse.REMAINDER)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run ``command`` and return its exit status."""
    ns = build_parser().parse_args(argv)
    module = importlib.import_module(COMMANDS[ns.command])
    return module.main(ns.args)


if __name__ == "__main__":  # pragma: no cover - manual execution
    raise SystemExit(main())
