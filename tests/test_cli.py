import json
import subprocess
import sys
from pathlib import Path

import pytest

from scripts import cli

ROOT = Path(__file__).resolve().parents[1]


def test_cli_dispatches_soil_check():
    result = subprocess.run(
        [sys.executable, "-m", "scripts", "soil-check", "40"],
        capture_output=True,
        text=True,
        check=True,
        cwd=ROOT,
    )
    assert json.loads(result.stdout)["match"] is True


def test_cli_forwards_exit_status():
    result = subprocess.run(
        [sys.executable, "-m", "scripts", "soil-check", "acidic"],
        capture_output=True,
        text=True,
        cwd=ROOT,
    )
    assert result.returncode == 2
    assert "Invalid acidity value" in result.stderr


def test_main_returns_script_status(capsys):
    assert cli.main(["soil-check", "45", "--threshold", "50"]) == 0
    assert json.loads(capsys.readouterr().out)["match"] is True
    assert cli.main(["soil-check", "nope"]) == 2


def test_help_lists_commands(capsys):
    with pytest.raises(SystemExit):
        cli.main(["--help"])
    out = capsys.readouterr().out
    assert "rotation-plan" in out
    assert "Rank candidate crops for a rotation plan file." in out
    assert "Check an acidity reading against the soil threshold." in out


def test_unknown_command():
    with pytest.raises(SystemExit):
        cli.main(["harvest"])
