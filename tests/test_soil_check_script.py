from pathlib import Path
import json
import subprocess
import sys

SCRIPT = Path(__file__).resolve().parents[1] / "scripts/soil_check.py"


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, str(SCRIPT), *args],
        capture_output=True,
        text=True,
    )


def test_soil_check_default_threshold():
    result = _run("45")
    assert result.returncode == 0
    assert json.loads(result.stdout) == {"acidity": 45.0, "soilHP": 50.0, "match": True}


def test_soil_check_threshold():
    result = _run("55", "--threshold", "60")
    assert json.loads(result.stdout)["match"] is True
    result = _run("55", "--threshold", "50")
    assert json.loads(result.stdout)["match"] is False


def test_soil_check_invalid():
    result = _run("acidic")
    assert result.returncode == 2
    assert "Invalid acidity value" in result.stderr
    assert result.stdout == ""
