from pathlib import Path
import json
import subprocess
import sys

SCRIPT = Path(__file__).resolve().parents[1] / "scripts/rotation_plan.py"

PLAN = {
    "currentCropId": 1,
    "rotationStrategy": "nutrient",
    "soil_nitrogen": 20,
    "soil_phosphorus": 15,
    "fieldSize": 2,
}


def _write_plan(tmp_path: Path) -> Path:
    path = tmp_path / "plan.json"
    path.write_text(json.dumps(PLAN))
    return path


def test_rotation_plan_stdout(tmp_path: Path):
    result = subprocess.run(
        [sys.executable, str(SCRIPT), str(_write_plan(tmp_path))],
        capture_output=True,
        text=True,
        check=True,
    )
    data = json.loads(result.stdout)
    assert len(data) == 5
    assert data[0]["cropName"] == "Soybean"
    assert data[0]["expectedYield"] == 4


def test_rotation_plan_csv_output(tmp_path: Path):
    out_file = tmp_path / "out" / "plan.csv"
    subprocess.run(
        [
            sys.executable,
            str(SCRIPT),
            str(_write_plan(tmp_path)),
            "--strategy",
            "pest",
            "--limit",
            "3",
            "--format",
            "csv",
            "--output",
            str(out_file),
        ],
        check=True,
    )
    lines = out_file.read_text().splitlines()
    assert lines[0] == "crop,cropName,score,reason,expectedYield"
    assert len(lines) == 4


def test_rotation_plan_yaml(tmp_path: Path):
    path = tmp_path / "plan.yaml"
    path.write_text(
        "availableCrops:\n"
        "  - name: Summer Squash\n"
        "    season: summer\n"
        "    growthDuration: 60\n"
        "  - name: Winter Rye\n"
        "    season: winter\n"
        "targetSeason: summer\n"
    )
    result = subprocess.run(
        [sys.executable, str(SCRIPT), str(path), "--strategy", "seasonal"],
        capture_output=True,
        text=True,
        check=True,
    )
    data = json.loads(result.stdout)
    assert [row["cropName"] for row in data] == ["Summer Squash", "Winter Rye"]
    assert "Suitable for summer" in data[0]["reason"]


def test_list_strategies():
    result = subprocess.run(
        [sys.executable, str(SCRIPT), "--list-strategies"],
        capture_output=True,
        text=True,
        check=True,
    )
    keys = [row["key"] for row in json.loads(result.stdout)]
    assert keys == ["nutrient", "pest", "seasonal"]


def test_unknown_current_crop(tmp_path: Path):
    path = tmp_path / "plan.json"
    path.write_text(json.dumps({"currentCropId": 404}))
    result = subprocess.run(
        [sys.executable, str(SCRIPT), str(path)],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 2
    assert "Current crop not found: 404" in result.stderr
