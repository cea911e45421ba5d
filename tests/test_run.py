import importlib.util
import sys
from pathlib import Path

import pandas as pd
import pytest

RUN_SCRIPT = Path(__file__).parent.parent / "scripts" / "run.py"


@pytest.fixture
def run_module():
    spec = importlib.util.spec_from_file_location("route_optimizer_run", RUN_SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _write_input(root: Path, settings: dict, paths: pd.DataFrame = None) -> Path:
    input_dir = root / "input"
    input_dir.mkdir()

    pd.DataFrame({
        "location_id": [1, 2, 3],
        "name": ["Depot", "Market Street", "Harbor"],
    }).to_csv(input_dir / "locations.csv", index=False)

    if paths is None:
        paths = pd.DataFrame({
            "from_location": [1, 2],
            "to_location": [2, 3],
            "distance": [10.0, 5.0],
            "traffic_factor": [2.0, 1.0],
        })
    paths.to_csv(input_dir / "paths.csv", index=False)

    pd.DataFrame({
        "location_id": [2],
        "window": ["09:00-12:00"],
    }).to_csv(input_dir / "delivery_windows.csv", index=False)

    pd.DataFrame({
        "key": list(settings.keys()),
        "value": list(settings.values()),
    }).to_csv(input_dir / "run_settings.csv", index=False)

    return input_dir


def _main(run_module, monkeypatch, *argv) -> int:
    monkeypatch.setattr(sys, "argv", ["run.py", *argv])
    return run_module.main()


def test_run_uses_workbook_settings(tmp_path: Path, run_module, monkeypatch):
    input_dir = _write_input(tmp_path, {"criterion": "cost", "apply_traffic": "false"})
    output = tmp_path / "out" / "routes.xlsx"

    assert _main(run_module, monkeypatch, "-i", str(input_dir), "-o", str(output)) == 0

    distances = pd.read_excel(output, sheet_name="distances")
    cost = distances[distances["run"] == "cost"].set_index("location_id")
    assert cost.loc[3, "distance"] == 37.5

    windowed = distances[distances["run"] == "delivery_windows"].set_index("location_id")
    assert not windowed.loc[2, "reachable"]


def test_command_line_overrides_workbook(tmp_path: Path, run_module, monkeypatch):
    input_dir = _write_input(tmp_path, {"criterion": "cost", "apply_traffic": "true", "start_location": "1"})
    output = tmp_path / "routes.xlsx"

    code = _main(
        run_module, monkeypatch,
        "-i", str(input_dir), "-o", str(output),
        "--criterion", "time", "--no-traffic", "--start", "3"
    )
    assert code == 0

    summary = pd.read_excel(output, sheet_name="summary").set_index("run")
    assert "time" in summary.index
    assert "cost" not in summary.index
    assert summary.loc["time", "start"] == 3

    distances = pd.read_excel(output, sheet_name="distances")
    time_run = distances[distances["run"] == "time"].set_index("location_id")
    assert time_run.loc[1, "distance"] == 22.5


def test_strict_flag_rejects_unknown_workbook_criterion(tmp_path: Path, run_module, monkeypatch):
    input_dir = _write_input(tmp_path, {"criterion": "cots"})
    output = tmp_path / "routes.xlsx"

    code = _main(run_module, monkeypatch, "-i", str(input_dir), "-o", str(output), "--strict-criterion")

    assert code == 1
    assert not output.exists()


def test_unknown_workbook_criterion_runs_as_plain_without_strict(tmp_path: Path, run_module, monkeypatch):
    input_dir = _write_input(tmp_path, {"criterion": "cots", "apply_traffic": "false"})
    output = tmp_path / "routes.xlsx"

    assert _main(run_module, monkeypatch, "-i", str(input_dir), "-o", str(output)) == 0

    summary = pd.read_excel(output, sheet_name="summary").set_index("run")
    assert summary.loc["plain", "max_distance"] == 15.0


def test_missing_input_exits_with_error(tmp_path: Path, run_module, monkeypatch):
    output = tmp_path / "routes.xlsx"
    assert _main(run_module, monkeypatch, "-i", str(tmp_path / "nope"), "-o", str(output)) == 1


def test_validation_failure_exits_with_error(tmp_path: Path, run_module, monkeypatch):
    paths = pd.DataFrame({
        "from_location": [1],
        "to_location": [9],
        "distance": [4.0],
        "traffic_factor": [1.0],
    })
    input_dir = _write_input(tmp_path, {"criterion": "plain"}, paths=paths)
    output = tmp_path / "routes.xlsx"

    assert _main(run_module, monkeypatch, "-i", str(input_dir), "-o", str(output)) == 1
    assert not output.exists()
