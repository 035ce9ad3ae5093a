import json

import matplotlib

matplotlib.use("Agg")

import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
from typer.testing import CliRunner  # noqa: E402

from pulsemeter.cli import app  # noqa: E402

runner = CliRunner()


def write_capture(tmp_path, square_wave, name="capture.csv"):
    path = tmp_path / name
    np.savetxt(path, square_wave(), delimiter=",")
    return path


def write_config(tmp_path, **overrides):
    cfg = {
        "smoothing": {"enabled": True, "kernel_size": 3},
        "thresholds": {"min": 2.0, "max": 3.0},
        "acquisition": {"sample_rate": 1000.0},
        "acceptance": {
            "frequency_min": 49.0,
            "frequency_max": 51.0,
            "duty_min": 0.2,
            "duty_max": 0.3,
            "ignore_count": 0,
        },
    }
    cfg.update(overrides)
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps(cfg))
    return path


def test_analyze_accepts(tmp_path, square_wave):
    capture = write_capture(tmp_path, square_wave)
    cfg = write_config(tmp_path)
    out = tmp_path / "cycles.csv"
    result = runner.invoke(app, ["--config", str(cfg), "analyze", str(capture), "--output", str(out)])
    assert result.exit_code == 0, result.output
    assert "cycles=9" in result.stdout
    assert "passed=True" in result.stdout
    df = pd.read_csv(out)
    np.testing.assert_allclose(df["frequency"], 50.0)


def test_analyze_rejects_with_exit_code(tmp_path, square_wave):
    capture = write_capture(tmp_path, square_wave)
    cfg = write_config(tmp_path)
    result = runner.invoke(
        app, ["--config", str(cfg), "--set", "acceptance.frequency_min=60", "analyze", str(capture)]
    )
    assert result.exit_code == 1
    assert "frequency_ok=False" in result.stdout


def test_analyze_reports_pipeline_failure(tmp_path):
    capture = tmp_path / "flat.csv"
    np.savetxt(capture, np.zeros(50), delimiter=",")
    result = runner.invoke(app, ["--set", "smoothing.enabled=false", "analyze", str(capture)])
    assert result.exit_code == 2
    assert "EmptyEdgesError" in result.output


def test_edges_command(tmp_path, square_wave):
    capture = write_capture(tmp_path, square_wave)
    result = runner.invoke(app, ["edges", str(capture), "--no-smooth", "--min", "2", "--max", "3"])
    assert result.exit_code == 0, result.output
    assert "rising: 3 23 43" in result.stdout
    assert "edges (rising first): 3 8 23 28" in result.stdout


def test_smooth_command(tmp_path):
    capture = tmp_path / "capture.csv"
    np.savetxt(capture, [0.0, 0.0, 3.0, 0.0, 0.0], delimiter=",")
    out = tmp_path / "smoothed.npy"
    result = runner.invoke(app, ["smooth", str(capture), "--kernel", "3", "--output", str(out)])
    assert result.exit_code == 0, result.output
    np.testing.assert_allclose(np.load(out), [0.0, 1.0, 1.0, 1.0, 0.0])


def test_derivative_command(tmp_path):
    capture = tmp_path / "ramp.csv"
    np.savetxt(capture, 2.0 * np.arange(10.0), delimiter=",")
    out = tmp_path / "slope.npy"
    result = runner.invoke(
        app,
        ["--set", "acquisition.sample_rate=5", "derivative", str(capture), "-w", "3", "-o", str(out)],
    )
    assert result.exit_code == 0, result.output
    np.testing.assert_allclose(np.load(out), 10.0)


def test_plot_command(tmp_path, square_wave):
    capture = write_capture(tmp_path, square_wave)
    out = tmp_path / "edges.png"
    result = runner.invoke(app, ["--set", "smoothing.kernel_size=3", "plot", str(capture), "--save", str(out)])
    assert result.exit_code == 0, result.output
    assert out.exists()


def test_waveform_from_config(tmp_path, square_wave):
    write_capture(tmp_path, square_wave, name="default.csv")
    cfg = write_config(tmp_path, dataset={"root": str(tmp_path), "waveform": "default.csv"})
    result = runner.invoke(app, ["--config", str(cfg), "analyze"])
    assert result.exit_code == 0, result.output


def test_unknown_override_key(tmp_path, square_wave):
    capture = write_capture(tmp_path, square_wave)
    result = runner.invoke(app, ["--set", "thresholds.middle=2", "analyze", str(capture)])
    assert result.exit_code != 0
