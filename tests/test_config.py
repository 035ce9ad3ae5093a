import json

import pytest
from pydantic import ValidationError

from pulsemeter.config import Settings, load_settings


def test_defaults():
    s = Settings()
    assert s.thresholds.band == (2.0, 3.0)
    assert s.smoothing.kernel_size == 15
    assert s.acceptance.ignore_count == 0


def test_from_env(monkeypatch):
    monkeypatch.setenv("PULSEMETER_THRESHOLDS__MAX", "4.5")
    monkeypatch.setenv("PULSEMETER_ACQUISITION__SAMPLE_RATE", "250")
    s = Settings.from_env()
    assert s.thresholds.max == 4.5
    assert s.acquisition.sample_rate == 250.0


def test_inverted_thresholds_rejected():
    with pytest.raises(ValidationError):
        Settings.model_validate({"thresholds": {"min": 3.0, "max": 2.0}})


def test_negative_ignore_count_rejected():
    with pytest.raises(ValidationError):
        Settings.model_validate({"acceptance": {"ignore_count": -1}})


def test_load_settings_json(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps({"smoothing": {"kernel_size": 7}, "thresholds": {"min": 1.0, "max": 1.5}}))
    s = load_settings(p)
    assert s.smoothing.kernel_size == 7
    assert s.thresholds.band == (1.0, 1.5)


def test_load_settings_requires_mapping(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text("[1, 2]")
    with pytest.raises(TypeError):
        load_settings(p)


try:
    import yaml  # type: ignore
except Exception:  # pragma: no cover
    yaml = None


@pytest.mark.skipif(yaml is None, reason="PyYAML not installed")
def test_load_settings_yaml(tmp_path):
    p = tmp_path / "cfg.yaml"
    p.write_text("acceptance:\n  frequency_min: 45\n  frequency_max: 55\nderivative:\n  W: 9\n")
    s = load_settings(p)
    assert s.acceptance.frequency_min == 45.0
    assert s.derivative.W == 9
