"""Tests for configuration validation."""

from kts_analyzer import config


def test_missing_boundary_is_reported(monkeypatch):
    monkeypatch.setattr(config, "KTS_PROXY_URL", None)
    monkeypatch.setattr(config, "ANTHROPIC_API_KEY", None)
    monkeypatch.setattr(config, "GOOGLE_API_KEY", None)

    issues = config.validate_config()

    assert any("No classification boundary configured" in issue for issue in issues)


def test_valid_config_has_no_issues(monkeypatch):
    monkeypatch.setattr(config, "KTS_PROXY_URL", "http://localhost:3001/api/analyze")
    monkeypatch.setattr(config, "PLOT_BACKGROUND_PATH", None)
    monkeypatch.setattr(config, "TEXT_CHAR_LIMIT", 12000)
    monkeypatch.setattr(config, "PLOT_PIXEL_RATIO", 2)

    assert config.validate_config() == []


def test_missing_background_is_reported(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "KTS_PROXY_URL", "http://proxy")
    monkeypatch.setattr(config, "PLOT_BACKGROUND_PATH", tmp_path / "nope.png")
    monkeypatch.setattr(config, "TEXT_CHAR_LIMIT", 12000)
    monkeypatch.setattr(config, "PLOT_PIXEL_RATIO", 2)

    issues = config.validate_config()

    assert len(issues) == 1
    assert "Plot background image not found" in issues[0]


def test_summary_hides_keys(monkeypatch):
    monkeypatch.setattr(config, "ANTHROPIC_API_KEY", "sk-secret")

    summary = config.get_config_summary()

    assert "sk-secret" not in summary
    assert "✓ Set" in summary
