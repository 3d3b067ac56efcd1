"""Tests for the kts-analyze command line script."""

import json

import pytest
from PIL import Image

from kts_analyzer.scripts import analyze_text


@pytest.fixture
def cli_provider(monkeypatch, make_service):
    """Route the script to a FakeProvider and keep its logging setup out of the way."""
    def _install(**kwargs):
        _, provider = make_service(**kwargs)
        monkeypatch.setattr(analyze_text, "create_provider", lambda default_model=None: provider)
        monkeypatch.setattr(analyze_text, "setup_logging", lambda level=None: None)
        return provider
    return _install


def test_text_argument_prints_json(cli_provider, capsys):
    provider = cli_provider()

    assert analyze_text.main(["--text", "We relied on the data."]) == 0

    output = json.loads(capsys.readouterr().out)
    assert output["style"] == "Focused"
    assert output["uncertainty_score"] == -6.5
    assert provider.requests[0].messages[0]["content"].endswith("We relied on the data.")


def test_file_argument_with_outputs(cli_provider, tmp_path, capsys):
    cli_provider()
    notes = tmp_path / "notes.txt"
    notes.write_text("Let's just try it and see.", encoding="utf-8")
    plot_path = tmp_path / "plot.png"
    report_path = tmp_path / "report.md"

    code = analyze_text.main([str(notes), "--plot", str(plot_path), "--markdown", str(report_path)])

    assert code == 0
    with Image.open(plot_path) as image:
        assert image.size == (800, 800)
    report = report_path.read_text(encoding="utf-8")
    assert "- **Source:** notes.txt" in report
    assert "- **Provider:** Fake" in report


def test_sample_argument(cli_provider):
    provider = cli_provider()

    assert analyze_text.main(["--sample", "Operations report"]) == 0
    assert "Q3 operational efficiency" in provider.requests[0].messages[0]["content"]


def test_unknown_sample_fails(cli_provider, capsys):
    cli_provider()

    assert analyze_text.main(["--sample", "Nope"]) == 1
    assert "Unknown sample 'Nope'" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [[], ["--text", "a", "--sample", "Operations report"]])
def test_exactly_one_input_is_required(cli_provider, capsys, argv):
    provider = cli_provider()

    assert analyze_text.main(argv) == 1
    assert "Provide exactly one of" in capsys.readouterr().err
    assert provider.requests == []


def test_unsupported_file_fails(cli_provider, tmp_path, capsys):
    cli_provider()
    path = tmp_path / "image.xyz"
    path.write_bytes(b"\x00")

    assert analyze_text.main([str(path)]) == 1
    assert "Unsupported file type: .xyz" in capsys.readouterr().err


def test_remote_error_is_reported(cli_provider, capsys):
    cli_provider(response={"error": "rate limited"})

    assert analyze_text.main(["--text", "hello"]) == 1
    assert "rate limited" in capsys.readouterr().err


def test_malformed_response_is_reported(cli_provider, capsys):
    cli_provider(response={"content": [{"type": "text", "text": 5}]})

    assert analyze_text.main(["--text", "hello"]) == 1
    assert "Analysis failed. Please try again." in capsys.readouterr().err
