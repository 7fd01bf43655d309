"""Tests for the command-line estimate"""

from src.scripts.estimate import main


def test_default_estimate(capsys, monkeypatch):
    monkeypatch.delenv("QUOTE_CURRENCY", raising=False)

    assert main([]) == 0

    out = capsys.readouterr().out
    assert "Monthly cost : $20" in out
    assert "Annual cost  : $242" in out
    assert "Enhanced property limits" in out
    assert "[WARN]" not in out


def test_unknown_location_warns(capsys):
    assert main(["--location", "zz"]) == 0

    out = capsys.readouterr().out
    assert "Annual cost  : $210" in out
    assert "[WARN] Unknown location 'ZZ'" in out


def test_compare_tables(capsys):
    assert main(["--compare", "--coverage_tier", "premium"]) == 0

    out = capsys.readouterr().out
    assert "Price by coverage tier:" in out
    assert "Features by coverage tier:" in out
    assert "Identity Theft Protection" in out
    assert "338" in out


def test_invalid_value_reports_error(capsys):
    assert main(["--property_value", "0"]) == 2

    out = capsys.readouterr().out
    assert out.startswith("[ERROR] property_value must be positive")
