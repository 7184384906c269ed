from __future__ import annotations

from typer.testing import CliRunner

from deckcore.cli.main import app
from deckcore.cli.render import format_number

runner = CliRunner()


def test_format_number_trims_trailing_zeros() -> None:
    assert format_number(1.5) == "1.5"
    assert format_number(2.0) == "2"
    assert format_number(-0.0001) == "0"
    assert format_number(0.12345) == "0.123"


def test_layout_command_lists_every_card() -> None:
    result = runner.invoke(app, ["layout", "fan", "--cards", "5"])

    assert result.exit_code == 0, result.output
    for idx in range(5):
        assert f"c{idx}" in result.output


def test_layout_command_rejects_custom_mode() -> None:
    result = runner.invoke(app, ["layout", "custom"])

    assert result.exit_code != 0


def test_shuffle_command_matches_reference_order() -> None:
    result = runner.invoke(app, ["shuffle", "--cards", "4", "--seed", "1", "--iterations", "1"])

    assert result.exit_code == 0, result.output
    rows = [line.split() for line in result.output.splitlines()]
    order = [row[-1] for row in rows if len(row) == 2 and row[0].isdigit()]
    assert order == ["c2", "c1", "c3", "c0"]


def test_fit_command_reports_scene() -> None:
    result = runner.invoke(app, ["fit", "ring", "--cards", "6", "--width", "360", "--height", "360"])

    assert result.exit_code == 0, result.output
    assert "Fit scale" in result.output
