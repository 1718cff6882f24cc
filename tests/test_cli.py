import json

import pytest
from typer.testing import CliRunner

from colorsense.cli import main as cli_main
from colorsense.core.errors import ConfigurationError
from colorsense.core.services.color_resolver import ColorResolver

from tests.helpers import VALID_VERDICT, VALIDATION_MARKER, FakeGenerator, always_valid, color_json

runner = CliRunner()

HEXES = {"red": "#FF0000", "navy": "#000080", "teal": "#008080"}


@pytest.fixture
def fake_resolver(settings, monkeypatch):
    def resolve(phrase):
        if phrase not in HEXES:
            return '{"error": "not a color"}'
        return color_json(phrase.title(), HEXES[phrase])

    generator = FakeGenerator(always_valid(resolve))
    monkeypatch.setattr(cli_main, "build_resolver", lambda _settings: ColorResolver(settings, generator=generator))
    return generator


def test_lookup_json(fake_resolver):
    result = runner.invoke(cli_main.app, ["lookup", "red", "--json"])
    assert result.exit_code == 0, result.output
    assert '"hexCode": "#FF0000"' in result.output


def test_lookup_table_output(fake_resolver):
    result = runner.invoke(cli_main.app, ["lookup", "teal"])
    assert result.exit_code == 0, result.output
    assert "#008080" in result.output


def test_lookup_domain_error_exits_1(fake_resolver):
    result = runner.invoke(cli_main.app, ["lookup", "spreadsheet"])
    assert result.exit_code == 1
    assert "not a color" in result.output


def test_batch_parses_text_and_writes_output(fake_resolver, tmp_path):
    out = tmp_path / "colors.json"

    result = runner.invoke(cli_main.app, ["batch", "Blues:\nnavy, teal\nred", "--output", str(out)])

    assert result.exit_code == 0, result.output
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert [(r["originalInput"], r["category"]) for r in payload["results"]] == [
        ("navy", "Blues"),
        ("teal", "Blues"),
        ("red", "Blues"),
    ]


def test_batch_reads_file(fake_resolver, tmp_path):
    source = tmp_path / "input.txt"
    source.write_text("* red * navy", encoding="utf-8")

    result = runner.invoke(cli_main.app, ["batch", "--file", str(source), "--json"])

    assert result.exit_code == 0, result.output
    assert '"originalInput": "navy"' in result.output


def test_suggest_renders_categories(settings, monkeypatch):
    palette = [
        {"colorName": "Oat", "hexCode": "#DFD7C7", "description": "soft beige", "category": "Wall Colors"},
        {"colorName": "Moss", "hexCode": "#8A9A5B", "description": "muted green", "category": "Accent Colors"},
        {"colorName": "Walnut", "hexCode": "#5D432C", "description": "dark brown", "category": "Furniture"},
    ]

    def reply(prompt):
        return VALID_VERDICT if VALIDATION_MARKER in prompt else json.dumps(palette)

    generator = FakeGenerator(reply)
    monkeypatch.setattr(cli_main, "build_resolver", lambda _settings: ColorResolver(settings, generator=generator))

    result = runner.invoke(cli_main.app, ["suggest", "calm reading nook"])

    assert result.exit_code == 0, result.output
    for label in ("Wall Colors", "Accent Colors", "Furniture"):
        assert label in result.output


def test_configuration_error_exits_2(monkeypatch):
    def missing(_settings):
        raise ConfigurationError("AI API key not configured")

    monkeypatch.setattr(cli_main, "build_resolver", missing)

    result = runner.invoke(cli_main.app, ["lookup", "red"])

    assert result.exit_code == 2
    assert "Configuration error" in result.output
