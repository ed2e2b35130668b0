import json
from pathlib import Path

import pytest

from cordterm import config, theme
from cordterm.theme import Theme, color_to_hex, from_hex, sample_theme


@pytest.fixture
def theme_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "_cached_config_dir", str(tmp_path))
    monkeypatch.setattr(theme, "_current_theme", Theme())
    return tmp_path


def test_from_hex_documented_example():
    assert from_hex("#FF0000") == "#ff0000"


def test_from_hex_partial_input_leaves_zero():
    assert from_hex("#ff") == from_hex("ff0000")
    assert from_hex("") == Theme().primitive_background_color


@pytest.mark.parametrize("colour", Theme().random_user_colors)
def test_from_hex_round_trips_theme_colours(colour):
    assert from_hex(colour) == colour
    assert color_to_hex(colour) == colour


def test_color_to_hex_normalises_case_and_prefix():
    assert color_to_hex("9496FC") == Theme().bot_color
    assert color_to_hex(" #9496fc ") == Theme().bot_color


def test_color_to_hex_rgb_flagged_integer():
    assert color_to_hex(theme.RGB_FLAG | 0x9496FC) == Theme().bot_color


def test_color_to_hex_palette_indices():
    default = Theme()
    assert color_to_hex(0) == default.primitive_background_color
    assert color_to_hex(15) == default.border_color
    assert color_to_hex(9) == default.error_color


@pytest.mark.parametrize("value", ["nope", "#12345", -1, 1000, True, None])
def test_color_to_hex_rejects_invalid(value):
    with pytest.raises(ValueError):
        color_to_hex(value)


def test_default_random_colours_are_distinct():
    colours = Theme().random_user_colors
    assert len(set(colours)) == len(colours)


def test_default_bot_colour():
    assert Theme().bot_color == "#9496fc"


def test_sample_theme_differs_only_in_widget_colours():
    default = Theme()
    sample = sample_theme()
    assert sample.primitive_background_color != default.primitive_background_color
    assert sample.contrast_background_color == sample.inverse_text_color
    assert sample.bot_color == default.bot_color
    assert sample.random_user_colors == default.random_user_colors


def test_round_trip_through_dict():
    original = sample_theme()
    assert Theme.from_dict(original.to_dict()) == original


def test_from_dict_rejects_non_list_random_colours():
    with pytest.raises(ValueError):
        Theme.from_dict({"RandomUserColors": "#ffffff"})


def test_theme_file_path(theme_dir):
    assert Path(theme.get_theme_file()) == theme_dir / "theme.json"


def test_load_without_file_keeps_defaults(theme_dir):
    theme.load_theme()
    assert theme.get_theme() == Theme()


def test_load_empty_file_keeps_defaults(theme_dir):
    (theme_dir / "theme.json").write_text("", encoding="utf-8")
    theme.load_theme()
    assert theme.get_theme() == Theme()


def test_load_partial_file(theme_dir):
    (theme_dir / "theme.json").write_text(
        json.dumps({"ErrorColor": "#123456"}), encoding="utf-8"
    )
    theme.load_theme()
    loaded = theme.get_theme()
    assert loaded.error_color == "#123456"
    assert loaded.bot_color == Theme().bot_color


def test_load_accepts_integer_colours(theme_dir):
    (theme_dir / "theme.json").write_text(
        json.dumps({"LinkColor": theme.RGB_FLAG | 0x4ED8CF}), encoding="utf-8"
    )
    theme.load_theme()
    assert theme.get_theme().link_color == Theme().random_user_colors[9]


def test_load_invalid_file_raises(theme_dir):
    (theme_dir / "theme.json").write_text("{broken", encoding="utf-8")
    with pytest.raises(ValueError):
        theme.load_theme()


def test_main_prints_sample_theme(capsys):
    assert theme.main([]) == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed == sample_theme().to_dict()