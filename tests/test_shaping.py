import pytest

from layoutmetrics.config import DISABLED_FEATURES, ShapingConfig
from layoutmetrics.font_io import open_font
from layoutmetrics.segmentation import segment
from layoutmetrics.shaping import _cluster_codepoints, shape


@pytest.fixture
def font(font_path):
    with open_font(font_path) as handle:
        yield handle


def test_disabled_features_cover_optional_shaping():
    assert len(DISABLED_FEATURES) == 17
    assert not any(DISABLED_FEATURES.values())
    for tag in ("liga", "kern", "calt", "mark", "mkmk", "curs", "ccmp"):
        assert DISABLED_FEATURES[tag] is False


def test_with_enabled_returns_new_config():
    base = ShapingConfig()
    enabled = base.with_enabled(["kern"])
    assert enabled.features["kern"] is True
    assert base.features["kern"] is False
    assert enabled.features["liga"] is False


def test_shape_empty_text(font):
    run = shape(font, "", ShapingConfig())
    assert len(run) == 0
    assert run.advance_width == 0


def test_shape_is_one_glyph_per_character(font):
    text = "Hi there\nworld"
    run = shape(font, text, ShapingConfig())
    assert len(run.glyphs) == len(run.positions) == len(text)
    assert [g.codepoints for g in run.glyphs] == [(ord(c),) for c in text]
    assert [g.id for g in run.glyphs] == [font.glyph_for_codepoint(ord(c)) for c in text]


def test_positions_are_normalized_to_1000_upm(font):
    run = shape(font, "aw i", ShapingConfig())
    assert [p.advance_width for p in run.positions] == pytest.approx(
        [500.0, 750.0, 250.0, 250.0]
    )
    assert [p.x_advance for p in run.positions] == pytest.approx(
        [500.0, 750.0, 250.0, 250.0]
    )
    assert all(p.y_offset == 0 for p in run.positions)
    assert run.advance_width == pytest.approx(1750.0)


def test_cluster_codepoints_assigns_cluster_to_first_glyph():
    codepoints = [0x61, 0x65, 0x301, 0x62]
    # glyph 1 covers "e" + combining mark, glyph 2 is a second glyph of that cluster
    assert _cluster_codepoints([0, 1, 1, 3], codepoints) == [
        (0x61,),
        (0x65, 0x301),
        (),
        (0x62,),
    ]


def test_cluster_codepoints_last_cluster_runs_to_end():
    assert _cluster_codepoints([0, 2], [1, 2, 3, 4]) == [(1, 2), (3, 4)]


@pytest.mark.parametrize(
    "text",
    ["a\u0301b", "\u0438\u0306", "ok \U0001F44D\U0001F3FD", "e\u0301\u0308x"],
)
def test_combining_sequences_keep_one_codepoint_per_glyph(font, text):
    run = shape(font, text, ShapingConfig())
    assert [g.codepoints for g in run.glyphs] == [(ord(c),) for c in text]


def test_combining_mark_text_survives_segmentation(font):
    run = shape(font, "a\u0301b c", ShapingConfig())
    lines, words = segment(run, font, 0.012)
    assert [line.text for line in lines] == ["a\u0301b c"]
    assert [word.text for word in words] == ["a\u0301b", "c"]
