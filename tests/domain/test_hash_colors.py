from __future__ import annotations

import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

from lib_log_spans.domain.color_support import TerminalColorSupport
from lib_log_spans.domain.colors import Ansi16, DefaultColor, IndexedColor, RgbColor
from lib_log_spans.domain.hash_colors import (
    ColorSaturation,
    color_for_hash,
    hash_color_ansi16,
    hash_color_ansi256,
    hash_color_truecolor,
    palette_for,
    stable_hash,
)
from lib_log_spans.domain.identity import InstanceHandle
from lib_log_spans.domain.palettes import READABLE_COLORS_HIGH, READABLE_COLORS_LOW, READABLE_COLORS_MEDIUM
from lib_log_spans.domain.perceptual import is_color_readable

SRC = Path(__file__).resolve().parents[2] / "src"
SAMPLE_SIZE = 10_000


def test_stable_hash_of_common_identities() -> None:
    assert stable_hash(None) == 0
    assert stable_hash(12345) == 12345
    assert stable_hash(InstanceHandle(77)) == 77
    assert stable_hash("user-42") == stable_hash(b"user-42")
    assert 0 <= stable_hash("user-42") < 2**32


def test_no_color_support_always_yields_default() -> None:
    for name in ("a", "b", "c"):
        assert color_for_hash(name, color_support=TerminalColorSupport.NONE) is DefaultColor()


def test_ansi16_choices_avoid_black_white_red_and_yellow() -> None:
    excluded = {Ansi16.BLACK, Ansi16.WHITE, Ansi16.RED, Ansi16.YELLOW, Ansi16.BRIGHT_RED, Ansi16.BRIGHT_YELLOW}
    seen = {hash_color_ansi16(f"logger-{index}") for index in range(200)}

    assert len(seen) == 8
    assert not seen & excluded
    assert color_for_hash("x", color_support=TerminalColorSupport.ANSI16) == hash_color_ansi16("x")


@pytest.mark.parametrize(
    "saturation, palette",
    [
        (ColorSaturation.LOW, READABLE_COLORS_LOW),
        (ColorSaturation.MID, READABLE_COLORS_MEDIUM),
        (ColorSaturation.HIGH, READABLE_COLORS_HIGH),
        (None, READABLE_COLORS_LOW + READABLE_COLORS_MEDIUM),
    ],
)
def test_ansi256_picks_from_the_requested_palette(saturation: ColorSaturation | None, palette) -> None:
    assert palette_for(saturation) == palette
    for index in range(100):
        color = color_for_hash(f"class-{index}", saturation, TerminalColorSupport.ANSI256)
        assert isinstance(color, IndexedColor)
        assert color in palette


def test_ansi256_uses_hash_modulo_palette_size() -> None:
    palette = READABLE_COLORS_MEDIUM
    assert hash_color_ansi256(len(palette) + 3, palette) == palette[3]
    assert hash_color_ansi256(-(len(palette) + 3), palette) == palette[3]


def test_empty_palette_is_a_usage_error() -> None:
    with pytest.raises(ValueError, match="colors must not be empty"):
        hash_color_ansi256("x", ())
    with pytest.raises(ValueError, match="colors must not be empty"):
        hash_color_truecolor("x", [])


@pytest.mark.parametrize("support", list(TerminalColorSupport))
@pytest.mark.parametrize("saturation", [None, *ColorSaturation])
def test_color_for_hash_is_deterministic(support: TerminalColorSupport, saturation: ColorSaturation | None) -> None:
    assert color_for_hash("user-42", saturation, support) == color_for_hash("user-42", saturation, support)


def test_truecolor_returns_rgb_colors() -> None:
    color = color_for_hash("app.http", ColorSaturation.HIGH, TerminalColorSupport.TRUECOLOR)
    assert isinstance(color, RgbColor)


def test_truecolor_results_are_readable_unless_the_fallback_fired(caplog: pytest.LogCaptureFixture) -> None:
    """Every accepted truecolor pick passes all four thresholds; fallbacks are counted."""

    caplog.set_level(logging.DEBUG, logger="lib_log_spans.domain.hash_colors")
    palette = palette_for(None)
    fallbacks = 0
    for index in range(SAMPLE_SIZE):
        caplog.clear()
        color = hash_color_truecolor(f"instance-{index}", palette)
        if any("fell back" in record.getMessage() for record in caplog.records):
            fallbacks += 1
            continue
        assert is_color_readable(*color.rgb), (index, color)

    rate = fallbacks / SAMPLE_SIZE
    print(f"truecolor fallback rate: {rate:.4%} ({fallbacks}/{SAMPLE_SIZE})")
    assert rate < 0.25


@pytest.mark.parametrize("saturation", list(ColorSaturation))
def test_truecolor_stays_inside_lightness_bounds(saturation: ColorSaturation) -> None:
    from lib_log_spans.domain.perceptual import rgb_to_hsl

    for index in range(500):
        color = color_for_hash(index * 7919, saturation, TerminalColorSupport.TRUECOLOR)
        lightness = rgb_to_hsl(*color.rgb)[2]
        assert 0.40 <= lightness <= 0.64


def test_hash_colors_agree_across_processes_with_different_hash_seeds() -> None:
    script = (
        "from lib_log_spans.domain.hash_colors import color_for_hash, ColorSaturation;"
        "from lib_log_spans.domain.color_support import TerminalColorSupport as T;"
        "print([color_for_hash(n, ColorSaturation.MID, t) for n in ('user-42', 'db', 'app.http') "
        "for t in (T.ANSI16, T.ANSI256, T.TRUECOLOR)])"
    )
    outputs = []
    for seed in ("1", "4242"):
        env = dict(os.environ, PYTHONHASHSEED=seed, PYTHONPATH=str(SRC))
        completed = subprocess.run([sys.executable, "-c", script], env=env, capture_output=True, text=True, check=True)
        outputs.append(completed.stdout)

    assert outputs[0] == outputs[1]
    assert "IndexedColor" in outputs[0]
    in_process = [
        color_for_hash(name, ColorSaturation.MID, support)
        for name in ("user-42", "db", "app.http")
        for support in (TerminalColorSupport.ANSI16, TerminalColorSupport.ANSI256, TerminalColorSupport.TRUECOLOR)
    ]
    assert outputs[0].strip() == repr(in_process)
