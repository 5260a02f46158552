from __future__ import annotations

import pytest

from lib_log_spans.domain.colors import XTERM_256
from lib_log_spans.domain.perceptual import (
    MIN_CONTRAST_ON_BLACK,
    MIN_CONTRAST_ON_WHITE,
    ciede2000,
    color_distance,
    contrast_ratio,
    hsl_to_rgb,
    is_color_readable,
    readability_of,
    relative_luminance,
    rgb_to_hsl,
    rgb_to_lab,
    round_half_up,
)


@pytest.mark.parametrize(
    "lab1, lab2, expected",
    [
        ((50.0, 2.6772, -79.7751), (50.0, 0.0, -82.7485), 2.0425),
        ((50.0, 3.1571, -77.2803), (50.0, 0.0, -82.7485), 2.8615),
        ((50.0, 0.0, 0.0), (50.0, -1.0, 2.0), 2.3669),
        ((50.0, 2.5, 0.0), (73.0, 25.0, -18.0), 27.1492),
        ((50.0, 2.5, 0.0), (50.0, 3.1736, 0.5854), 1.0),
        ((60.2574, -34.0099, 36.2677), (60.4626, -34.1751, 39.4387), 1.2644),
        ((2.0776, 0.0795, -1.135), (0.9033, -0.0636, -0.5514), 0.9082),
    ],
)
def test_ciede2000_matches_reference_pairs(lab1, lab2, expected: float) -> None:
    assert ciede2000(lab1, lab2) == pytest.approx(expected, abs=1e-4)
    assert ciede2000(lab2, lab1) == pytest.approx(expected, abs=1e-4)


def test_ciede2000_of_identical_colors_is_zero() -> None:
    lab = rgb_to_lab(12, 200, 99)
    assert ciede2000(lab, lab) == pytest.approx(0.0)


def test_rgb_to_lab_anchors() -> None:
    assert rgb_to_lab(0, 0, 0) == pytest.approx((0.0, 0.0, 0.0), abs=1e-6)
    white = rgb_to_lab(255, 255, 255)
    assert white[0] == pytest.approx(100.0, abs=0.01)
    assert white[1] == pytest.approx(0.0, abs=0.01)
    assert white[2] == pytest.approx(0.0, abs=0.01)


@pytest.mark.parametrize("color", XTERM_256, ids=lambda color: str(color.code))
def test_hsl_round_trip_is_exact_for_the_xterm_palette(color) -> None:
    assert hsl_to_rgb(*rgb_to_hsl(*color.rgb)) == color.rgb


def test_rgb_to_hsl_known_values() -> None:
    hue, saturation, lightness = rgb_to_hsl(255, 0, 0)
    assert (hue, saturation, lightness) == pytest.approx((0.0, 1.0, 0.5))
    assert rgb_to_hsl(128, 128, 128)[1] == pytest.approx(0.0)
    assert hsl_to_rgb(240.0, 1.0, 0.5) == (0, 0, 255)


def test_round_half_up_rounds_halves_away_from_zero() -> None:
    assert [round_half_up(v) for v in (0.5, 1.5, 2.5, -0.5, 2.49)] == [1, 2, 3, -1, 2]


def test_wcag_contrast_extremes() -> None:
    assert relative_luminance(255, 255, 255) == pytest.approx(1.0)
    assert relative_luminance(0, 0, 0) == pytest.approx(0.0)
    assert contrast_ratio(1.0, 0.0) == pytest.approx(21.0)
    assert contrast_ratio(0.3, 0.3) == pytest.approx(1.0)
    assert contrast_ratio(0.2, 0.7) == contrast_ratio(0.7, 0.2)


def test_reference_colors_are_rejected() -> None:
    assert "red" in readability_of(128, 0, 0).failure_reasons
    assert "yellow" in readability_of(128, 128, 0).failure_reasons
    assert color_distance((128, 0, 0), (128, 0, 0)) == pytest.approx(0.0)


def test_white_and_black_fail_contrast() -> None:
    assert readability_of(255, 255, 255).failure_reasons[-1] == "white"
    assert "black" in readability_of(0, 0, 0).failure_reasons
    assert not is_color_readable(255, 255, 255)
    assert not is_color_readable(0, 0, 0)


def test_mid_blue_grey_is_readable() -> None:
    report = readability_of(95, 135, 175)

    assert report.is_readable
    assert report.contrast_on_white >= MIN_CONTRAST_ON_WHITE
    assert report.contrast_on_black >= MIN_CONTRAST_ON_BLACK
    assert is_color_readable(95, 135, 175)


@pytest.mark.parametrize("color", XTERM_256, ids=lambda color: str(color.code))
def test_fast_check_agrees_with_full_report(color) -> None:
    assert is_color_readable(*color.rgb) == readability_of(*color.rgb).is_readable
