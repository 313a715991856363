#!/usr/bin/env python3
"""Tests for the gesture matcher pipeline: resample, normalize, score."""

import logging
import math
import random

import pytest

from spellcaster.config.settings import RecognitionConfig
from spellcaster.data.patterns import GesturePattern, PatternLibrary
from spellcaster.gestures.gesture_matcher import (
    GestureMatcher,
    average_distance,
    distance_to_score,
    normalize,
    resample,
    score,
)
from spellcaster.gestures.projection import PlanarProjector
from spellcaster.utils.gesture_utils import ORIGIN, PathUtils, Point


HORIZONTAL = [(0, 0), (1, 0), (2, 0), (3, 0), (4, 0)]
VERTICAL = [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)]
ZIGZAG = [(0, 0), (3, 0), (0, -2), (3, -2), (1, -4)]


def _random_path(rng, count):
    return [(rng.uniform(-100, 100), rng.uniform(-100, 100)) for _ in range(count)]


def _bounds(points):
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return min(xs), max(xs), min(ys), max(ys)


def test_horizontal_line_matches_itself_exactly():
    matcher = GestureMatcher()
    assert matcher.recognize(HORIZONTAL, HORIZONTAL) == 1.0


def test_horizontal_line_against_vertical_pattern_scores_low():
    matcher = GestureMatcher()
    result = matcher.recognize(HORIZONTAL, VERTICAL)
    assert result < 0.5


def test_degenerate_inputs_score_zero():
    matcher = GestureMatcher()
    assert matcher.recognize([], HORIZONTAL) == 0.0
    assert matcher.recognize([(1, 1)], HORIZONTAL) == 0.0
    assert matcher.recognize(HORIZONTAL, []) == 0.0
    assert matcher.recognize(HORIZONTAL, [(1, 1)]) == 0.0


def test_repeated_calls_are_identical():
    matcher = GestureMatcher()
    first = matcher.recognize(ZIGZAG, VERTICAL)
    for _ in range(5):
        assert matcher.recognize(ZIGZAG, VERTICAL) == first


def test_score_always_within_range():
    rng = random.Random(7)
    matcher = GestureMatcher()
    for _ in range(50):
        path = _random_path(rng, rng.randint(0, 30))
        pattern = _random_path(rng, rng.randint(0, 30))
        result = matcher.recognize(path, pattern)
        assert 0.0 <= result <= 1.0


def test_self_match_is_close_to_one():
    rng = random.Random(11)
    matcher = GestureMatcher()
    for _ in range(10):
        path = _random_path(rng, 12)
        assert matcher.recognize(path, path) == pytest.approx(1.0)


def test_scale_invariance():
    matcher = GestureMatcher()
    scaled = [(x * 37.5, y * 37.5) for x, y in ZIGZAG]
    assert matcher.recognize(scaled, VERTICAL) == pytest.approx(matcher.recognize(ZIGZAG, VERTICAL), abs=1e-9)


def test_translation_invariance():
    matcher = GestureMatcher()
    moved = [(x + 250.0, y - 80.0) for x, y in ZIGZAG]
    assert matcher.recognize(moved, VERTICAL) == pytest.approx(matcher.recognize(ZIGZAG, VERTICAL), abs=1e-9)


def test_inputs_are_not_mutated():
    path = PathUtils.to_points(ZIGZAG)
    pattern = GesturePattern("zig", ZIGZAG)
    path_copy = list(path)
    GestureMatcher().recognize(path, pattern)
    assert path == path_copy
    assert pattern.points == PathUtils.to_points(ZIGZAG)


def test_zero_extent_path_still_scores():
    matcher = GestureMatcher()
    result = matcher.recognize([(5, 5), (5, 5), (5, 5)], HORIZONTAL)
    assert 0.0 <= result < 1.0


def test_non_finite_input_gives_finite_score():
    matcher = GestureMatcher()
    result = matcher.recognize([(0, 0), (float('nan'), 1), (2, 2)], HORIZONTAL)
    assert math.isfinite(result)
    assert 0.0 <= result <= 1.0


def test_reversed_gesture_scores_poorly_by_default():
    backwards = HORIZONTAL[::-1]
    assert GestureMatcher().recognize(backwards, HORIZONTAL) == 0.0
    assert GestureMatcher(match_reversed=True).recognize(backwards, HORIZONTAL) == pytest.approx(1.0)


def test_match_returns_details():
    result = GestureMatcher().match(ZIGZAG, ZIGZAG)
    assert result.score == 1.0
    assert result.average_distance == 0.0
    assert result.time_ms >= 0.0


def test_accepts_dict_and_point_input():
    matcher = GestureMatcher()
    dict_path = [{'x': x, 'y': y, 't': i} for i, (x, y) in enumerate(HORIZONTAL)]
    point_path = [Point(x, y) for x, y in HORIZONTAL]
    assert matcher.recognize(dict_path, HORIZONTAL) == 1.0
    assert matcher.recognize(point_path, HORIZONTAL) == 1.0


def test_projector_is_applied_to_3d_points():
    path_3d = [(x, 9.0, y) for x, y in ZIGZAG]
    result = GestureMatcher().recognize(path_3d, ZIGZAG, PlanarProjector(axes=(0, 2)))
    assert result == 1.0


def test_best_match_picks_zigzag():
    library = PatternLibrary.from_file()
    path = [(-50, 50), (50, 50), (-50, -50), (50, -50)]
    name, best = GestureMatcher().best_match(path, library)
    assert name == 'zigzag'
    assert best == pytest.approx(1.0)


def test_best_match_without_patterns():
    assert GestureMatcher().best_match(HORIZONTAL, []) == (None, 0.0)


def test_best_match_with_unnamed_patterns_uses_index():
    name, best = GestureMatcher().best_match(HORIZONTAL, [VERTICAL, HORIZONTAL])
    assert name == '1'
    assert best == pytest.approx(1.0)


def test_custom_score_scale_is_more_forgiving():
    strict = GestureMatcher(RecognitionConfig(score_scale=0.5))
    lenient = GestureMatcher(RecognitionConfig(score_scale=2.0))
    assert lenient.recognize(HORIZONTAL, VERTICAL) > strict.recognize(HORIZONTAL, VERTICAL)


def test_debug_mode_logs_comparisons(caplog):
    caplog.set_level(logging.DEBUG, logger='spellcaster')
    GestureMatcher(debug=True).recognize(HORIZONTAL, VERTICAL)
    assert "Compare point 0" in caplog.text
    assert "final score" in caplog.text


# Resampling

@pytest.mark.parametrize("n", [2, 3, 16, 64, 100])
def test_resample_produces_exactly_n_points(n):
    rng = random.Random(n)
    for count in (2, 5, 40):
        points = PathUtils.to_points(_random_path(rng, count))
        resampled = resample(points, n)
        assert len(resampled) == n
        assert resampled[0] == points[0]


def test_resample_spaces_points_evenly():
    resampled = resample([Point(0, 0), Point(10, 0)], 11)
    for i, point in enumerate(resampled):
        assert point.x == pytest.approx(float(i))
        assert point.y == 0.0


def test_resample_places_several_points_on_one_segment():
    points = [Point(0, 0), Point(1, 0), Point(1, 9)]
    resampled = resample(points, 11)
    assert len(resampled) == 11
    assert sum(1 for p in resampled if p.x == pytest.approx(1.0) and p.y > 0) == 9


def test_resample_zero_length_path_repeats_first_point():
    points = [Point(3, 4), Point(3, 4), Point(3, 4)]
    assert resample(points, 8) == [Point(3, 4)] * 8


def test_resample_short_input_is_returned_unchanged():
    assert resample([], 64) == []
    assert resample([Point(1, 2)], 64) == [Point(1, 2)]


def test_resample_rejects_small_n():
    with pytest.raises(ValueError):
        resample([Point(0, 0), Point(1, 1)], 1)


# Normalization

def test_normalize_fits_longer_side_to_square_size():
    rng = random.Random(3)
    for size in (1.0, 250.0):
        points = PathUtils.to_points(_random_path(rng, 20))
        min_x, max_x, min_y, max_y = _bounds(normalize(points, size))
        assert max(max_x - min_x, max_y - min_y) == pytest.approx(size)
        assert (min_x + max_x) / 2 == pytest.approx(0.0, abs=1e-9)
        assert (min_y + max_y) / 2 == pytest.approx(0.0, abs=1e-9)


def test_normalize_preserves_aspect_ratio():
    rectangle = [Point(0, 0), Point(4, 0), Point(4, 2), Point(0, 2)]
    min_x, max_x, min_y, max_y = _bounds(normalize(rectangle, 1.0))
    assert max_x - min_x == pytest.approx(1.0)
    assert max_y - min_y == pytest.approx(0.5)


def test_normalize_degenerate_input_maps_to_origin():
    assert normalize([Point(2, 2)] * 4, 1.0) == [ORIGIN] * 4
    assert normalize([], 1.0) == []


# Scoring

def test_score_of_mismatched_lengths_is_zero():
    assert score([Point(0, 0)], [Point(0, 0), Point(1, 1)]) == 0.0
    assert score([], []) == 0.0


def test_distance_to_score_floor_and_ceiling():
    assert distance_to_score(0.0) == 1.0
    assert distance_to_score(0.25) == pytest.approx(0.5)
    assert distance_to_score(3.0) == 0.0
    assert distance_to_score(float('inf')) == 0.0


def test_average_distance():
    a = [Point(0, 0), Point(1, 0)]
    b = [Point(0, 3), Point(1, 1)]
    assert average_distance(a, b) == pytest.approx(2.0)


def test_recognition_config_threshold_is_clamped():
    config = RecognitionConfig()
    assert config.get_threshold() == pytest.approx(0.8)
    config.set_threshold(1.7)
    assert config.match_threshold == 1.0
    config.set_threshold(-1)
    assert config.match_threshold == 0.0
    with pytest.raises(ValueError):
        RecognitionConfig(num_points=1)
