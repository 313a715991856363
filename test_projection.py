#!/usr/bin/env python3
"""Tests for camera projection, casting plane raycasts and the gesture recorder."""

import numpy as np
import pytest

from spellcaster.gestures.gesture_recorder import GestureRecorder
from spellcaster.gestures.projection import Camera, CastingPlane, PlanarProjector
from spellcaster.utils.gesture_utils import Point


def test_point_ahead_projects_to_screen_center():
    camera = Camera()
    assert camera.world_to_screen_point((0, 0, 1)) == Point(960.0, 540.0)


def test_perspective_projection_offsets():
    camera = Camera(fov=90.0)
    right = camera.world_to_screen_point((0.5, 0.0, 1.0))
    up = camera.world_to_screen_point((0.0, 0.5, 1.0))
    far = camera.world_to_screen_point((0.5, 0.0, 2.0))
    assert right.x == pytest.approx(960 + 270)
    assert right.y == pytest.approx(540)
    assert up.y == pytest.approx(540 + 270)
    assert far.x == pytest.approx(960 + 135)


def test_screen_ray_roundtrips_through_plane():
    camera = Camera(position=(1.0, 2.0, -3.0), forward=(0.2, -0.1, 1.0))
    plane = CastingPlane.in_front_of(camera, 1.5)
    for screen_point in [(100, 100), (960, 540), (1800, 900)]:
        origin, direction = camera.screen_point_to_ray(screen_point)
        hit = plane.raycast(origin, direction)
        assert hit is not None
        back = camera.world_to_screen_point(hit)
        assert back.x == pytest.approx(screen_point[0])
        assert back.y == pytest.approx(screen_point[1])


def test_raycast_misses():
    plane = CastingPlane(normal=(0, 0, 1), point=(0, 0, 5))
    assert plane.raycast((0, 0, 0), (1, 0, 0)) is None
    assert plane.raycast((0, 0, 0), (0, 0, -1)) is None
    assert np.allclose(plane.raycast((1, 2, 0), (0, 0, 1)), (1, 2, 5))


def test_camera_rejects_bad_setup():
    with pytest.raises(ValueError):
        Camera(fov=0)
    with pytest.raises(ValueError):
        Camera(forward=(0, 1, 0), up=(0, 1, 0))
    with pytest.raises(ValueError):
        Camera().world_to_screen_point((1, 0, 0))


def test_planar_projector():
    assert PlanarProjector().project((1, 2, 3)) == Point(1, 2)
    assert PlanarProjector(axes=(2, 0)).project(np.array([1.0, 2.0, 3.0])) == Point(3, 1)
    with pytest.raises(ValueError):
        PlanarProjector(axes=(1, 1))
    with pytest.raises(ValueError):
        PlanarProjector().project((1, 2))


def test_recorder_ignores_points_when_idle():
    recorder = GestureRecorder(Camera())
    assert not recorder.add_point((0, 0, 1))
    assert recorder.recorded_path == []


def test_recorder_filters_close_points():
    recorder = GestureRecorder(Camera(), min_point_distance=0.1)
    recorder.start_recording()
    assert recorder.add_point((0, 0, 1))
    assert not recorder.add_point((0.05, 0, 1))
    assert recorder.add_point((0.2, 0, 1))
    assert len(recorder.recorded_path) == 2


def test_recorder_rejects_points_it_cannot_project():
    recorder = GestureRecorder(Camera())
    recorder.start_recording()
    assert not recorder.add_point((1, 0, 0))
    assert not recorder.add_point((0, 0, -1))
    assert not recorder.add_point((1, 2))
    assert not recorder.add_point((0, float('nan'), 1))
    assert not recorder.add_point('abc')
    assert recorder.recorded_path == []
    assert recorder.add_point((0, 0, 1))


def test_recorder_take_path_clears_it():
    recorder = GestureRecorder(Camera())
    recorder.start_recording()
    recorder.add_point((0, 0, 1))
    recorder.add_point((0.5, 0, 1))
    recorder.stop_recording()
    path = recorder.take_path()
    assert len(path) == 2
    assert recorder.take_path() == []


def test_recorder_start_and_stop_lifecycle():
    recorder = GestureRecorder(Camera())
    recorder.start_recording()
    recorder.add_point((0, 0, 1))
    recorder.start_recording()
    assert len(recorder.recorded_path) == 1

    recorder.stop_recording()
    assert not recorder.is_recording
    assert not recorder.add_point((1, 1, 1))
    assert len(recorder.recorded_path) == 1

    recorder.start_recording()
    assert recorder.recorded_path == []


def test_recorder_returns_copies():
    recorder = GestureRecorder(Camera())
    recorder.start_recording()
    recorder.add_point((0, 0, 1))
    path = recorder.recorded_path
    path[0][0] = 99.0
    path.clear()
    assert recorder.recorded_path[0][0] == 0.0


def test_recorder_screen_points_land_on_plane():
    camera = Camera()
    recorder = GestureRecorder(camera, plane_distance=2.0)
    recorder.start_recording()
    assert recorder.add_screen_point((960, 540))
    assert recorder.add_screen_point((1200, 540))
    path = recorder.recorded_path
    assert np.allclose(path[0], (0, 0, 2))
    assert path[1][2] == pytest.approx(2.0)
    assert path[1][0] > 0
