"""Tests for camera target poses, easing and transition timing."""

from __future__ import annotations

import numpy as np
import pytest

from graphnav.models.scene_models import TransitionKind
from graphnav.services.graph_model import Graph
from graphnav.services.scene.camera import (
    CameraController,
    ease_in_out,
    look_at_point,
    orbit_position,
    overhead_position,
)
from graphnav.services.scene.navigation import TransitionRequest
from graphnav.services.scene_config import CAMERA_HEIGHT


@pytest.fixture
def line_graph() -> Graph:
    graph = Graph.from_labels(["A", "B", "C"], [["A", "B"], ["A", "C"]], seed=0)
    graph.positions[:] = [(0.0, 0.0, 0.0), (4.0, 0.0, 0.0), (0.0, 0.0, 20.0)]
    return graph


# --- easing ---


def test_ease_endpoints():
    assert ease_in_out(0.0) == 0.0
    assert ease_in_out(1.0) == 1.0
    assert ease_in_out(0.5) == pytest.approx(0.5)
    assert ease_in_out(0.25) == pytest.approx(0.125)
    assert ease_in_out(0.75) == pytest.approx(0.875)


def test_ease_monotonic():
    values = [ease_in_out(t) for t in np.linspace(0.0, 1.0, 201)]
    assert all(b >= a for a, b in zip(values, values[1:]))


def test_ease_clamps_out_of_range():
    assert ease_in_out(-1.0) == 0.0
    assert ease_in_out(2.0) == 1.0


# --- target geometry ---


def test_orbit_position_uses_minimum_radius():
    pos = orbit_position(np.zeros(3), np.array([4.0, 0.0, 0.0]))
    assert pos == pytest.approx([-CAMERA_HEIGHT, CAMERA_HEIGHT, 0.0])


def test_orbit_position_scales_with_distance():
    pos = orbit_position(np.zeros(3), np.array([20.0, 0.0, 0.0]))
    assert pos == pytest.approx([-15.0, CAMERA_HEIGHT, 0.0])


def test_orbit_position_coincident_nodes():
    pos = orbit_position(np.ones(3), np.ones(3))
    assert pos == pytest.approx([1.0, 1.0 + CAMERA_HEIGHT, 1.0])


def test_look_at_biased_toward_current():
    point = look_at_point(np.zeros(3), np.array([10.0, 0.0, 0.0]))
    assert point == pytest.approx([3.5, 0.0, 0.0])


def test_overhead_position():
    assert overhead_position(np.array([1.0, 2.0, 3.0])) == pytest.approx([1.0, 12.0, -7.0])


def test_pose_for_with_and_without_target(line_graph: Graph):
    camera = CameraController(line_graph)
    plain = camera.pose_for(0)
    assert plain.position == pytest.approx([0.0, CAMERA_HEIGHT, -CAMERA_HEIGHT])
    assert plain.look_at == pytest.approx([0.0, 0.0, 0.0])

    framed = camera.pose_for(0, target_node=1)
    assert framed.position == pytest.approx([-CAMERA_HEIGHT, CAMERA_HEIGHT, 0.0])
    assert framed.look_at == pytest.approx([1.4, 0.0, 0.0])


# --- transitions ---


def test_none_node_is_ignored(line_graph: Graph, clock):
    camera = CameraController(line_graph, clock=clock)
    camera.place(0)
    before = camera.pose.copy()
    assert camera.start_transition(None, TransitionKind.MOVE) is False
    assert camera.request(None) is False
    assert camera.transitioning is False
    assert np.array_equal(camera.pose.position, before.position)


def test_move_lands_exactly_on_target(line_graph: Graph, clock):
    camera = CameraController(line_graph, clock=clock)
    camera.place(0)
    camera.request(TransitionRequest(node_id=1, kind=TransitionKind.MOVE))
    target = camera.target_pose
    assert camera.kind == TransitionKind.MOVE

    clock.advance(0.5)
    camera.update()
    assert camera.transitioning is True

    clock.advance(0.5)
    pose = camera.update()
    assert camera.transitioning is False
    assert camera.kind is None
    assert np.array_equal(pose.position, target.position)
    assert np.array_equal(pose.look_at, target.look_at)


def test_midpoint_is_halfway(line_graph: Graph, clock):
    camera = CameraController(line_graph, clock=clock)
    camera.place(0)
    start = camera.pose.copy()
    camera.start_transition(2, TransitionKind.MOVE)
    target = camera.target_pose
    clock.advance(0.5)
    pose = camera.update()
    assert pose.position == pytest.approx((start.position + target.position) / 2)


def test_rotate_is_shorter_than_move(line_graph: Graph):
    camera = CameraController(line_graph)
    camera.place(0)
    camera.start_transition(0, TransitionKind.ROTATE, target_node=1, now=0.0)
    camera.update(now=0.5)
    assert camera.transitioning is False

    camera.start_transition(1, TransitionKind.MOVE, now=1.0)
    camera.update(now=1.5)
    assert camera.transitioning is True
    camera.update(now=2.0)
    assert camera.transitioning is False


def test_new_request_starts_from_mid_flight_pose(line_graph: Graph):
    camera = CameraController(line_graph)
    camera.place(0)
    camera.start_transition(2, TransitionKind.MOVE, now=0.0)
    mid = camera.update(now=0.25).copy()

    camera.start_transition(2, TransitionKind.ROTATE, target_node=0, now=0.25)
    assert camera.transitioning is True
    assert camera.kind == TransitionKind.ROTATE
    pose = camera.update(now=0.25)
    assert np.array_equal(pose.position, mid.position)
    assert np.array_equal(pose.look_at, mid.look_at)

    final = camera.update(now=0.75)
    expected = camera.pose_for(2, target_node=0)
    assert np.array_equal(final.position, expected.position)


def test_idle_camera_tracks_moving_node(line_graph: Graph):
    camera = CameraController(line_graph)
    camera.place(0)
    position = camera.pose.position.copy()
    line_graph.positions[0] = (1.0, 2.0, 3.0)
    pose = camera.update(now=5.0)
    assert np.array_equal(pose.position, position)
    assert pose.look_at == pytest.approx([1.0, 2.0, 3.0])


def test_pose_view_is_plain_floats(line_graph: Graph):
    camera = CameraController(line_graph)
    camera.place(0)
    view = camera.pose.view()
    assert view.position == (0.0, CAMERA_HEIGHT, -CAMERA_HEIGHT)
    assert view.look_at == (0.0, 0.0, 0.0)
