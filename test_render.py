#!/usr/bin/env python3
"""
Camera and renderer tests.

Zoom clamping, camera snapping and damped follow, projection round trips,
and best-effort drawing of every fixture kind.
"""

import math
from types import SimpleNamespace

import pygame
import pymunk
import pytest

from hillcar.physics.scene_generator import create_world
from hillcar.physics.simulation import Fixture
from hillcar.render.renderer import COLORS, Renderer, RendererConfig


class StubWorld:
    """World exposing a fixed list of fixtures."""

    def __init__(self, fixtures):
        self.fixtures = fixtures

    def iter_fixtures(self):
        for f in self.fixtures:
            yield f.body, f


def make_target(x, y):
    return SimpleNamespace(position=(x, y))


def count_color(surface, color):
    w, h = surface.get_size()
    return sum(
        1 for x in range(0, w, 2) for y in range(0, h, 2)
        if tuple(surface.get_at((x, y)))[:3] == color
    )


# ==============================================================================
# Zoom
# ==============================================================================

def test_adjust_zoom_clamps(surface):
    r = Renderer(surface, StubWorld([]), make_target(0, 0))
    r.adjust_zoom(-10)
    assert r.zoom == 0.5
    r.adjust_zoom(10)
    assert r.zoom == 2.0
    r.adjust_zoom(-0.5)
    assert r.zoom == pytest.approx(1.5)


def test_set_zoom_clamps(surface):
    r = Renderer(surface, StubWorld([]), make_target(0, 0))
    r.set_zoom(0.1)
    assert r.zoom == 0.5
    r.set_zoom(5)
    assert r.zoom == 2.0
    r.set_zoom(1.25)
    assert r.zoom == 1.25


def test_zoom_stays_in_bounds_for_any_sequence(surface):
    r = Renderer(surface, StubWorld([]), make_target(0, 0), RendererConfig(min_zoom=0.25, max_zoom=3.0))
    for delta in [0.7, 2.1, -5.0, 0.01, 9.0, -0.3, -2.2, -0.9]:
        r.adjust_zoom(delta)
        assert 0.25 <= r.zoom <= 3.0
    r.set_zoom(-1)
    assert r.zoom == 0.25


def test_initial_zoom_is_clamped(surface):
    r = Renderer(surface, StubWorld([]), None, RendererConfig(zoom=10))
    assert r.zoom == 2.0


def test_invalid_config():
    for bad in [
        RendererConfig(min_zoom=2.0, max_zoom=1.0),
        RendererConfig(damping=1.5),
        RendererConfig(horizon=-0.1),
        RendererConfig(pixel_ratio=0.5),
        RendererConfig(base_scale=0),
    ]:
        with pytest.raises(ValueError):
            bad.validate()


# ==============================================================================
# Camera
# ==============================================================================

def test_camera_starts_at_target_plus_offset(surface):
    r = Renderer(surface, StubWorld([]), make_target(3.0, 2.0))
    assert r.camera.x == 3.0 + 4.0
    assert r.camera.y == 2.0 + 0.8


def test_reset_camera_snaps_and_resets_zoom(surface):
    target = make_target(0.0, 0.0)
    r = Renderer(surface, StubWorld([]), target)
    r.set_zoom(1.7)
    target.position = (25.0, -3.0)
    r.render()
    assert r.camera.x != 25.0 + 4.0

    r.reset_camera()
    assert r.camera.x == 25.0 + 4.0
    assert r.camera.y == -3.0 + 0.8
    assert r.zoom == 1.0


def test_set_target_switches_and_snaps(surface):
    r = Renderer(surface, StubWorld([]), make_target(0.0, 0.0))
    other = make_target(-10.0, 5.0)
    r.set_target(other)
    assert r.target is other
    assert (r.camera.x, r.camera.y) == (-10.0 + 4.0, 5.0 + 0.8)


def test_damped_follow(surface):
    target = make_target(0.0, 0.0)
    r = Renderer(surface, StubWorld([]), target, RendererConfig(damping=0.25, offset_x=0.0, offset_y=0.0))
    target.position = (8.0, -4.0)
    r.render()
    assert r.camera.x == pytest.approx(2.0)
    assert r.camera.y == pytest.approx(-1.0)
    r.render()
    assert r.camera.x == pytest.approx(3.5)
    assert r.camera.y == pytest.approx(-1.75)


def test_no_target_keeps_camera(surface):
    r = Renderer(surface, StubWorld([]), None)
    before = (r.camera.x, r.camera.y)
    r.render()
    r.render()
    assert (r.camera.x, r.camera.y) == before
    r.reset_camera()
    assert (r.camera.x, r.camera.y) == (4.0, 0.8)


# ==============================================================================
# Projection
# ==============================================================================

def test_projection_formula(surface):
    r = Renderer(surface, StubWorld([]), make_target(0.0, 0.0), RendererConfig(offset_x=0.0, offset_y=0.0))
    # Camera at origin maps to (width/2, height*horizon)
    assert r.to_screen((0.0, 0.0)) == (480.0, 540 * 0.45)
    # +Y world is up on screen
    x, y = r.to_screen((1.0, 1.0))
    assert x == pytest.approx(480.0 + 30.0)
    assert y == pytest.approx(243.0 - 30.0)
    r.set_zoom(2.0)
    assert r.scale == 60.0


def test_projection_round_trip(surface):
    r = Renderer(surface, StubWorld([]), make_target(12.3, -4.5))
    for zoom in [0.5, 1.0, 1.37, 2.0]:
        r.set_zoom(zoom)
        for p in [(0.0, 0.0), (12.3, -4.5), (-50.0, 7.25), (149.9, 0.001)]:
            back = r.to_world(r.to_screen(p))
            assert back[0] == pytest.approx(p[0], abs=1e-9)
            assert back[1] == pytest.approx(p[1], abs=1e-9)


def test_visible_bounds(surface):
    r = Renderer(surface, StubWorld([]), make_target(0.0, 0.0), RendererConfig(offset_x=0.0, offset_y=0.0))
    left, right, bottom, top = r.visible_bounds()
    assert left == pytest.approx(-16.0)
    assert right == pytest.approx(16.0)
    assert top == pytest.approx(243.0 / 30.0)
    assert bottom == pytest.approx(-(540 - 243.0) / 30.0)


def test_resize_changes_screen_center(surface):
    r = Renderer(surface, StubWorld([]), None)
    r.resize(pygame.Surface((200, 100)))
    assert r.screen_center() == pytest.approx((100.0, 45.0))


# ==============================================================================
# Drawing
# ==============================================================================

def test_render_draws_terrain_and_car(surface):
    world, car = create_world()
    r = Renderer(surface, world, car)
    r.render()
    assert count_color(surface, COLORS["terrain"]) > 0
    assert count_color(surface, COLORS["body"]) > 0
    assert count_color(surface, COLORS["grid"]) > 0


def test_shape_kinds(surface, capsys):
    world, car = create_world()
    r = Renderer(surface, world, car)
    assert r.shape_kinds() == ["chain", "polygon", "circle"]
    r.log_shape_kinds()
    r.log_shape_kinds()
    out = capsys.readouterr().out
    assert out.count("[renderer] shapes:") == 1


def test_unknown_kind_with_vertices_draws_polyline(surface):
    body = pymunk.Body(body_type=pymunk.Body.STATIC)
    fixture = Fixture(body=body, kind="spline", vertices=[(3.0, 0.0), (5.0, 1.0), (7.0, 0.0)])
    r = Renderer(surface, StubWorld([fixture]), None)
    r.render()
    assert count_color(surface, COLORS["body"]) > 0


def test_degenerate_fixtures_are_skipped(surface):
    body = pymunk.Body(body_type=pymunk.Body.STATIC)
    fixtures = [
        Fixture(body=body, kind="spline"),
        Fixture(body=body, kind="polygon"),
        Fixture(body=body, kind="chain", vertices=[(1.0, 1.0)]),
        Fixture(body=body, kind="edge", vertices=[]),
    ]
    r = Renderer(surface, StubWorld(fixtures), None)
    r.render()
    assert count_color(surface, COLORS["body"]) == 0
    assert count_color(surface, COLORS["terrain"]) == 0


def test_camera_stays_finite_while_driving(surface):
    world, car = create_world()
    r = Renderer(surface, world, car)
    for _ in range(120):
        world.step()
        r.render()
    assert math.isfinite(r.camera.x) and math.isfinite(r.camera.y)
