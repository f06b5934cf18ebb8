"""
Tests for the Camera projection and the Renderer's drawing helpers.

Drawing runs on an off-screen pygame Surface; no window is opened.
"""

import math
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
import pygame

from springsim.models import ClothModel
from springsim.pygame_renderer import Camera, Renderer


def test_identity_projection():
    camera = Camera(scale=10.0)
    screen = camera.project(np.array([[0.0, 0.0, 0.0], [1.0, 2.0, 3.0]]), 200, 100)

    np.testing.assert_allclose(screen[0], [100.0, 50.0])
    # +y world is up on screen; z is depth
    np.testing.assert_allclose(screen[1], [110.0, 30.0])


def test_yaw_turns_depth_into_screen_x():
    camera = Camera(yaw=math.pi / 2, scale=10.0)
    screen = camera.project(np.array([[1.0, 0.0, 0.0], [0.0, 0.0, 1.0]]), 200, 100)

    np.testing.assert_allclose(screen[0], [100.0, 50.0], atol=1e-9)
    np.testing.assert_allclose(screen[1], [110.0, 50.0], atol=1e-9)


def test_pitch_is_clamped():
    camera = Camera()
    camera.rotate(d_pitch=10.0)
    assert camera.pitch == math.pi / 2
    camera.rotate(d_pitch=-20.0)
    assert camera.pitch == -math.pi / 2


def test_fit_centers_point_cloud():
    camera = Camera()
    positions = np.array([[0.0, 0.0, 0.0], [4.0, 2.0, 0.0]])
    camera.fit(positions, 400, 300)

    np.testing.assert_allclose(camera.target, [2.0, 1.0, 0.0])
    center = camera.project(camera.target, 400, 300)
    np.testing.assert_allclose(center[0], [200.0, 150.0])


def test_spring_colors_follow_strain():
    renderer = Renderer()
    colors, widths = renderer._compute_spring_visuals(np.array([-1.0, 0.0, 1.0]))

    assert tuple(colors[0]) == Renderer.SPRING_COLORS[0]
    assert tuple(colors[1]) == Renderer.SPRING_COLORS[1]
    assert tuple(colors[2]) == Renderer.SPRING_COLORS[2]
    assert widths[1] == renderer.spring_min_width
    assert widths[2] == renderer.spring_max_width


def test_draw_model_on_offscreen_surface():
    model = ClothModel(device="cpu", verbose=False)
    renderer = Renderer(window_width=320, window_height=240)
    renderer.reset_view(model.particle_positions())

    canvas = renderer.create_canvas()
    renderer.draw_grid(canvas)
    renderer.draw_springs(canvas, model.spring_segments(), model.normalized_strains())
    renderer.draw_particles(canvas, model.particle_positions(), model.fixed_mask())

    assert isinstance(canvas, pygame.Surface)
    # The cloth's centre particle lands on the canvas centre region and is drawn
    cx, cy = renderer.world_to_screen_array(model.particle_positions()[[55]])[0]
    assert 0 <= cx < 320 and 0 <= cy < 240
    assert canvas.get_at((int(cx), int(cy)))[:3] != Renderer.BACKGROUND
