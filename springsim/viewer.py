#!/usr/bin/env python3
"""
Interactive pygame viewer for the spring-mass models.

Controls:
    1 / 2 / 3 / 4   load spring / chain / cloth / cube
    SPACE           play / pause
    S               single step
    R               reset model
    V               reset view
    Arrow keys      rotate camera
    + / -           double / halve dt
    Q / ESC         quit

Usage:
    python -m springsim.viewer --topology cloth --dt 0.001
    python -m springsim.viewer --config overrides.json --device cpu
"""

import argparse
import math
import time
from typing import Optional

import pygame

from .config import ViewerConfig, load_configs
from .driver import TOPOLOGIES, SimulationDriver
from .pygame_renderer import Renderer

TOPOLOGY_KEYS = {
    pygame.K_1: "spring",
    pygame.K_2: "chain",
    pygame.K_3: "cloth",
    pygame.K_4: "cube",
}

ROTATE_STEP = math.radians(5.0)


class Viewer:
    """
    Window loop around a SimulationDriver.

    Each frame: handle events (turned into panel requests), let the driver
    apply them, then draw the active model.
    """

    def __init__(self, config: Optional[ViewerConfig] = None):
        self.config = config or ViewerConfig()

        self.driver: Optional[SimulationDriver] = None
        self.renderer: Optional[Renderer] = None
        self.window: Optional[pygame.Surface] = None
        self.clock: Optional[pygame.time.Clock] = None

        self.running: bool = True
        self.frame_count: int = 0
        self._view_topology: Optional[str] = None

    def setup(self) -> None:
        cfg = self.config

        print("=" * 70)
        print("Mass-spring viewer")
        print("=" * 70)

        configs = load_configs(cfg.config_path) if cfg.config_path else None
        self.driver = SimulationDriver(configs=configs, device=cfg.device,
                                       initial=cfg.topology, dt=cfg.dt)

        pygame.init()
        self.window = pygame.display.set_mode((cfg.window_width, cfg.window_height))
        pygame.display.set_caption("springsim")
        self.clock = pygame.time.Clock()

        self.renderer = Renderer(window_width=cfg.window_width, window_height=cfg.window_height)
        self.renderer.camera.rotate(d_yaw=math.radians(30.0), d_pitch=math.radians(20.0))
        self.reset_view()

    def reset_view(self) -> None:
        self.renderer.reset_view(self.driver.model.particle_positions())
        self._view_topology = self.driver.active

    def get_info_lines(self) -> list:
        model = self.driver.model
        panel = self.driver.panel
        white = Renderer.WHITE
        grey = (170, 170, 170)
        return [
            (model.display_name, white),
            (f"Time: {model.t:.3f}s  steps: {model.step_count}", white),
            (f"dt: {panel.dt:g}  {'PLAYING' if panel.play_model else 'PAUSED'}", white),
            (f"Particles: {model.particle_count}  Springs: {model.spring_count}", grey),
            (f"Energy: {model.total_energy():.3f}", grey),
            ("1-4 model  SPACE play  S step  R reset  V view  arrows rotate  +/- dt", grey),
        ]

    def handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

        keys = pygame.key.get_pressed()
        camera = self.renderer.camera
        if keys[pygame.K_LEFT]:
            camera.rotate(d_yaw=-ROTATE_STEP)
        if keys[pygame.K_RIGHT]:
            camera.rotate(d_yaw=ROTATE_STEP)
        if keys[pygame.K_UP]:
            camera.rotate(d_pitch=ROTATE_STEP)
        if keys[pygame.K_DOWN]:
            camera.rotate(d_pitch=-ROTATE_STEP)

    def handle_key(self, key) -> None:
        driver = self.driver
        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False
        elif key in TOPOLOGY_KEYS:
            driver.request_load(TOPOLOGY_KEYS[key])
        elif key == pygame.K_SPACE:
            print("Playing" if driver.toggle_play() else "Paused")
        elif key == pygame.K_s:
            driver.request_step()
        elif key == pygame.K_r:
            driver.request_reset()
        elif key == pygame.K_v:
            self.reset_view()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            driver.set_dt(driver.panel.dt * 2.0)
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            driver.set_dt(driver.panel.dt / 2.0)

    def render(self) -> None:
        model = self.driver.model
        renderer = self.renderer

        canvas = renderer.create_canvas()
        renderer.draw_grid(canvas)
        renderer.draw_springs(canvas, model.spring_segments(), model.normalized_strains())
        renderer.draw_particles(canvas, model.particle_positions(), model.fixed_mask())
        renderer.draw_info_text(canvas, self.get_info_lines())

        self.window.blit(canvas, canvas.get_rect())
        pygame.display.flip()

    def run(self) -> None:
        self.setup()

        print("Press 1-4 to switch models, SPACE to play, S to step, Q/ESC to quit")
        print()

        start_time = time.time()
        while self.running:
            self.handle_events()
            self.driver.update(substeps=self.config.substeps)

            if self.driver.active != self._view_topology:
                self.reset_view()

            self.render()
            self.clock.tick(self.config.fps)

            self.frame_count += 1
            if self.frame_count % 300 == 0:
                fps = self.frame_count / max(time.time() - start_time, 0.01)
                print(f"  frame {self.frame_count}, {fps:.1f} fps, t={self.driver.model.t:.2f}s")

        pygame.quit()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Interactive mass-spring viewer')
    parser.add_argument('--topology', '-m', choices=sorted(TOPOLOGIES), default='spring',
                        help='Model shown at startup (default: spring)')
    parser.add_argument('--dt', type=float, default=0.001,
                        help='Time step in seconds (default: 0.001)')
    parser.add_argument('--substeps', type=int, default=10,
                        help='Steps per frame while playing (default: 10)')
    parser.add_argument('--device', default=None,
                        help="Warp device, e.g. 'cpu' or 'cuda:0' (default: warp default)")
    parser.add_argument('--config', default=None,
                        help='JSON file with per-topology overrides')
    parser.add_argument('--width', type=int, default=1000)
    parser.add_argument('--height', type=int, default=700)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config = ViewerConfig(
        dt=args.dt,
        substeps=args.substeps,
        device=args.device,
        topology=args.topology,
        config_path=args.config,
        window_width=args.width,
        window_height=args.height,
    )
    Viewer(config).run()


if __name__ == "__main__":
    main()
