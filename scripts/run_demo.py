#!/usr/bin/env python3
"""
Open a window and drive the car over the hills.

Usage:
    python scripts/run_demo.py
    python scripts/run_demo.py --flat --pixel-ratio 2

Keys:
    Space  pause / resume
    R      reset
    + / =  zoom in
    - / _  zoom out
    Esc    quit
"""

import argparse

from hillcar.app.loop import LoopConfig, SimulationLoop, open_surface
from hillcar.physics.scene_generator import create_flat_world, create_world
from hillcar.render.renderer import RendererConfig


def main():
    parser = argparse.ArgumentParser(
        description="Interactive hill-driving car demo",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=960, help="Window width (logical pixels)")
    parser.add_argument("--height", type=int, default=540, help="Window height (logical pixels)")
    parser.add_argument("--pixel-ratio", type=float, default=1.0, help="Device pixels per logical pixel")
    parser.add_argument("--fps", type=int, default=60, help="Display frame cap")
    parser.add_argument("--flat", action="store_true", help="Use the flat test-bed ground")
    parser.add_argument("--debug-shapes", action="store_true", help="Print fixture kinds on start")
    args = parser.parse_args()

    loop_config = LoopConfig(fps=args.fps, window_size=(args.width, args.height))
    renderer_config = RendererConfig(pixel_ratio=args.pixel_ratio)

    surface = open_surface(loop_config.window_size, loop_config.title, args.pixel_ratio)
    loop = SimulationLoop(
        surface,
        scene_factory=create_flat_world if args.flat else create_world,
        renderer_config=renderer_config,
        loop_config=loop_config,
    )
    if args.debug_shapes:
        loop.session.renderer.log_shape_kinds()

    print(f"Running {'flat' if args.flat else 'hills'} scene at {args.fps} fps (Esc to quit)")
    loop.run()


if __name__ == "__main__":
    main()
