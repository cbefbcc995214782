#!/usr/bin/env python3
"""
Record the demo headlessly as an animated GIF.

Usage:
    python scripts/record_gif.py --output drive.gif --frames 300
"""

import argparse
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
from PIL import Image
from tqdm import tqdm

from hillcar.app.loop import LoopConfig, SimulationLoop
from hillcar.physics.scene_generator import create_flat_world, create_world


def surface_to_image(surface: pygame.Surface) -> Image.Image:
    """Copy a pygame surface into a PIL image."""
    data = pygame.image.tobytes(surface, "RGB")
    return Image.frombytes("RGB", surface.get_size(), data)


def record(output_path, n_frames=300, fps=30, size=(480, 270), flat=False, capture_every=2):
    """Run the loop on an offscreen surface and save every Nth frame."""
    pygame.init()
    surface = pygame.Surface(size)
    loop_config = LoopConfig(fps=fps, window_size=size)
    loop = SimulationLoop(
        surface,
        scene_factory=create_flat_world if flat else create_world,
        loop_config=loop_config,
    )

    # Simulated clock: one display frame per 1/60 s
    frame_dt = 1 / 60.0
    images = []
    for i in tqdm(range(n_frames), desc="Recording"):
        loop.frame(i * frame_dt)
        if i % capture_every == 0:
            images.append(surface_to_image(surface))
    pygame.quit()

    if not images:
        raise ValueError("No frames captured")

    images[0].save(
        output_path,
        save_all=True,
        append_images=images[1:],
        duration=int(1000 * frame_dt * capture_every),
        loop=0,
    )
    state = loop.session.world.get_state()
    car = state["objects"][0]["position"]
    print(f"[record] saved {len(images)} frames to {output_path}")
    print(f"[record] car at x={car['x']:.2f} y={car['y']:.2f} after {state['frame']} steps")


def main():
    parser = argparse.ArgumentParser(
        description="Record the hill-driving car to a GIF",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--output", type=str, default="hillcar.gif", help="Output GIF path")
    parser.add_argument("--frames", type=int, default=300, help="Display frames to simulate")
    parser.add_argument("--every", type=int, default=2, help="Capture every Nth frame")
    parser.add_argument("--width", type=int, default=480, help="Frame width")
    parser.add_argument("--height", type=int, default=270, help="Frame height")
    parser.add_argument("--flat", action="store_true", help="Use the flat test-bed ground")
    args = parser.parse_args()

    record(
        args.output,
        n_frames=args.frames,
        size=(args.width, args.height),
        flat=args.flat,
        capture_every=args.every,
    )


if __name__ == "__main__":
    main()
