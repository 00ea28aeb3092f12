#!/usr/bin/env python3
"""
Gravity simulator headless driver.

What this module does
- Maintains a SimulationController that owns a World and the run settings;
  all access is guarded by a re-entrant lock so a renderer thread and a UI
  thread can share it.
- Builds worlds from JSON templates or from a random population.
- Runs the simulation headless from the command line and logs a summary.

The driver never draws anything. A renderer polls snapshot() once per frame and
copies each body's display position, display radius and trail window onto its
own scene objects.

Running
1) Install: `pip install -e .`
2) Run: `python gravity_sim.py --template head_on.json --frames 400`
   or:  `python gravity_sim.py --planets 200 --shape sphere --spawn-sun --frames 50`
"""

import argparse
import logging
import sys
import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from gravcore.constants import STEP_TIME, TRACE_NUM
from gravcore.data_models import Body
from gravcore.population import SPAWN_SHAPES, SpawnConfig, populate
from gravcore.presets_loader import list_templates, load_template
from gravcore.vector_utils import Vec3, vec_len
from gravcore.world import World

logger = logging.getLogger("gravity_sim")


@dataclass
class BodyView:
    """Per-frame display state of one body."""
    id: int
    name: str
    position: Vec3
    radius: float
    trail_start: int
    trail_end: int
    trail: np.ndarray  # read-only; rows [trail_start, trail_end) are live


# ============================================================
# Simulation Controller (Shared State)
# ============================================================

class SimulationController:
    """
    Shared simulation state for whoever drives the frame loop.
    Includes thread-safe operations guarded by a lock.
    """
    def __init__(self, world: Optional[World] = None):
        self.lock = threading.RLock()
        self.world = world if world is not None else World(STEP_TIME)
        self.playing = True
        self.frame = 0
        self.last_collision_msg: Optional[str] = None

    def replace_world(self, world: World) -> None:
        with self.lock:
            self.world = world
            self.frame = 0
            self.last_collision_msg = None

    def load_template(self, file_name: str, trace_num: Optional[int] = None) -> World:
        template = load_template(file_name, trace_num=trace_num)
        logger.info("Loaded template '%s' with %d bodies", template.name, len(template.body_specs))
        world = template.build_world()
        self.replace_world(world)
        return world

    def spawn(self, config: SpawnConfig, step_time: float = STEP_TIME) -> World:
        world = populate(World(step_time), config)
        self.replace_world(world)
        return world

    def toggle_play(self) -> bool:
        with self.lock:
            self.playing = not self.playing
            return self.playing

    def step_once(self) -> None:
        """Advance exactly one world step, regardless of the play state."""
        with self.lock:
            self.world.step()
            self.frame += 1
            for fusion in self.world.last_fusions:
                self.last_collision_msg = f"Merged {fusion.a.name} + {fusion.b.name}"

    def advance(self, frames: int) -> int:
        """Run up to ``frames`` frames while playing; returns the number of steps taken."""
        taken = 0
        for _ in range(frames):
            with self.lock:
                if not self.playing:
                    break
                self.step_once()
            taken += 1
        return taken

    def get_body(self, body_id: int) -> Optional[Body]:
        with self.lock:
            return self.world.find_body(body_id)

    def snapshot(self) -> List[BodyView]:
        with self.lock:
            views = []
            for b in self.world.bodies:
                start, end, buf = b.trail_window()
                views.append(BodyView(b.id, b.name, b.sync(), b.display_radius, start, end, buf))
            return views

    def summary(self) -> Tuple[float, int, float, float]:
        """(sim_time, body count, total mass, |total momentum|)"""
        with self.lock:
            w = self.world
            return w.sim_time, len(w), w.total_mass(), vec_len(w.total_momentum())


# ============================================================
# Command line
# ============================================================

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Headless N-body gravity simulation")
    p.add_argument("--template", help="template file name from gravcore/templates or an absolute path")
    p.add_argument("--list-templates", action="store_true", help="list available templates and exit")
    p.add_argument("--planets", type=int, default=300, help="number of random planets")
    p.add_argument("--spawn-radius", type=float, default=1.5)
    p.add_argument("--planet-mass", type=float, default=500.0)
    p.add_argument("--planet-velocity", type=float, default=0.5)
    p.add_argument("--shape", choices=SPAWN_SHAPES, default="flat")
    p.add_argument("--spawn-sun", action="store_true")
    p.add_argument("--tail-length", type=int, default=None,
                   help=f"trail samples per body (default {TRACE_NUM}, or the template's own setting)")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--step-time", type=float, default=STEP_TIME, help="simulated seconds per frame")
    p.add_argument("--frames", type=int, default=100)
    p.add_argument("--report-every", type=int, default=10)
    p.add_argument("--log-level", default="INFO")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO),
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    if args.list_templates:
        for fn, display in list_templates():
            print(f"{fn}\t{display}")
        return 0

    sim = SimulationController()
    if args.template:
        sim.load_template(args.template, trace_num=args.tail_length)
    else:
        sim.spawn(SpawnConfig(
            num_planets=args.planets,
            spawn_radius=args.spawn_radius,
            planet_mass=args.planet_mass,
            planet_velocity=args.planet_velocity,
            spawn_shape=args.shape,
            spawn_sun=args.spawn_sun,
            trace_num=args.tail_length if args.tail_length is not None else TRACE_NUM,
            seed=args.seed,
        ), step_time=args.step_time)

    for frame in range(1, args.frames + 1):
        sim.step_once()
        if args.report_every > 0 and frame % args.report_every == 0:
            t, n, m, p = sim.summary()
            logger.info("frame %d: t=%.6gs bodies=%d mass=%.6gkg |p|=%.6g", frame, t, n, m, p)

    t, n, m, p = sim.summary()
    logger.info("Finished %d frames: t=%.6gs bodies=%d mass=%.6gkg |p|=%.6g", args.frames, t, n, m, p)
    if sim.last_collision_msg:
        logger.info("Last collision: %s", sim.last_collision_msg)
    return 0


if __name__ == "__main__":
    sys.exit(main())
