import argparse
import time

from orbitalsandbox import config, helpers
from orbitalsandbox.config import MassClass, SimulationConfig
from orbitalsandbox.engine import logger
from orbitalsandbox.engine.errors import SimulationError
from orbitalsandbox.engine.insertion import OrbitTarget
from orbitalsandbox.engine.simulation import Simulation
from orbitalsandbox.fmt import eng_format, vec_format

PRESETS = ("binary", "unary")


def build_simulation(preset: str, seed: int|None) -> Simulation:
    if preset == "unary":
        bodies = [helpers.create_primary()]
    elif preset == "binary":
        bodies = helpers.binary_pair()
    else:
        raise ValueError(f"Unknown preset {preset!r}, expected one of {PRESETS}.")
    return Simulation.create(SimulationConfig(bodies=bodies, seed=seed))


def populate(sim: Simulation, count: int, mass_class: MassClass, target: OrbitTarget, eccentricity: float) -> int:
    """Spawn ``count`` random bodies; rejected placements are logged and skipped."""
    added = 0
    for _ in range(count):
        try:
            sim.add_random_body(mass_class, target, eccentricity)
            added += 1
        except SimulationError as e:
            logger.warning("Spawn rejected: %s", e)
    return added


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="orbitalsandbox",
        description="Run the N-body engine headless and report the system state.",
    )
    parser.add_argument("--preset", choices=PRESETS, default="binary",
                        help="Seed system (default: binary)")
    parser.add_argument("--bodies", type=int, default=8,
                        help="Random bodies to spawn after seeding (default: 8)")
    parser.add_argument("--mass", choices=[m.name.lower() for m in MassClass], default="small",
                        help="Mass class of spawned bodies (default: small)")
    parser.add_argument("--target", choices=[t.value for t in OrbitTarget], default=OrbitTarget.GREATEST_FORCE.value,
                        help="What spawned bodies orbit (default: greatest_force)")
    parser.add_argument("--eccentricity", type=float, default=1.0,
                        help="Orbital speed factor, 1.0 is circular (default: 1.0)")
    parser.add_argument("--ticks", type=int, default=1000,
                        help="Ticks to simulate (default: 1000)")
    parser.add_argument("--report-every", type=int, default=100,
                        help="Log the barycenter every N ticks, 0 disables (default: 100)")
    parser.add_argument("--seed", type=int, default=config.DEFAULT_SEED,
                        help="Random seed for spawns and colours")
    return parser.parse_args(argv)


def run(argv=None):
    args = parse_args(argv)

    sim = build_simulation(args.preset, args.seed)
    added = populate(sim, args.bodies, MassClass[args.mass.upper()], OrbitTarget(args.target), args.eccentricity)
    logger.info("Spawned %s of %s requested bodies.", added, args.bodies)

    start = time.perf_counter()
    for _ in range(args.ticks):
        sim.tick()
        if args.report_every and sim.ticks % args.report_every == 0:
            logger.info("[T+%s] barycenter=%s", sim.ticks, vec_format(sim.barycenter()))
    elapsed = time.perf_counter() - start

    per_tick = elapsed / args.ticks if args.ticks else 0.0
    print(f"{len(sim)} bodies, {sim.ticks} ticks, {eng_format(per_tick)} s/tick")
    print(f"barycenter {vec_format(sim.barycenter())}")
    for idx, inst in enumerate(sim.instances()):
        print(f"  #{idx:<3d} pos={vec_format(inst.position)} scale={inst.scale:.3f}")


if __name__ == "__main__":
    run()
