"""Command-line interface for NuclideSim using argparse."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from nuclidesim.core.config import EngineConfig, load_config
from nuclidesim.core.nuclide import format_nuclide_name, in_bounds
from nuclidesim.io.artifacts import write_artifact
from nuclidesim.physics.classifier import classify_channel
from nuclidesim.physics.engine import NuclideEngine
from nuclidesim.physics.synthesis import DEFAULT_MAX_PARTICLES, NucleosynthesisSimulation
from nuclidesim.plots.halflife_map import plot_halflife_map, png_sink

logger = logging.getLogger(__name__)


def _setup(args: argparse.Namespace) -> EngineConfig:
    config = load_config(args.config)
    logging.basicConfig(level=config.log_level, format="%(asctime)s - %(levelname)s - %(message)s")
    return config


def cmd_info(args: argparse.Namespace) -> int:
    config = _setup(args)
    engine = NuclideEngine.from_config(config)
    z, n = args.z, args.n

    name = format_nuclide_name(z, n) or "vacuum"
    if engine.is_tabulated(z, n):
        source = "tabulated"
    elif in_bounds(z, n):
        source = "classified"
    else:
        source = "off the chart"
    print(f"{name} (Z={z}, N={n}, A={z + n})")
    print(f"  Half-life: {engine.format_half_life(z, n)}")
    print(f"  Decay data: {source}")
    channels = engine.get_decay_channels(z, n)
    if not channels:
        print("  Channels: none")
    for kind, p in channels:
        print(f"  {kind.label:<10s} {p * 100:8.4f}%")
    if z >= 0:
        print(f"  Element abundance: {engine.format_abundance(z)}")
        best_n = engine.longest_lived_isotope(z)
        if best_n is not None:
            print(f"  Longest-lived isotope: {format_nuclide_name(z, best_n)}")
    return 0


def cmd_build_map(args: argparse.Namespace) -> int:
    config = _setup(args)
    engine = NuclideEngine.from_config(config)
    output = Path(args.output or config.map_output)
    builder = engine.map_builder()
    builder.build_and_persist(png_sink(output))
    print(f"Wrote half-life map ({builder.width}x{builder.height}) to {output}")

    if args.figure:
        import matplotlib.pyplot as plt

        fig, _ = plot_halflife_map(builder)
        fig.savefig(args.figure, dpi=150, bbox_inches="tight")
        plt.close(fig)
        print(f"Wrote labelled figure to {args.figure}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    config = _setup(args)
    engine = NuclideEngine.from_config(config)
    issues = engine.table.validate(tolerance=config.branching_tolerance)
    print(f"Checked {len(engine.table)} nuclides")
    for issue in issues:
        tag = "known" if issue.whitelisted else "UNEXPECTED"
        print(f"  {format_nuclide_name(issue.z, issue.n):<10s} sum={issue.total:.6f} [{tag}]")
    unexpected = [d for d in issues if not d.whitelisted]
    if unexpected:
        print(f"{len(unexpected)} nuclides have inconsistent branching ratios")
        return 1
    print("All branching ratios consistent")
    return 0


def cmd_classify(args: argparse.Namespace) -> int:
    if args.z + args.n == 0:
        print("vacuum: no decay")
        return 0
    kind = classify_channel(args.z, args.n)
    print(f"{format_nuclide_name(args.z, args.n)}: {kind.label} ({kind.value})")
    return 0


def cmd_simulate(args: argparse.Namespace) -> int:
    config = _setup(args)
    seed = args.seed if args.seed is not None else config.random_seed
    engine = NuclideEngine.from_config(config)
    sim = NucleosynthesisSimulation(engine, max_particles=args.particles, seed=seed)

    dt = config.simulated_seconds(args.dt)
    reports = sim.run(args.steps, dt=dt)
    decayed = sum(r.decayed for r in reports)
    captured = sum(r.captured for r in reports)
    print(f"Ran {args.steps} steps: {decayed} decays, {captured} captures")
    print(f"Population {len(sim)} particles, active process: {sim.process.value}")
    heaviest = sim.heaviest()
    if heaviest is not None:
        print(f"Heaviest nuclide: {format_nuclide_name(heaviest[0], heaviest[1])}")
    for line in sim.summary(top=args.top):
        print(f"  {line}")

    if args.output:
        payload = {
            "steps": args.steps,
            "seed": seed,
            "process": sim.process.value,
            "population": [
                {"z": z, "n": n, "name": format_nuclide_name(z, n), "count": count}
                for (z, n), count in sorted(sim.population().items())
            ],
        }
        path = write_artifact(args.output, payload)
        print(f"Saved population to {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Nuclide decay engine and chart-of-nuclides tools")
    parser.add_argument("--config", type=Path, help="JSON or YAML engine configuration")
    subparsers = parser.add_subparsers(dest="command", required=True)

    info = subparsers.add_parser("info", help="Show half-life and decay channels of a nuclide")
    info.add_argument("z", type=int)
    info.add_argument("n", type=int)
    info.set_defaults(func=cmd_info)

    build_map = subparsers.add_parser("build-map", help="Render the half-life map to a PNG")
    build_map.add_argument("--output", type=Path, help="PNG path (defaults to config map_output)")
    build_map.add_argument("--figure", type=Path, help="Also save a labelled matplotlib figure")
    build_map.set_defaults(func=cmd_build_map)

    validate = subparsers.add_parser("validate", help="Check branching ratios of the decay table")
    validate.set_defaults(func=cmd_validate)

    classify = subparsers.add_parser("classify", help="Fallback channel for an untabulated nuclide")
    classify.add_argument("z", type=int)
    classify.add_argument("n", type=int)
    classify.set_defaults(func=cmd_classify)

    simulate = subparsers.add_parser("simulate", help="Run the nucleosynthesis map simulation")
    simulate.add_argument("--steps", type=int, default=100)
    simulate.add_argument("--seed", type=int)
    simulate.add_argument("--particles", type=int, default=DEFAULT_MAX_PARTICLES)
    simulate.add_argument("--dt", type=float, default=1.0, help="Wall-clock seconds per step")
    simulate.add_argument("--top", type=int, default=10)
    simulate.add_argument("--output", type=Path, help="JSON or YAML population summary")
    simulate.set_defaults(func=cmd_simulate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
