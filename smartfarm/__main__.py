"""Entry point for ``python -m smartfarm``.

Loads the default YAML config, builds a simulation engine and an
advisor session, and opens a Pygame window to play the farm.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from smartfarm.advisor.client import AdvisorClient
from smartfarm.advisor.session import AdvisorSession
from smartfarm.simulation.config import SimulationConfig
from smartfarm.simulation.engine import SimulationEngine

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smartfarm",
        description="Smart Farm - crop growing game with an AI advisor",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the RNG seed from the config file",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=80,
        help="Pixel size per grid cell (default: 80)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    return parser


def main() -> None:
    """Parse CLI args, create engine and advisor, launch renderer."""
    args = build_parser().parse_args()
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    if args.seed is not None:
        config.seed = args.seed
    engine = SimulationEngine(config=config)
    advisor = AdvisorSession(AdvisorClient(config.advisor.with_env()))

    # Imported late so the engine stays usable without a display
    from smartfarm.ui.pygame_client import FarmRenderer

    renderer = FarmRenderer(
        engine=engine,
        advisor=advisor,
        cell_size=args.cell_size,
    )
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
