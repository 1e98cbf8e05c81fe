"""
Console driver.

Solves the selected class I configurations in order and writes one OFF file
per solution into the output directory.
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import DEFAULT_OUTPUT_DIR, DEFAULT_SETTINGS, SolverSettings
from .configurations import CONFIGURATIONS, configurations_for, run_configuration
from .export import export_solution
from .geometry import SolverContext
from .logging_config import setup_logging

logger = logging.getLogger(__name__)

FREQUENCIES = sorted({c.frequency for c in CONFIGURATIONS.values()})


def argparse_setup(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute truncatable class I (b,0) icosahedron configurations and write OFF meshes."
    )
    parser.add_argument(
        "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        dest="output_dir",
        help="Directory for the generated OFF files."
    )
    parser.add_argument(
        "--frequency",
        type=int,
        nargs="+",
        choices=FREQUENCIES,
        default=FREQUENCIES,
        help="Frequencies to solve (default: all)."
    )
    parser.add_argument(
        "--tolerance",
        type=float,
        default=DEFAULT_SETTINGS.tolerance,
        help="Convergence tolerance in radians for the constrained configurations."
    )
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=DEFAULT_SETTINGS.max_iterations,
        dest="max_iterations",
        help="Iteration cap for each root search."
    )
    parser.add_argument(
        "--full-face",
        action="store_true",
        default=False,
        dest="full_face",
        help="Also write the patch replicated over the whole face."
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        default=False,
        help="Enable debug logging (root search trace, ring report)."
    )
    parser.add_argument(
        "--log-file",
        default=None,
        dest="log_file",
        help="Optional file to copy the log to."
    )
    return parser.parse_args(argv)


def run(
    frequencies: list[int],
    output_dir: str | Path,
    settings: SolverSettings = DEFAULT_SETTINGS,
    full_face: bool = False
) -> list[Path]:
    """Solve and export every configuration of the given frequencies."""
    output_dir = Path(output_dir)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        # solves still run; each export reports its own failure
        logger.error("Cannot create output directory %s: %s", output_dir, exc)

    context = SolverContext.create(settings)
    written = []

    for frequency in sorted(set(frequencies)):
        for configuration in configurations_for(frequency):
            solution = run_configuration(context, configuration.key)
            if not solution.converged:
                logger.warning("%s did not converge; exporting last iterate", configuration.name)
            written.extend(export_solution(solution, output_dir, full_face=full_face))

    return written


def main(argv: list[str] | None = None) -> int:
    args = argparse_setup(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    settings = SolverSettings(tolerance=args.tolerance, max_iterations=args.max_iterations)
    written = run(args.frequency, args.output_dir, settings, full_face=args.full_face)
    logger.info("Wrote %d file(s) to %s", len(written), args.output_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
