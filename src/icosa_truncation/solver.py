"""
One-dimensional constraint root finder.

Drives a free angle until a residual reaches zero. The residual is usually a
closure that places vertices as a side effect, so the last evaluation always
leaves the vertex table consistent with the returned value.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .config import DEFAULT_SETTINGS, SolverSettings

logger = logging.getLogger(__name__)

# Residual reported when the iteration cap is reached
NOT_CONVERGED = -1.0


@dataclass
class RootResult:
    """Outcome of a root search.

    Attributes:
        x: Final value of the free parameter (the last one evaluated)
        residual: ``|f(x)|`` at exit, or ``NOT_CONVERGED`` past the cap
        iterations: Number of residual evaluations
    """

    x: float
    residual: float
    iterations: int

    @property
    def converged(self) -> bool:
        return self.residual >= 0.0


def find_root(
    residual: Callable[[float], float],
    seed: float,
    settings: SolverSettings = DEFAULT_SETTINGS
) -> RootResult:
    """Adaptive step search for ``residual(x) == 0``.

    The step keeps its direction while the residual shrinks, turns back when
    it grows, and is halved (and reversed) when the residual changes sign.

    Args:
        residual: Function of the free parameter
        seed: Starting value
        settings: Tolerance, iteration cap and initial step

    Returns:
        RootResult with the final parameter value
    """
    x = seed
    delta = settings.initial_step
    last = 0.0
    iterations = 0

    while True:
        iterations += 1
        diff = residual(x)
        logger.debug("iteration %d: x=%.12f diff=%.3e delta=%.3e", iterations, x, diff, delta)

        if abs(diff) <= settings.tolerance:
            return RootResult(x=x, residual=abs(diff), iterations=iterations)

        if iterations >= settings.max_iterations:
            logger.warning(
                "Root search exceeded %d iterations, current diff = %.10f",
                settings.max_iterations, diff,
            )
            return RootResult(x=x, residual=NOT_CONVERGED, iterations=iterations)

        if last == 0.0:
            x += delta
        elif (diff > 0.0) == (last > 0.0):
            if abs(diff) < abs(last):
                x += delta
            else:
                # moving away: undo and go the other way
                x -= delta
                delta = -delta
                x += delta
        else:
            # crossed the root: undo and retry with half the step
            x -= delta
            delta /= -2.0
            x += delta

        last = diff
