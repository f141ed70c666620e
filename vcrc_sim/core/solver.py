"""
Bounded one-dimensional root finder for implicit cycle equations.

Several cycle variants have a scalar unknown (diffuser outlet pressure,
injection quality, ejector flow ratio) that appears on both sides of its own
defining balance. Those cycles express the balance as a residual function
guess -> discrepancy and hand it to find_root_near_guess().
"""

import logging
from typing import Callable

import numpy as np
from scipy.optimize import newton

from vcrc_sim.core.errors import NoSolutionError


logger = logging.getLogger(__name__)

# Restarts from the last root while the residual is still above tolerance
MAX_POLISH_PASSES = 3


def find_root_near_guess(func: Callable[[float], float],
                         guess: float,
                         lower: float,
                         upper: float,
                         tolerance: float,
                         max_iterations: int = 100) -> float:
    """
    Secant (derivative-free Newton) search confined to a bracket.

    Algorithm:
        1. scipy.optimize.newton iterates from ``guess`` until the step is
           below ``tolerance``
        2. The residual at that root must also be below ``tolerance``;
           otherwise the search restarts from the root
        3. Fail as soon as an iterate leaves [lower, upper]

    The search is never widened or approximated: leaving the bracket, a
    non-finite residual, a stalled secant or exhausting the iteration budget
    all raise NoSolutionError. Exceptions raised by ``func`` itself
    (configuration or backend errors at a trial point) propagate unchanged.

    Args:
        func: Residual function of one scalar
        guess: Starting point (must lie inside the bracket)
        lower: Lower bound of the admissible interval
        upper: Upper bound of the admissible interval
        tolerance: Absolute tolerance on both the step and the residual
        max_iterations: Iteration budget of each scipy pass

    Returns:
        Root of ``func`` inside [lower, upper]

    Raises:
        NoSolutionError: If the iteration does not converge inside the bracket
    """
    if not lower <= guess <= upper:
        raise NoSolutionError(f"Initial guess {guess} is outside [{lower}, {upper}]")

    def bounded(x: float) -> float:
        if not lower <= x <= upper:
            logger.debug("Secant iterate %g left the bracket [%g, %g]", x, lower, upper)
            raise NoSolutionError()
        value = func(x)
        if not np.isfinite(value):
            logger.debug("Residual is not finite at x=%g", x)
            raise NoSolutionError()
        return value

    root = guess
    for attempt in range(1, MAX_POLISH_PASSES + 1):
        try:
            root, info = newton(bounded, root, tol=tolerance, maxiter=max_iterations,
                                full_output=True)
        except (RuntimeError, ZeroDivisionError) as error:
            logger.debug("Secant search from %g failed: %s", guess, error)
            raise NoSolutionError() from error

        residual = bounded(root)
        logger.debug("Pass %d: x=%.10g, f=%.6g after %d iterations",
                     attempt, root, residual, info.iterations)
        if abs(residual) < tolerance:
            return root

    logger.debug("Residual still above %g after %d passes", tolerance, MAX_POLISH_PASSES)
    raise NoSolutionError()
