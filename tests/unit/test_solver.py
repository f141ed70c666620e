"""Unit tests for the bounded secant root finder."""

import math

import pytest
from scipy.optimize import brentq

from vcrc_sim.core.errors import ConfigurationError, NoSolutionError
from vcrc_sim.core.solver import find_root_near_guess


class TestFindRootNearGuess:
    """Test convergence and failure modes"""

    def test_square_root_of_two(self):
        root = find_root_near_guess(lambda x: x * x - 2, 1.0, 0.0, 2.0, 1e-10)
        assert root == pytest.approx(math.sqrt(2), abs=1e-9)

    def test_matches_bracketing_solver(self):
        """Secant and Brent agree on a smooth transcendental residual"""
        func = lambda x: math.cos(x) - x  # noqa: E731
        root = find_root_near_guess(func, 0.5, 0.0, 1.0, 1e-12)
        assert root == pytest.approx(brentq(func, 0.0, 1.0, xtol=1e-14), abs=1e-10)

    def test_large_scale_tolerance(self):
        """Pressure-like scale: absolute tolerance in the unknown's own units"""
        root = find_root_near_guess(lambda p: 3.5e6 - p, 1e6, 1e5, 7e6, 10.0)
        assert abs(root - 3.5e6) < 10.0

    def test_residual_below_tolerance(self):
        """A steep residual must itself be below the tolerance, not only the step"""
        func = lambda x: 2000.0 * (x - 0.8) + 50.0 * (x - 0.8) ** 2  # noqa: E731
        root = find_root_near_guess(func, 0.5, 1e-9, 1.0, 1e-3)
        assert abs(func(root)) < 1e-3

    def test_guess_outside_bracket(self):
        with pytest.raises(NoSolutionError):
            find_root_near_guess(lambda x: x - 1, 5.0, 0.0, 2.0, 1e-9)

    def test_leaving_bracket_fails(self):
        """The bracket is never widened"""
        with pytest.raises(NoSolutionError, match="Solution not found!"):
            find_root_near_guess(lambda x: x - 10, 1.0, 0.0, 5.0, 1e-9)

    def test_no_real_root_fails(self):
        """x^2 + 1 has no real root: scipy's failure surfaces as NoSolutionError"""
        with pytest.raises(NoSolutionError):
            find_root_near_guess(lambda x: x * x + 1, 1.0, -5.0, 5.0, 1e-9)

    def test_non_finite_residual_fails(self):
        with pytest.raises(NoSolutionError):
            find_root_near_guess(lambda x: math.nan, 1.0, 0.0, 2.0, 1e-9)

    def test_iteration_budget(self):
        with pytest.raises(NoSolutionError):
            find_root_near_guess(lambda x: x * x - 2, 1.0, 0.0, 2.0, 1e-10, max_iterations=1)

    def test_residual_errors_propagate(self):
        """Errors raised by the residual are not converted"""
        def residual(x):
            raise ConfigurationError("bad trial state")

        with pytest.raises(ConfigurationError, match="bad trial state"):
            find_root_near_guess(residual, 1.0, 0.0, 2.0, 1e-9)
