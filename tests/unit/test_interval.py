"""Test the half-maximum confidence interval search."""

import pytest

import numpy as np

from p2dfit import FixedSigma, P2DFitter, sample_p2d
from p2dfit.core.density.p2d import p2d
from p2dfit.core.domain.config import IntervalConfig
from p2dfit.core.fitting.interval import ConfidenceInterval, ConfidenceIntervalSolver
from p2dfit.core.fitting.optimizer import BoundedSimplexOptimizer
from p2dfit.core.fitting.parameters import Bounds
from p2dfit.core.shared.exceptions import ConfigError, NonConvergenceError


class TestConfidenceInterval:
    """Tests for the interval value object."""

    def test_unpacks_as_pair(self):
        """An interval unpacks into (lower, upper)."""
        interval = ConfidenceInterval(lower=4.0, upper=8.0, peak=6.0, peak_density=0.3, level=0.5)
        lower, upper = interval
        assert (lower, upper) == (4.0, 8.0)
        assert interval.as_tuple() == (4.0, 8.0)
        assert interval.width == 4.0


class TestConfidenceIntervalSolver:
    """Tests for ConfidenceIntervalSolver.solve."""

    def setup_method(self):
        """Solver over the default fit bounds."""
        self.solver = ConfidenceIntervalSolver(bounds=Bounds(upper=100.0))

    def test_brackets_the_peak(self):
        """The interval contains mu and the density peak."""
        interval = self.solver.solve(6.0, 1.5)
        assert interval.lower < 6.0 < interval.upper
        assert interval.lower < interval.peak < interval.upper

    def test_crossings_at_half_maximum(self):
        """Both ends sit at half the peak density."""
        interval = self.solver.solve(6.0, 1.5)
        half = 0.5 * interval.peak_density
        assert p2d(interval.lower, 6.0, 1.5) == pytest.approx(half, rel=1e-2)
        assert p2d(interval.upper, 6.0, 1.5) == pytest.approx(half, rel=1e-2)

    def test_peak_is_density_maximum(self):
        """The reported peak is the maximum of the density."""
        interval = self.solver.solve(6.0, 1.5)
        r = np.linspace(0.0, 20.0, 20001)
        densities = p2d(r, 6.0, 1.5)
        assert interval.peak_density == pytest.approx(densities.max(), rel=1e-6)
        assert interval.peak == pytest.approx(r[np.argmax(densities)], abs=1e-2)

    def test_width_scales_with_sigma(self):
        """Far from the origin the width approaches the Gaussian FWHM."""
        interval = self.solver.solve(40.0, 2.0)
        fwhm = 2.0 * np.sqrt(2.0 * np.log(2.0)) * 2.0
        assert interval.width == pytest.approx(fwhm, rel=2e-2)

    def test_other_level(self):
        """Other fractions of the peak are supported."""
        solver = ConfidenceIntervalSolver(
            bounds=Bounds(upper=100.0), config=IntervalConfig(level=0.25)
        )
        narrow = self.solver.solve(6.0, 1.5)
        wide = solver.solve(6.0, 1.5)
        assert wide.level == 0.25
        assert wide.lower < narrow.lower
        assert wide.upper > narrow.upper
        assert p2d(wide.upper, 6.0, 1.5) == pytest.approx(0.25 * wide.peak_density, rel=1e-2)

    def test_counts_evaluations(self):
        """nfev sums the three searches."""
        interval = self.solver.solve(6.0, 1.5)
        assert 0 < interval.nfev <= 3 * 500

    @pytest.mark.parametrize("sigma", [0.0, -1.0])
    def test_sigma_must_be_positive(self, sigma):
        """A non-positive sigma is rejected."""
        with pytest.raises(ConfigError, match="sigma"):
            self.solver.solve(6.0, sigma)

    def test_budget_exhaustion(self):
        """A search that runs out of evaluations raises."""
        solver = ConfidenceIntervalSolver(
            bounds=Bounds(upper=100.0), optimizer=BoundedSimplexOptimizer(max_evaluations=2)
        )
        with pytest.raises(NonConvergenceError):
            solver.solve(6.0, 1.5)


class TestHighSignalInterval:
    """Crossings when the peak sits many sigma away from the origin."""

    @pytest.mark.parametrize(("mu", "sigma"), [(20.0, 1.0), (30.0, 2.0), (60.0, 4.0)])
    def test_crossings_at_half_maximum(self, mu, sigma):
        """The upper search starts far in the tail and still reaches the crossing."""
        solver = ConfidenceIntervalSolver(bounds=Bounds(upper=5.0 * mu))
        interval = solver.solve(mu, sigma)

        assert interval.lower < mu < interval.upper
        assert p2d(interval.lower, mu, sigma) / interval.peak_density == pytest.approx(
            0.5, rel=1e-2
        )
        assert p2d(interval.upper, mu, sigma) / interval.peak_density == pytest.approx(
            0.5, rel=1e-2
        )

    def test_session_interval_far_from_origin(self):
        """The session reaches the same crossings for a high mu/sigma ratio."""
        fitter = P2DFitter(
            sample_p2d(20.0, 1.0, 200, 1), FixedSigma(sigma=1.0), upper_bound=100.0
        )
        interval = fitter.confidence_interval(20.0, 1.0)
        assert p2d(interval.upper, 20.0, 1.0) == pytest.approx(
            0.5 * interval.peak_density, rel=1e-2
        )
        # Near-Gaussian shape: half-maximum at about 1.18 sigma above the peak
        assert interval.upper - interval.peak == pytest.approx(1.18, abs=0.1)


class TestLinearResidualSearch:
    """The plain squared-difference search over the full bounds."""

    def setup_method(self):
        """Solver reproducing the unsplit linear search."""
        self.solver = ConfidenceIntervalSolver(
            bounds=Bounds(upper=100.0),
            config=IntervalConfig(residual="linear", split_at_peak=False),
        )

    def test_lower_crossing(self):
        """The lower search from half the peak reaches the crossing."""
        interval = self.solver.solve(6.0, 1.5)
        assert interval.lower == pytest.approx(4.4432, abs=1e-3)
        assert p2d(interval.lower, 6.0, 1.5) == pytest.approx(
            0.5 * interval.peak_density, rel=1e-2
        )

    def test_upper_search_stays_at_start(self):
        """From four times the peak the linear residual is flat and the search stops at once."""
        interval = self.solver.solve(6.0, 1.5)
        assert interval.upper == pytest.approx(4.0 * interval.peak, rel=1e-6)
        assert interval.upper == pytest.approx(24.716, abs=1e-2)
        assert p2d(interval.upper, 6.0, 1.5) / interval.peak_density < 1e-20
