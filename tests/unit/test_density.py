"""Test the P2D probability density."""

import pytest

import numpy as np
from scipy import integrate, stats


class TestP2DDensity:
    """Tests for p2d(r; mu, sigma)."""

    def test_zero_at_origin(self):
        """The density vanishes at r = 0."""
        from p2dfit.core.density.p2d import p2d

        assert p2d(0.0, 6.0, 1.5) == 0.0

    def test_zero_for_negative_distance(self):
        """Negative distances have zero density, not NaN."""
        from p2dfit.core.density.p2d import p2d

        assert p2d(-1.0, 6.0, 1.5) == 0.0

    def test_degenerate_sigma(self):
        """sigma <= 0 gives zero density, never NaN."""
        from p2dfit.core.density.p2d import p2d

        values = p2d(np.array([1.0, 6.0]), 6.0, 0.0)
        np.testing.assert_array_equal(values, [0.0, 0.0])
        assert p2d(6.0, 6.0, -2.0) == 0.0

    @pytest.mark.parametrize(("mu", "sigma"), [(6.0, 1.5), (0.0, 2.0), (3.0, 0.5), (50.0, 10.0)])
    def test_matches_rice_distribution(self, mu, sigma):
        """P2D is the Rice distribution with shape mu/sigma and scale sigma."""
        from p2dfit.core.density.p2d import p2d

        r = np.linspace(0.01, mu + 8 * sigma, 200)
        expected = stats.rice.pdf(r, mu / sigma, scale=sigma)
        np.testing.assert_allclose(p2d(r, mu, sigma), expected, rtol=1e-9, atol=1e-300)

    @pytest.mark.parametrize(("mu", "sigma"), [(6.0, 1.5), (0.0, 1.0), (2.0, 3.0)])
    def test_normalized(self, mu, sigma):
        """The density integrates to one over [0, inf)."""
        from p2dfit.core.density.p2d import p2d

        # Mass beyond mu + 12 sigma is below 1e-30
        total, _ = integrate.quad(lambda r: p2d(r, mu, sigma), 0.0, mu + 12 * sigma, limit=200)
        assert total == pytest.approx(1.0, abs=1e-4)

    def test_non_negative(self):
        """The density is never negative."""
        from p2dfit.core.density.p2d import p2d

        r = np.linspace(0.0, 100.0, 1001)
        assert np.all(p2d(r, 20.0, 4.0) >= 0.0)

    def test_symmetric_in_mu(self):
        """Only |mu| matters."""
        from p2dfit.core.density.p2d import p2d

        r = np.array([1.0, 4.0, 9.0])
        np.testing.assert_allclose(p2d(r, -5.0, 2.0), p2d(r, 5.0, 2.0))

    def test_large_bessel_argument_stays_finite(self):
        """r*mu/sigma^2 far beyond I0 overflow still gives a finite density."""
        from p2dfit.core.density.p2d import p2d

        value = p2d(1000.0, 1000.0, 1.0)
        assert np.isfinite(value)
        # Far from the origin P2D approaches a normal density centred on mu
        assert value == pytest.approx(1.0 / np.sqrt(2.0 * np.pi), rel=1e-3)

    def test_array_input(self):
        """Array input gives an array of the same shape."""
        from p2dfit.core.density.p2d import p2d

        r = np.linspace(0.0, 12.0, 25)
        values = p2d(r, 6.0, 1.5)
        assert isinstance(values, np.ndarray)
        assert values.shape == r.shape

    def test_scalar_input_returns_float(self):
        """Scalar input gives a Python float."""
        from p2dfit.core.density.p2d import p2d

        assert isinstance(p2d(5.0, 6.0, 1.5), float)


class TestLogP2D:
    """Tests for log p2d."""

    def test_matches_log_of_density(self):
        """log_p2d equals log(p2d) where the density is representable."""
        from p2dfit.core.density.p2d import log_p2d, p2d

        r = np.linspace(0.5, 15.0, 30)
        np.testing.assert_allclose(log_p2d(r, 6.0, 1.5), np.log(p2d(r, 6.0, 1.5)), rtol=1e-12)

    def test_minus_inf_where_density_vanishes(self):
        """log density is -inf at r = 0 and for sigma = 0."""
        from p2dfit.core.density.p2d import log_p2d

        assert log_p2d(0.0, 6.0, 1.5) == -np.inf
        assert log_p2d(5.0, 6.0, 0.0) == -np.inf

    def test_finite_deep_in_tail(self):
        """Far tail values underflow p2d but not log_p2d."""
        from p2dfit.core.density.p2d import log_p2d, p2d

        assert p2d(200.0, 6.0, 1.5) == 0.0
        assert np.isfinite(log_p2d(200.0, 6.0, 1.5))

    def test_matches_rice_logpdf(self):
        """Log form agrees with scipy's Rice log-density."""
        from p2dfit.core.density.p2d import log_p2d

        r = np.array([0.1, 3.0, 6.0, 12.0, 40.0])
        expected = stats.rice.logpdf(r, 6.0 / 1.5, scale=1.5)
        np.testing.assert_allclose(log_p2d(r, 6.0, 1.5), expected, rtol=1e-9)
