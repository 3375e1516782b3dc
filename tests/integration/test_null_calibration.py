import pytest
import numpy as np
from scipy import stats

from gencorr import TrimmedSpearmanCorrelationTest, trimmed_spearman_test


def _gaussian_copula(n, r, rng):
    """Uniform residual pairs with latent Gaussian correlation r."""
    z1 = rng.standard_normal(n)
    z2 = r * z1 + np.sqrt(1 - r ** 2) * rng.standard_normal(n)
    return stats.norm.cdf(z1), stats.norm.cdf(z2)


def test_null_rejection_rate():
    """Under independence the p-value is close to uniform."""
    rng = np.random.default_rng(12345)
    n, q, trials, alpha = 2000, 2, 500, 0.05

    pvalues = np.empty(trials)
    for k in range(trials):
        U1 = rng.uniform(size=n)
        U2 = rng.uniform(size=n)
        pvalues[k] = TrimmedSpearmanCorrelationTest(q, U1, U2).p_value()

    assert np.all((pvalues >= 0) & (pvalues <= 1))
    rejection_rate = np.mean(pvalues < alpha)
    assert 0.02 <= rejection_rate <= 0.08

    # coarse uniformity check on the whole distribution
    assert stats.kstest(pvalues, "uniform").pvalue > 1e-3


@pytest.mark.parametrize(
    "q, n, r",
    [
        (1, 1000, 0.6),
        (2, 1000, 0.6),
        # narrow bands see little of a moderate dependence; needs more signal
        (4, 5000, 0.95),
    ],
)
def test_power_against_gaussian_dependence(q, n, r):
    rng = np.random.default_rng(99)
    U1, U2 = _gaussian_copula(n, r, rng)

    result = trimmed_spearman_test(U1, U2, q=q)
    assert result.pvalue < 1e-6
    # positive dependence loads on the matching bands
    assert np.trace(result.correlation) > 0


def test_sample_size_matches_inputs():
    rng = np.random.default_rng(0)
    for n in (1, 17, 250):
        U1, U2 = rng.uniform(size=n), rng.uniform(size=n)
        test = TrimmedSpearmanCorrelationTest(2, U1, U2)
        assert test.sample_size() == len(U1) == len(U2) == n
