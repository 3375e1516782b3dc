"""Package-wide constants for the trimmed Spearman pipeline.

This module centralizes every tuneable parameter -- trimming defaults,
quadrature tolerances, the reported test name -- so that the basis
construction, the correlation matrix and the test itself import a single
source of truth.
"""

# ---------------------------------------------------------------------------
# Trimming
# ---------------------------------------------------------------------------

# Default trimming range [tau_min, tau_max] partitioned into q bands.  The
# extreme quantiles are excluded because generalized residuals are least
# reliable in the tails.
DEFAULT_TAU_MIN = 0.01
DEFAULT_TAU_MAX = 0.99

# Ramp width of a trimming function as a fraction of its half-width, used
# when no delta is given: delta = DEFAULT_DELTA_FRACTION * (lam - mu) / 2.
DEFAULT_DELTA_FRACTION = 0.1

# ---------------------------------------------------------------------------
# Adaptive quadrature
# ---------------------------------------------------------------------------

# Absolute and relative error targets passed to scipy.integrate.quad.  These
# are scipy's own defaults, kept explicit here so they can be tightened in a
# single place.
QUAD_EPSABS = 1.49e-8
QUAD_EPSREL = 1.49e-8

# Upper bound on the number of subintervals in the adaptive algorithm.
QUAD_LIMIT = 50

# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------

TEST_NAME = "Trimmed Spearman correlation independence test"
