"""Hypothesis configuration and shared strategies for property tests."""

from __future__ import annotations

from hypothesis import HealthCheck, Verbosity, settings
from hypothesis import strategies as st

from sfdiff.bands import BINARY_BANDS, PERIODIC_BANDS, UNARY_BANDS, MagnitudeBand
from sfdiff.pcg import MASK32, MASK64

# =============================================================================
# Hypothesis profiles
# =============================================================================

# Default profile for normal test runs
settings.register_profile(
    "default",
    max_examples=100,
    verbosity=Verbosity.normal,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)

# CI profile with more examples
settings.register_profile(
    "ci",
    max_examples=500,
    verbosity=Verbosity.quiet,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow],
)

# Debug profile for tracking down a failure
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)

# Dev profile for quick iteration
settings.register_profile(
    "dev",
    max_examples=25,
    verbosity=Verbosity.normal,
    deadline=None,
)

settings.load_profile("default")


# =============================================================================
# Strategies
# =============================================================================

ALL_BANDS: tuple[MagnitudeBand, ...] = tuple(
    dict.fromkeys(BINARY_BANDS + UNARY_BANDS + PERIODIC_BANDS)
)


@st.composite
def seeds(draw: st.DrawFn) -> tuple[int, int]:
    """Strategy for (state, stream) generator seeds."""
    state = draw(st.integers(min_value=0, max_value=MASK64))
    stream = draw(st.integers(min_value=0, max_value=MASK64))
    return state, stream


@st.composite
def uint32_ranges(draw: st.DrawFn) -> tuple[int, int]:
    """Strategy for non-empty inclusive [lo, hi] ranges of 32-bit integers."""
    lo = draw(st.integers(min_value=0, max_value=MASK32))
    hi = draw(st.integers(min_value=lo, max_value=MASK32))
    return lo, hi


@st.composite
def bands(draw: st.DrawFn) -> MagnitudeBand:
    """Strategy for the magnitude bands random sweeps draw from."""
    return draw(st.sampled_from(ALL_BANDS))


def finite_doubles(**kwargs) -> st.SearchStrategy[float]:
    """Strategy for finite doubles, subnormals included."""
    return st.floats(allow_nan=False, allow_infinity=False, **kwargs)
