"""
Distributions package — elementary samplers and their theoretical references.

  1. sampler.py     — Exponential / Gamma / Binomial / Negative-Binomial draws from uniforms
  2. benchmarks.py  — scipy.stats reference moments the samplers should converge to
"""

from .sampler import (
    SamplingExhaustedError,
    sample_exponential,
    sample_gamma,
    sample_binomial_severity,
    sample_negbin_severity,
    sample_uniform_severity,
)
from .benchmarks import (
    expected_binomial_severity,
    expected_negbin_severity,
    expected_gamma_severity,
    severity_benchmarks,
)

__all__ = [
    "SamplingExhaustedError",
    "sample_exponential",
    "sample_gamma",
    "sample_binomial_severity",
    "sample_negbin_severity",
    "sample_uniform_severity",
    "expected_binomial_severity",
    "expected_negbin_severity",
    "expected_gamma_severity",
    "severity_benchmarks",
]
