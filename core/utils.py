from __future__ import annotations

from typing import Tuple


def clamp(x: float, lo: float, hi: float) -> float:
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x


def laplace_smoothed(hits: float, trials: float) -> float:
    """Laplace (add-one) estimate of a rate: (hits + 1) / (trials + 2)."""
    return (hits + 1.0) / (trials + 2.0)


def clamp_band(x: float, band: Tuple[float, float]) -> float:
    return clamp(x, band[0], band[1])


def format_currency(value: float, decimals: int = 0) -> str:
    """$1,234,567 style, matching the console report."""
    return f"${value:,.{decimals}f}"
