"""Shared numeric helpers, material kinds and a console progress bar."""

from __future__ import annotations

import math
import random
import sys
from enum import Enum
from typing import TextIO

K_INFINITY = math.inf

_BAR_WIDTH = 70


class MaterialType(Enum):
    """How a surface interacts with light."""

    DIFFUSE_AND_GLOSSY = 0
    REFLECTION_AND_REFRACTION = 1
    REFLECTION = 2


def clamp(lo: float, hi: float, v: float) -> float:
    """Restrict ``v`` to the range [lo, hi]."""
    return max(lo, min(hi, v))


def solve_quadratic(a: float, b: float, c: float) -> tuple[float, float] | None:
    """Solve ``a*x^2 + b*x + c = 0``.

    Returns the two real roots in ascending order, or ``None`` when there are
    no real roots.
    """
    discr = b * b - 4 * a * c
    if discr < 0:
        return None
    if discr == 0:
        x0 = x1 = -0.5 * b / a
    else:
        root = math.sqrt(discr)
        q = -0.5 * (b + root) if b > 0 else -0.5 * (b - root)
        x0 = q / a
        x1 = c / q
    return (x0, x1) if x0 <= x1 else (x1, x0)


def get_random_float() -> float:
    """Return a uniformly distributed float in [0, 1)."""
    return random.random()


def progress_bar(progress: float) -> str:
    """Render a progress fraction as a fixed-width text bar."""
    pos = int(_BAR_WIDTH * progress)
    cells = "".join(
        "=" if i < pos else ">" if i == pos else " " for i in range(_BAR_WIDTH)
    )
    return f"[{cells}] {int(progress * 100.0)} %"


def update_progress(progress: float, stream: TextIO | None = None) -> None:
    """Redraw the progress bar in place on ``stream`` (standard output by default)."""
    out = sys.stdout if stream is None else stream
    out.write(progress_bar(progress) + "\r")
    out.flush()