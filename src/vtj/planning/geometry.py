"""Output geometry planning.

Scales a source frame down so that its long edge fits a maximum, keeping
the aspect ratio and producing even dimensions (required by H.264 output).
"""

import logging
import math
from fractions import Fraction

from vtj.domain.models import OutputGeometry

logger = logging.getLogger(__name__)

MAX_LONG_EDGE = 1920


def ensure_even(dimension: int) -> int:
    """Round a dimension down to the nearest even number."""
    return (dimension // 2) * 2


def round_half_up(value: Fraction) -> int:
    """Round a non-negative rational to the nearest integer, halves up."""
    return math.floor(value + Fraction(1, 2))


def plan_geometry(
    width: int, height: int, max_long_edge: int = MAX_LONG_EDGE
) -> OutputGeometry:
    """Compute the output frame size for a source frame.

    Sources whose long edge already fits are only even-rounded and keep a
    scale factor of 1. Larger sources are scaled by max_long_edge/long_edge,
    rounded to the nearest pixel, then even-rounded. The returned scale
    factor is recomputed from the final dimensions, since even-rounding
    perturbs the true ratio.

    Inputs are expected to be at least 2x2; a 1-pixel dimension rounds to 0
    and is not guarded here.

    Args:
        width: Upright source width in pixels.
        height: Upright source height in pixels.
        max_long_edge: Maximum allowed long edge of the output.

    Returns:
        OutputGeometry with even dimensions and the applied scale factor.
    """
    long_edge = max(width, height)

    if long_edge <= max_long_edge:
        even_width = ensure_even(width)
        even_height = ensure_even(height)
        if (even_width, even_height) != (width, height):
            logger.debug(
                "Even dimension adjustment: %dx%d -> %dx%d",
                width,
                height,
                even_width,
                even_height,
            )
        return OutputGeometry(even_width, even_height, Fraction(1))

    factor = Fraction(max_long_edge, long_edge)
    out_width = ensure_even(round_half_up(width * factor))
    out_height = ensure_even(round_half_up(height * factor))
    scale_factor = min(Fraction(out_width, width), Fraction(out_height, height))

    logger.debug(
        "Resolution scaling: %dx%d -> %dx%d (scale factor: %.3f)",
        width,
        height,
        out_width,
        out_height,
        float(scale_factor),
    )
    return OutputGeometry(out_width, out_height, scale_factor)
