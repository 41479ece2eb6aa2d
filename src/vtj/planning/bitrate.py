"""Output bitrate planning."""

import logging
import math
from fractions import Fraction

from vtj.domain.models import DEFAULT_BITRATE_BPS

logger = logging.getLogger(__name__)

MAX_BITRATE_BPS = 10_000_000


def plan_bitrate(
    source_bitrate_bps: int | None,
    scale_factor: Fraction | int,
    cap_bps: int = MAX_BITRATE_BPS,
    default_bps: int = DEFAULT_BITRATE_BPS,
) -> int:
    """Scale the source bitrate with the frame and cap it.

    Args:
        source_bitrate_bps: Measured source bitrate. 0 or None means
            unknown and is replaced by default_bps.
        scale_factor: Geometry scale factor in (0, 1].
        cap_bps: Ceiling for the output bitrate.
        default_bps: Bitrate assumed when the source bitrate is unknown.

    Returns:
        Output bitrate in bits per second, between 0 and cap_bps.
    """
    if not source_bitrate_bps or source_bitrate_bps < 0:
        logger.debug("Source bitrate unknown, assuming %d bps", default_bps)
        source_bitrate_bps = default_bps

    scaled = math.floor(source_bitrate_bps * Fraction(scale_factor))
    return max(0, min(scaled, cap_bps))
