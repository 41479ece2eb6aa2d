"""Exceptions raised by the transcode planners."""


class PlanningError(Exception):
    """Raised when planner inputs violate a precondition.

    Examples are a source too small to produce a non-empty even frame, or a
    non-positive per-corner overlay duration.
    """
