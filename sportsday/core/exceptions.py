"""
Exceptions raised by the Sports Day competition engine.
"""


class SportsDayError(Exception):
    """Base exception for all engine errors."""

    pass


class InvalidSettingsError(SportsDayError, ValueError):
    """Raised when schedule settings are malformed (bad court count, durations, times)."""

    pass


class SchedulingError(SportsDayError):
    """
    Raised when a timetable cannot be produced.

    The whole operation is aborted; no partial schedule is ever returned.
    ``kind`` is one of the closed set of failure kinds below.
    """

    kind = "SchedulingError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NoSchedulableMatchesError(SchedulingError):
    """Raised when the sport has no match that could be placed on a court."""

    kind = "NoSchedulableMatches"


class BreaksTooDenseError(SchedulingError):
    """Raised when lunch/break windows keep pushing the clock past the adjustment cap."""

    kind = "BreaksTooDense"


class WindowTooShortError(SchedulingError):
    """Raised when the remaining matches do not fit before the end of the day."""

    kind = "WindowTooShort"
