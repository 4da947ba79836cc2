"""Custom exceptions for focustimer CLI."""


class FocusTimerError(Exception):
    """Base exception for all focustimer errors."""


class PlatformError(FocusTimerError):
    """Raised when the operating system rejects a registration request.

    Only the launch-at-login toggle raises it. Callers log it and carry on;
    the timer itself never depends on the outcome.
    """
