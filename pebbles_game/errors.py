from __future__ import annotations


class PebblesError(ValueError):
    """Base class for rejected game requests.

    Subclassing ValueError keeps the routes' `except ValueError` translation working.
    """


class ConfigValidationError(PebblesError):
    pass


class InvalidTurnAmountError(PebblesError):
    pass


class GameOverError(PebblesError):
    def __init__(self, message: str = "Game is over") -> None:
        super().__init__(message)


class GameNotInitializedError(PebblesError):
    def __init__(self, message: str = "Game is not initialized") -> None:
        super().__init__(message)


class GameBusyError(PebblesError):
    def __init__(self, message: str = "Game is busy") -> None:
        super().__init__(message)


class RandomSourceUnavailable(RuntimeError):
    """The entropy draw failed. Fatal for the current request; never retried."""
