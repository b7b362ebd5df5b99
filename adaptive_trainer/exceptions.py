"""Exceptions raised by the adaptive decision trainer."""


class AdaptiveTrainerError(Exception):
    """Base class for all trainer errors."""
    pass


class InvalidAnswerQualityError(AdaptiveTrainerError, ValueError):
    """Raised when an outcome is not one of best / ok / bad / timeout."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(
            f"Unknown answer quality {value!r}; expected one of best, ok, bad, timeout"
        )


class ScenarioPackError(AdaptiveTrainerError):
    """Raised when a scenario pack cannot be read or fails validation."""

    def __init__(self, message: str, problems: list[str] | None = None):
        self.problems = problems or []
        if self.problems:
            message = message + ":\n" + "\n".join(f"  - {p}" for p in self.problems)
        super().__init__(message)
