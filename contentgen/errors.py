class ContentGenError(Exception):
    """Base class for errors raised by contentgen."""


class ConfigurationError(ContentGenError):
    """Settings or credentials are missing or invalid. Fatal at startup."""


class EmptyGenerationError(ContentGenError):
    """The generation backend answered without any text."""

    def __init__(self, message: str = "Empty content generated"):
        super().__init__(message)


class RetryExhaustedError(ContentGenError):
    """Every attempt failed; ``last_error`` holds the final failure."""

    def __init__(self, attempts: int, last_error: BaseException):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Failed after {attempts} attempts: {last_error}")
