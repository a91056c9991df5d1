# app/exceptions/errors.py
from fastapi import status


class NDVIServiceError(Exception):
    """Base error: one message, one HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(NDVIServiceError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "Invalid coordinates.") -> None:
        super().__init__(message)


class ConfigurationError(NDVIServiceError):
    pass


class AuthenticationError(NDVIServiceError):
    pass


class NoImageFoundError(NDVIServiceError):
    def __init__(self, message: str = "No recent cloud-free image found.") -> None:
        super().__init__(message)


class EvaluationError(NDVIServiceError):
    pass


class NoDataError(NDVIServiceError):
    def __init__(self, message: str = "Point is likely in water or has no data.") -> None:
        super().__init__(message)
