# Error taxonomy shared by every module.
# Each error carries the HTTP status the response envelope is sent with.

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(AppError):
    """Required environment configuration is missing"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class InvalidInputError(AppError):
    """Malformed or missing input, rejected before any mutation"""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    """Referenced user or post does not exist"""
    status_code = status.HTTP_400_BAD_REQUEST


class InvalidOperationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamFailureError(AppError):
    """A credential service, object store or document store call failed"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
