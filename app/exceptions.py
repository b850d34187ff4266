"""
Domain errors raised by the crud and service layers.

Routers let these propagate; ``app.main`` turns them into HTTP responses
through a single exception handler, so every error keeps its own class
internally even when two of them share a status code.
"""
from fastapi import status


class AppError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Bad request"
    headers = None

    def __init__(self, detail: str = None):
        super().__init__(detail or self.detail)
        if detail:
            self.detail = detail


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid request"


class InvalidStatusTransition(ValidationError):
    detail = "Invalid registration status transition"


class InvalidCurrentPassword(ValidationError):
    detail = "Current password is incorrect"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class TripNotFound(NotFound):
    detail = "Trip not found"


class RegistrationNotFound(NotFound):
    detail = "Registration not found"


class UserNotFound(NotFound):
    detail = "User not found"


class DestinationNotFound(NotFound):
    detail = "Destination not found"


class GuideNotFound(NotFound):
    detail = "Guide not found"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidCredentials(Unauthenticated):
    detail = "Username or password is incorrect"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Forbidden"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Conflict"


class UsernameTaken(Conflict):
    detail = "Username already exists"


class EmailTaken(Conflict):
    detail = "Email already exists"


class TripHasRegistrations(Conflict):
    detail = "Trip has registrations and cannot be deleted"


class CapacityExceeded(AppError):
    status_code = status.HTTP_409_CONFLICT
    detail = "Not enough available spots on this trip"


class DestinationHasTrips(Conflict):
    detail = "Destination has trips and cannot be deleted"
