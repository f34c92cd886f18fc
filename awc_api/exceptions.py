"""Domain exceptions raised by stores and routes.

Each carries a user-facing ``detail`` message; ``main.py`` registers a handler per
family that renders ``{"success": false, "error": detail}`` with ``status_code``.
"""


class AppException(Exception):
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationException(AppException):
    """Missing, empty or too-long input."""
    status_code = 400


class AlreadyApprovedException(ValidationException):
    pass


class InvalidStatusException(ValidationException):
    pass


class NotFoundException(AppException):
    status_code = 404


class ForbiddenException(AppException):
    status_code = 403


class WindowClosedException(ForbiddenException):
    """Testimonial submitted outside the weekly submission window."""


class RateLimitedException(AppException):
    status_code = 429
