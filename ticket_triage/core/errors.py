class AppError(Exception):
    """Base app exception."""


class ExternalServiceError(AppError):
    pass


class NotFoundError(AppError):
    pass


class InvalidTransitionError(AppError):
    pass
