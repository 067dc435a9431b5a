"""Custom exception classes for the account and file service layer."""


class ServiceError(Exception):
    """
    Base exception class for all service-layer errors.
    """
    pass


class UserAlreadyExistsError(ServiceError):
    """
    Raised when attempting to register a username that already exists.
    """
    pass


class InvalidCredentialsError(ServiceError):
    """
    Raised when login credentials are invalid.
    """
    pass


class InvalidSessionError(ServiceError):
    """
    Raised when a session token is unknown or was logged out.
    """
    pass


class QuotaExceededError(ServiceError):
    """
    Raised when an upload would exceed the owner's storage limit.
    """
    pass


class DuplicateFileNameError(ServiceError):
    """
    Raised when the owner already has a file with the requested name.
    """
    pass


class StoredFileNotFoundError(ServiceError):
    """
    Raised when a requested file does not exist for the owner.
    """
    pass
