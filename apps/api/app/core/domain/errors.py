class DirectoryError(Exception):
    """Base class for user directory failures."""


class ValidationError(DirectoryError):
    pass


class InvalidRoleError(ValidationError):
    pass


class ConflictError(DirectoryError):
    pass


class AuthError(DirectoryError):
    pass


class StorageError(DirectoryError):
    pass
