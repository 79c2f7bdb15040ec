"""Module: errors."""


class PetConnectError(Exception):
    """Base error; ``message`` is safe to show to the user."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FormValidationError(PetConnectError):
    pass


class BackendError(PetConnectError):
    """A hosted backend or database call failed."""

    status_code = 502


class PetNotFoundError(PetConnectError):
    status_code = 404

    def __init__(self, message: str = "This pet profile doesn't exist or has been deactivated by the owner."):
        super().__init__(message)


class NotAuthorizedError(PetConnectError):
    status_code = 403

    def __init__(self, message: str = "You do not have permission to change this pet"):
        super().__init__(message)


class CodeGenerationError(PetConnectError):
    status_code = 500
