"""Domain layer errors.

Errors raised after the acting user is known carry its id in ``user_id``
so callers can attribute the failure in the audit log.
"""


class DomainError(Exception):
    """Base domain error."""

    user_id = None


class ValidationError(DomainError):
    """Malformed input rejected before any store access."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class AlreadyExistsError(DomainError):
    """Raised when a create would violate a uniqueness rule (email, external id)."""

    def __init__(self, resource: str, identifier: str, user_id=None):
        self.resource = resource
        self.identifier = identifier
        self.user_id = user_id
        super().__init__(f"{resource} already exists: {identifier}")


class InvalidCredentialsError(DomainError):
    """Unknown email or wrong password.

    Deliberately does not say which of the two was wrong.
    """

    def __init__(self) -> None:
        super().__init__("Incorrect email or password")


class NotVerifiedError(DomainError):
    """Correct password, but the email address is not verified yet."""

    def __init__(self, email: str, user_id=None):
        self.email = email
        self.user_id = user_id
        super().__init__("Please verify your email before logging in")


class InvalidCodeError(DomainError):
    """Submitted verification code does not match the outstanding one."""

    def __init__(self, user_id=None) -> None:
        self.user_id = user_id
        super().__init__("Invalid verification code")


class CodeExpiredError(DomainError):
    """Verification code matched but its window has closed."""

    def __init__(self, user_id=None) -> None:
        self.user_id = user_id
        super().__init__("Verification code has expired")


class AlreadyVerifiedError(DomainError):
    """Raised when a new code is requested for a verified email."""

    def __init__(self, email: str, user_id=None):
        self.email = email
        self.user_id = user_id
        super().__init__(f"Email already verified: {email}")


class DependencyFailureError(DomainError):
    """A remote collaborator (mail, OAuth provider, store) failed."""

    def __init__(self, dependency: str, message: str):
        self.dependency = dependency
        super().__init__(f"{dependency} failed: {message}")
