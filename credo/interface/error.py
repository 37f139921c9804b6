"""Interface layer error mapping."""

from fastapi import HTTPException, status

from credo.domain.error import (
    AlreadyExistsError,
    AlreadyVerifiedError,
    CodeExpiredError,
    DependencyFailureError,
    DomainError,
    InvalidCodeError,
    InvalidCredentialsError,
    NotFoundError,
    NotVerifiedError,
    ValidationError,
)

# First match wins
_STATUS_CODES: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (InvalidCodeError, status.HTTP_400_BAD_REQUEST),
    (CodeExpiredError, status.HTTP_400_BAD_REQUEST),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (NotVerifiedError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AlreadyExistsError, status.HTTP_409_CONFLICT),
    (AlreadyVerifiedError, status.HTTP_409_CONFLICT),
    (DependencyFailureError, status.HTTP_502_BAD_GATEWAY),
]


def to_http_exception(error: DomainError) -> HTTPException:
    """Translate a domain error into the HTTP error the client sees."""
    for error_type, status_code in _STATUS_CODES:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=_detail(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


def _detail(error: DomainError) -> str:
    if isinstance(error, AlreadyExistsError) and error.resource == "User":
        return "Email already registered"
    if isinstance(error, NotFoundError) and error.resource == "User":
        # Never echo the submitted address back
        return "User not found"
    if isinstance(error, DependencyFailureError):
        return f"{error.dependency} is unavailable, please try again later"
    return str(error)
