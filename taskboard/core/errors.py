from typing import Optional


class AppError(Exception):
    """Base for errors that map onto an HTTP status and a client-safe message."""

    status_code: int = 500
    message: str = "Internal server error."

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.status_code}: {self.message}"


# 400

class InvalidInputError(AppError):
    status_code = 400
    message = "Invalid input."


class DuplicateEmailError(InvalidInputError):
    message = "An account with this email already exists."


class WrongPasswordError(InvalidInputError):
    message = "The current password is incorrect."


# 401

class AuthenticationError(AppError):
    status_code = 401
    message = "Authentication required."


class InvalidCredentialsError(AuthenticationError):
    message = "Invalid credentials."


class TokenExpiredError(AuthenticationError):
    message = "The token has expired. Please log in again."


class TokenInvalidError(AuthenticationError):
    message = "Invalid token."


# 403

class AuthorizationError(AppError):
    status_code = 403
    message = "Access to this resource is not allowed."


class ForbiddenListAccessError(AuthorizationError):
    message = "List not found or not allowed."


# 404

class NotFoundError(AppError):
    status_code = 404
    message = "Resource not found."


# 423

class AccountLockedError(AppError):
    status_code = 423
    message = "Account locked after too many failed login attempts. Contact an administrator."
