# server/core/exceptions.py

"""
Error taxonomy for the account and session services.

Route handlers catch NexioError and turn it into a JSON body of the form
{"message": ...} with the exception's status code. Anything else that
escapes a service is a bug and surfaces as a plain 500.
"""

from typing import Any, Optional


class NexioError(Exception):
    """Base class for every error the services raise on purpose."""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message}


# -------------------------------
# Validation (400)
# -------------------------------

class ValidationError(NexioError):
    """Malformed input the caller can correct."""

    status_code = 400


class RegistrationValidationError(ValidationError):

    def __init__(self, errors: list[str]):
        super().__init__(
            "Validation Error: Please ensure all fields are filled out correctly.",
            code="VALIDATION_ERROR",
            details={"errors": errors},
        )


class OnboardingValidationError(ValidationError):

    def __init__(self, errors: list[str]):
        super().__init__(", ".join(errors), code="VALIDATION_ERROR", details={"errors": errors})


# -------------------------------
# Conflicts (409)
# -------------------------------

class ConflictError(NexioError):
    """A unique field is already in use."""

    status_code = 409


class UsernameTakenError(ConflictError):

    def __init__(self, username: str):
        super().__init__(
            "Registration Failed: This username is already taken. Please choose a different one.",
            code="USERNAME_TAKEN",
            details={"username": username},
        )


class EmailTakenError(ConflictError):

    def __init__(self, email: str):
        super().__init__(
            "Registration Failed: An account with this email address already exists. Please sign in.",
            code="EMAIL_TAKEN",
            details={"email": email},
        )


# -------------------------------
# Authentication (400 / 401)
# -------------------------------

class AuthenticationError(NexioError):
    """Credentials were rejected."""

    status_code = 401


class MissingCredentialsError(AuthenticationError):
    status_code = 400

    def __init__(self):
        super().__init__(
            "Authentication failed: Email and password are required. "
            "Please provide both credentials to continue.",
            code="MISSING_CREDENTIALS",
        )


class InvalidEmailFormatError(AuthenticationError):
    status_code = 400

    def __init__(self):
        super().__init__(
            "Invalid email format: Please enter a valid email address.",
            code="INVALID_EMAIL_FORMAT",
        )


class PasswordTooShortError(AuthenticationError):
    status_code = 400

    def __init__(self):
        super().__init__(
            "Invalid password: Password must be at least 8 characters long.",
            code="PASSWORD_TOO_SHORT",
        )


class NoAccountFoundError(AuthenticationError):

    def __init__(self, email: str = ""):
        super().__init__(
            "Authentication failed: No account found with this email address. "
            "Please check your credentials or sign up for a new account.",
            code="NO_ACCOUNT_FOUND",
            details={"email": email},
        )


class InvalidPasswordError(AuthenticationError):

    def __init__(self, email: str = ""):
        super().__init__(
            "Authentication failed: The password you entered is incorrect. "
            "Please try again or use the \"Forgot Password\" option to reset it.",
            code="INVALID_PASSWORD",
            details={"email": email},
        )


class AccountNotLinkedError(AuthenticationError):
    """The provider's email belongs to an account signed in another way."""

    status_code = 409

    def __init__(self, provider: str, email: str):
        super().__init__(
            "Authentication failed: An account with this email already exists. "
            "Sign in the same way you originally did.",
            code="ACCOUNT_NOT_LINKED",
            details={"provider": provider, "email": email},
        )


# -------------------------------
# Unavailable (500)
# -------------------------------

class UnavailableError(NexioError):
    """Store or infrastructure failure. The message never carries internal detail."""

    status_code = 500


class AuthenticationUnavailableError(UnavailableError):

    def __init__(self):
        super().__init__(
            "Authentication error: Unable to complete sign in. "
            "Please try again later or contact support if the issue persists.",
            code="AUTHENTICATION_UNAVAILABLE",
        )


class RegistrationUnavailableError(UnavailableError):

    def __init__(self):
        super().__init__(
            "Server Error: Unable to complete registration due to an unexpected issue. "
            "Please try again later.",
            code="REGISTRATION_UNAVAILABLE",
        )


class OnboardingUnavailableError(UnavailableError):

    def __init__(self):
        super().__init__("An unexpected error occurred.", code="ONBOARDING_UNAVAILABLE")
