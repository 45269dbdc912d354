"""
Error Taxonomy

Every failure a service can report is a TiffinError subclass carrying the
HTTP status code it maps to and a machine-readable error code. The
FastAPI exception handlers in tiffin.main turn them into the JSON envelope:

    {"success": false, "error": "<code>", "message": "<text>"}

Categories:
    - InputValidation (400): missing/invalid fields, duplicate accounts
    - Authentication (401): bad credentials, bad OTP, missing token
    - Authorization (403): invalid token, wrong role, foreign order
    - NotFound (404): unknown ids

Version: 1.0.0
"""

from typing import Optional


class TiffinError(Exception):
    """Base class for all expected, client-facing failures."""

    status_code: int = 500
    error: str = "InternalFault"
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert to the JSON error envelope."""
        return {
            "success": False,
            "error": self.error,
            "message": self.message,
        }


# =============================================================================
# INPUT VALIDATION (400)
# =============================================================================

class InputValidationError(TiffinError):
    status_code = 400
    error = "InputValidation"
    default_message = "Invalid request"


class UserAlreadyExists(TiffinError):
    status_code = 400
    error = "UserAlreadyExists"
    default_message = "User already exists"


class InvalidTransition(TiffinError):
    status_code = 400
    error = "InvalidTransition"
    default_message = "Illegal order status transition"


class PaymentVerificationFailed(TiffinError):
    status_code = 400
    error = "VerificationFailed"
    default_message = "Payment verification failed"


# =============================================================================
# AUTHENTICATION (401)
# =============================================================================

class AuthenticationError(TiffinError):
    status_code = 401
    error = "AuthenticationFailed"
    default_message = "Authentication failed"


class InvalidCredentials(AuthenticationError):
    error = "InvalidCredentials"
    default_message = "Invalid credentials"


class AccountInactive(AuthenticationError):
    error = "AccountInactive"
    default_message = "Account deactivated"


class OtpNotFound(AuthenticationError):
    error = "OtpNotFound"
    default_message = "OTP not found or expired"


class OtpExpired(AuthenticationError):
    error = "OtpExpired"
    default_message = "OTP expired"


class OtpMismatch(AuthenticationError):
    error = "OtpMismatch"
    default_message = "Invalid OTP"


class AccessTokenRequired(AuthenticationError):
    error = "AccessTokenRequired"
    default_message = "Access token required"


# =============================================================================
# AUTHORIZATION (403)
# =============================================================================

class AuthorizationError(TiffinError):
    status_code = 403
    error = "Forbidden"
    default_message = "Forbidden"


class InvalidToken(AuthorizationError):
    error = "InvalidToken"
    default_message = "Invalid token"


class InsufficientPermissions(AuthorizationError):
    error = "InsufficientPermissions"
    default_message = "Insufficient permissions"


class NotAuthorized(AuthorizationError):
    error = "NotAuthorized"
    default_message = "Not authorized"


# =============================================================================
# NOT FOUND (404)
# =============================================================================

class NotFoundError(TiffinError):
    status_code = 404
    error = "NotFound"
    default_message = "Resource not found"


class OrderNotFound(NotFoundError):
    error = "OrderNotFound"
    default_message = "Order not found"


class DishNotFound(NotFoundError):
    error = "DishNotFound"
    default_message = "Dish not found"


class UserNotFound(NotFoundError):
    error = "UserNotFound"
    default_message = "User not found"
