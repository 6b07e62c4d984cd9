"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    # Render the message as a bare JSON string instead of an error envelope
    bare_message = False

    def __init__(self, message: str, status_code: int = 500, detail: str | None = None):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(self.message)


class UnauthorizedException(AppException):
    """Unauthorized access exception."""

    def __init__(self, message: str = "Unauthorized"):
        """Initialize with 401 status code."""
        super().__init__(message, status_code=401)


class InvalidTokenException(UnauthorizedException):
    """Bearer token missing, expired or failing signature verification."""

    bare_message = True

    def __init__(self, message: str = "Invalid Token"):
        """Initialize with 401 status code."""
        super().__init__(message)


class InvalidCredentialsException(UnauthorizedException):
    """Username or password did not match a stored user."""

    bare_message = True

    def __init__(self, message: str = "Invalid Username or Password"):
        """Initialize with 401 status code."""
        super().__init__(message)


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, message: str = "Bad request", detail: str | None = None):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400, detail=detail)


class MalformedTokenException(BadRequestException):
    """Bearer token could not be decoded at all."""

    def __init__(self, detail: str | None = None):
        """Initialize with 400 status code and the decode error text."""
        super().__init__("Bad Request", detail=detail)


class TokenError(Exception):
    """Base error raised by the token codec."""


class MalformedTokenError(TokenError):
    """Token is not a parsable JWT or lacks the principal claim."""


class InvalidSignatureError(TokenError):
    """Token parsed but its signature does not match the secret."""


class ExpiredTokenError(TokenError):
    """Token signature is valid but its expiry has passed."""
