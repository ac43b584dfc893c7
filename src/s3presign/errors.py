"""Error definitions for s3presign."""


class S3SignerError(Exception):
    """Base error carrying an S3-style code and message.

    Attributes:
        code: Short error code string (e.g. "SignError", "EncodingError").
        message: Human-readable error description.
    """

    def __init__(self, code: str, message: str) -> None:
        """Initialize the error.

        Args:
            code: Error code.
            message: Error description.
        """
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


# -- Signing ------------------------------------------------------------------


class SignError(S3SignerError):
    """Keyed-hash derivation failed, usually because of a malformed secret key."""

    def __init__(self, message: str = "Failed to compute signature.") -> None:
        super().__init__(code="SignError", message=message)


class InvalidKeyError(SignError):
    """An intermediate HMAC key was rejected by the hash primitive."""

    def __init__(self, message: str = "Invalid key length.") -> None:
        super().__init__(message=message)
        self.code = "InvalidKeyLength"


# -- Encoding -----------------------------------------------------------------


class EncodingError(S3SignerError):
    """A header or document could not be represented as text."""

    def __init__(self, message: str = "Value is not representable as text.") -> None:
        super().__init__(code="EncodingError", message=message)


# -- Transport ----------------------------------------------------------------


class TransportError(S3SignerError):
    """The HTTP transport failed while executing a signed request.

    Attributes:
        method: HTTP method of the failed request.
        url: Target URL of the failed request.
    """

    def __init__(self, message: str, method: str = "", url: str = "") -> None:
        super().__init__(code="TransportError", message=message)
        self.method = method
        self.url = url


# -- Configuration ------------------------------------------------------------


class ConfigurationError(S3SignerError):
    """Client configuration would produce an invalid URL or request."""

    def __init__(self, message: str = "Invalid configuration.") -> None:
        super().__init__(code="InvalidConfiguration", message=message)
