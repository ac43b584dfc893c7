"""AWS Signature Version 4 signing key derivation and signature computation.

References:
    - https://docs.aws.amazon.com/AmazonS3/latest/API/sig-v4-authenticating-requests.html
"""

import hashlib
import hmac
import re
from datetime import datetime

from s3presign.constants import KEY_PREFIX, SCOPE_TERMINATOR, SERVICE_NAME
from s3presign.errors import InvalidKeyError, SignError
from s3presign.string_to_sign import format_scope_date

# YYYYMMDD or YYYYMMDDTHHMMSSZ
_BASIC_DATE_RE = re.compile(r"\d{8}(T\d{6}Z)?")


class Signer:
    """Computes SigV4 signatures for one secret key and region.

    The signer only holds the strings it is given; it keeps no state
    between calls and derives the signing key afresh for every signature.

    Attributes:
        region: The region the signing key is scoped to.
    """

    def __init__(self, secret_key: str, region: str) -> None:
        """Initialize the signer.

        Args:
            secret_key: The secret access key.
            region: Region name, e.g. "us-east-1".
        """
        self._secret_key = secret_key
        self.region = region

    def __repr__(self) -> str:
        return f"Signer(region={self.region!r})"

    def sign(self, date: datetime | str, string_to_sign: str) -> str:
        """Sign a string to sign.

        Args:
            date: Signing timestamp. A string may be a YYYYMMDD date, a
                YYYYMMDDTHHMMSSZ timestamp or an ISO 8601 date or datetime.
            string_to_sign: The exact text to sign.

        Returns:
            64-character lowercase hex signature.

        Raises:
            InvalidKeyError: If key derivation or the final HMAC fails.
            SignError: If a string date cannot be parsed.
        """
        signing_key = derive_signing_key(self._secret_key, _scope_date(date), self.region)
        return compute_signature(signing_key, string_to_sign)


# ---------------------------------------------------------------------------
# Module-level utility functions
# ---------------------------------------------------------------------------


def derive_signing_key(
    secret_key: str, date: str, region: str, service: str = SERVICE_NAME
) -> bytes:
    """Derive the SigV4 signing key via the HMAC-SHA256 chain.

    DateKey              = HMAC-SHA256("AWS4"+"<SecretAccessKey>", "<YYYYMMDD>")
    DateRegionKey        = HMAC-SHA256(<DateKey>, "<aws-region>")
    DateRegionServiceKey = HMAC-SHA256(<DateRegionKey>, "<aws-service>")
    SigningKey           = HMAC-SHA256(<DateRegionServiceKey>, "aws4_request")

    Args:
        secret_key: The secret access key.
        date: Date string (YYYYMMDD).
        region: AWS region.
        service: AWS service name.

    Returns:
        The 32-byte signing key.

    Raises:
        InvalidKeyError: If any round of the chain rejects its key or input.
    """
    try:
        k_date = _hmac((KEY_PREFIX + secret_key).encode("utf-8"), date)
        k_region = _hmac(k_date, region)
        k_service = _hmac(k_region, service)
        return _hmac(k_service, SCOPE_TERMINATOR)
    except (TypeError, ValueError) as exc:
        # UnicodeEncodeError is a ValueError
        raise InvalidKeyError(f"Cannot derive signing key: {exc}") from exc


def compute_signature(signing_key: bytes, string_to_sign: str) -> str:
    """Compute the final HMAC-SHA256 hex signature.

    Args:
        signing_key: The derived signing key bytes.
        string_to_sign: The assembled string to sign.

    Returns:
        64-character lowercase hex string.
    """
    try:
        return _hmac(signing_key, string_to_sign).hex()
    except (TypeError, ValueError) as exc:
        raise InvalidKeyError(f"Cannot compute signature: {exc}") from exc


def _hmac(key: bytes, value: str) -> bytes:
    return hmac.new(key, value.encode("utf-8"), hashlib.sha256).digest()


def _scope_date(date: datetime | str) -> str:
    if isinstance(date, datetime):
        return format_scope_date(date)
    if not isinstance(date, str):
        raise SignError(f"Signing date must be a datetime or string, got {type(date).__name__}")
    if _BASIC_DATE_RE.fullmatch(date):
        return date[:8]
    try:
        # fromisoformat() only accepts a trailing Z from 3.11 on
        parsed = datetime.fromisoformat(date.replace("Z", "+00:00"))
    except ValueError as exc:
        raise SignError(f"Unrecognized signing date {date!r}") from exc
    return format_scope_date(parsed)
