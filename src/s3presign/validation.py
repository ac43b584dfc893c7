"""Input validation for client configuration and signing parameters.

A client whose bucket, region or endpoint cannot form a valid URL is a
configuration error, so these checks run at construction time rather than
when the first request is signed.

Each function raises ``ConfigurationError`` on invalid input.
"""

import re

from s3presign.constants import MAX_PRESIGNED_EXPIRES
from s3presign.errors import ConfigurationError

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# S3 bucket naming rules:
#   - 3-63 characters
#   - lowercase letters, digits, hyphens, and periods
#   - must start and end with a letter or digit
#   - must not be formatted as an IP address
#   - no consecutive periods ("..") allowed

_BUCKET_RE = re.compile(r"^[a-z0-9][a-z0-9.\-]{1,61}[a-z0-9]$")
_IP_RE = re.compile(r"^\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}$")
_HOST_LABEL_RE = re.compile(r"^[A-Za-z0-9]([A-Za-z0-9\-]{0,61}[A-Za-z0-9])?$")
_PORT_RE = re.compile(r"^\d{1,5}$")

_MAX_KEY_BYTES = 1024


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def validate_bucket_name(name: str) -> None:
    """Validate an S3 bucket name against AWS naming rules.

    Args:
        name: The candidate bucket name.

    Raises:
        ConfigurationError: If the name violates any bucket naming rule.
    """
    if not isinstance(name, str) or not _BUCKET_RE.match(name):
        raise ConfigurationError(f"Invalid bucket name: {name!r}")

    if _IP_RE.match(name):
        raise ConfigurationError(f"Bucket name must not be an IP address: {name!r}")

    if ".." in name:
        raise ConfigurationError(f"Bucket name must not contain '..': {name!r}")


def validate_host(value: str, what: str) -> None:
    """Validate that ``value`` can be used as (part of) a DNS host name.

    A trailing ``:port`` is allowed so local endpoints such as
    ``localhost:9000`` can be configured.

    Args:
        value: Region or endpoint string.
        what: Name of the setting, used in the error message.

    Raises:
        ConfigurationError: If the value cannot appear in a host name.
    """
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"{what} must be a non-empty string")

    host, _, port = value.partition(":")
    if port and not _PORT_RE.match(port):
        raise ConfigurationError(f"Invalid port in {what}: {value!r}")

    labels = host.split(".")
    if not all(_HOST_LABEL_RE.match(label) for label in labels):
        raise ConfigurationError(f"Invalid {what}: {value!r}")


def validate_object_key(key: str) -> None:
    """Validate an S3 object key.

    Args:
        key: The object key string.

    Raises:
        ConfigurationError: If the key is empty or longer than 1024 UTF-8 bytes.
    """
    if not isinstance(key, str) or not key:
        raise ConfigurationError("Object key must be a non-empty string")
    try:
        size = len(key.encode("utf-8"))
    except UnicodeEncodeError:
        raise ConfigurationError(f"Object key is not valid UTF-8: {key!r}")
    if size > _MAX_KEY_BYTES:
        raise ConfigurationError(f"Object key exceeds {_MAX_KEY_BYTES} bytes")


def validate_expires(seconds: int) -> int:
    """Validate a presigned URL lifetime.

    Args:
        seconds: Requested lifetime in seconds.

    Returns:
        The lifetime as an int.

    Raises:
        ConfigurationError: If not an integer in [1, 604800].
    """
    try:
        n = int(seconds)
    except (ValueError, TypeError):
        raise ConfigurationError(
            f"Expiry must be an integer between 1 and {MAX_PRESIGNED_EXPIRES} seconds"
        )

    if n < 1 or n > MAX_PRESIGNED_EXPIRES:
        raise ConfigurationError(
            f"Expiry must be an integer between 1 and {MAX_PRESIGNED_EXPIRES} seconds"
        )

    return n
