"""Canonical request construction for AWS Signature Version 4.

Turns a request descriptor (method, path, query, headers, body) into the
canonical request string and its SHA-256 hex digest.

References:
    - https://docs.aws.amazon.com/AmazonS3/latest/API/sig-v4-header-based-auth.html
"""

import hashlib
import logging
import re
import urllib.parse
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field

from s3presign.constants import EMPTY_SHA256, UNSIGNED_PAYLOAD
from s3presign.errors import EncodingError

logger = logging.getLogger(__name__)

QueryPairs = Sequence[tuple[str, str]]


@dataclass
class RequestDescriptor:
    """An HTTP request as seen by the signer.

    Built fresh for every signing call and not modified once signed.

    Attributes:
        method: HTTP method (upper-cased on construction).
        host: Host (and optional port) the request is sent to.
        path: Unencoded request path, e.g. "/photos/cat.png".
        query: Ordered query parameters as (name, value) pairs.
        headers: Header name -> value, names compared case-insensitively.
        body: Optional request payload.
        scheme: URL scheme.
    """

    method: str
    host: str
    path: str = "/"
    query: list[tuple[str, str]] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None
    scheme: str = "https"

    def __post_init__(self) -> None:
        self.method = self.method.upper()
        if not self.path.startswith("/"):
            self.path = "/" + self.path

    def get_header(self, name: str) -> str | None:
        """Return the value of a header, matching the name case-insensitively."""
        lower = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lower:
                return value
        return None

    def set_header(self, name: str, value: str) -> None:
        """Set a header, replacing any existing header with the same name."""
        lower = name.lower()
        for key in [k for k in self.headers if k.lower() == lower]:
            del self.headers[key]
        self.headers[name] = value

    def add_query_param(self, name: str, value: str) -> None:
        """Append a query parameter. Names must be unique."""
        if any(existing == name for existing, _ in self.query):
            raise ValueError(f"Duplicate query parameter: {name}")
        self.query.append((name, value))

    @property
    def query_string(self) -> str:
        """The encoded query string in insertion order (no leading '?')."""
        return "&".join(
            f"{_uri_encode(name)}={_uri_encode(value)}" for name, value in self.query
        )

    @property
    def url(self) -> str:
        """The full request URL."""
        url = f"{self.scheme}://{self.host}{canonical_uri(self.path)}"
        if self.query:
            url += "?" + self.query_string
        return url


# ---------------------------------------------------------------------------
# Canonical request
# ---------------------------------------------------------------------------


def canonical_request(request: RequestDescriptor, include_payload: bool = True) -> str:
    """Build the canonical request string.

    Args:
        request: The request to canonicalize.
        include_payload: If True, embed the SHA-256 of the body. If False,
            use the literal UNSIGNED-PAYLOAD (presigned URLs).

    Returns:
        The canonical request string.

    Raises:
        EncodingError: If a header name or value is not representable as text.
    """
    payload = payload_hash(request.body) if include_payload else UNSIGNED_PAYLOAD
    parts = [
        request.method,
        canonical_uri(request.path),
        canonical_query_string(request.query),
        canonical_headers(request.headers),
        signed_headers(request.headers),
        payload,
    ]
    return "\n".join(parts)


def canonical_hex(request: RequestDescriptor, include_payload: bool = True) -> str:
    """Return the SHA-256 hex digest of the canonical request.

    Args:
        request: The request to canonicalize.
        include_payload: See canonical_request().

    Returns:
        64-character lowercase hex string.
    """
    creq = canonical_request(request, include_payload=include_payload)
    logger.debug("Canonical request:\n%s", creq)
    try:
        encoded = creq.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingError(f"Canonical request is not valid UTF-8: {exc}") from exc
    return hashlib.sha256(encoded).hexdigest()


def payload_hash(body: bytes | None) -> str:
    """Return the lowercase hex SHA-256 of the payload (empty when None)."""
    if not body:
        return EMPTY_SHA256
    return hashlib.sha256(body).hexdigest()


# ---------------------------------------------------------------------------
# Headers
# ---------------------------------------------------------------------------


def canonical_headers(headers: Mapping[str, str]) -> str:
    """Build the canonical headers block.

    One "name:value\\n" line per header, names lower-cased and sorted,
    values trimmed. Headers repeated under different casings are joined
    with a comma.
    """
    normalized = _normalize_headers(headers)
    return "".join(f"{name}:{value}\n" for name, value in normalized.items())


def signed_headers(headers: Mapping[str, str]) -> str:
    """Return the sorted, lower-cased header names joined with ';'."""
    return ";".join(_normalize_headers(headers))


def _normalize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    lower_headers: dict[str, str] = {}
    for name, value in headers.items():
        if not isinstance(name, str) or not isinstance(value, str):
            raise EncodingError(f"Header {name!r} is not representable as text.")
        _ensure_utf8(name)
        _ensure_utf8(value)
        lower_name = name.lower()
        if lower_name in lower_headers:
            lower_headers[lower_name] += "," + _trim_header_value(value)
        else:
            lower_headers[lower_name] = _trim_header_value(value)
    return dict(sorted(lower_headers.items()))


def _ensure_utf8(value: str) -> None:
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncodingError(f"Value {value!r} is not valid UTF-8 text.") from exc


def _trim_header_value(value: str) -> str:
    """Strip surrounding whitespace and collapse runs of spaces."""
    return re.sub(r" +", " ", value.strip())


# ---------------------------------------------------------------------------
# URI and query string
# ---------------------------------------------------------------------------


def canonical_uri(path: str) -> str:
    """URI-encode a path, preserving '/' between segments.

    S3 paths are not normalized: dot segments and repeated slashes are
    kept as they are.
    """
    if not path:
        return "/"
    result = _uri_encode(path, encode_slash=False)
    if not result.startswith("/"):
        result = "/" + result
    return result


def canonical_query_string(query: str | Iterable[tuple[str, str]]) -> str:
    """Build the canonical query string.

    Accepts either a raw query string (which is decoded first) or
    (name, value) pairs. Parameters are sorted by name, then value, and
    re-encoded with the RFC 3986 unreserved set.

    Args:
        query: Raw query string without the leading '?', or pairs.

    Returns:
        The canonical query string.
    """
    if isinstance(query, str):
        params = _parse_query_string(query)
    else:
        params = list(query)
    if not params:
        return ""

    encoded = sorted((_uri_encode(name), _uri_encode(value)) for name, value in params)
    return "&".join(f"{name}={value}" for name, value in encoded)


def _parse_query_string(query_string: str) -> list[tuple[str, str]]:
    params: list[tuple[str, str]] = []
    for pair in query_string.split("&"):
        if not pair:
            continue
        if "=" in pair:
            name, value = pair.split("=", 1)
        else:
            name, value = pair, ""
        params.append((urllib.parse.unquote_plus(name), urllib.parse.unquote_plus(value)))
    return params


def _uri_encode(s: str, encode_slash: bool = True) -> str:
    """S3-compatible URI encoding.

    Characters A-Z, a-z, 0-9, '-', '_', '.', '~' are left alone; everything
    else is percent-encoded with uppercase hex. Spaces become %20.

    Args:
        s: The string to encode.
        encode_slash: If True (default), '/' is encoded as %2F.

    Returns:
        The URI-encoded string.
    """
    safe = "-_.~" if encode_slash else "-_.~/"
    try:
        return urllib.parse.quote(s, safe=safe)
    except UnicodeEncodeError as exc:
        raise EncodingError(f"Value {s!r} is not valid UTF-8 text.") from exc
