"""String-to-sign construction.

Three signing modes exist and the set is closed, so they are modelled as a
union of frozen dataclasses and dispatched with ``match``:

- AuthorizationHeader: canonical hash includes the payload hash.
- QueryParamsPresigned: canonical hash uses UNSIGNED-PAYLOAD.
- PostUploadPresigned: the base64 policy document is signed as-is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Union

from s3presign.canonical import RequestDescriptor, canonical_hex
from s3presign.constants import (
    ALGORITHM,
    AMZ_DATE_FORMAT,
    SCOPE_DATE_FORMAT,
    SCOPE_TERMINATOR,
    SERVICE_NAME,
)

if TYPE_CHECKING:
    from s3presign.policy import Policy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthorizationHeader:
    """Header-authenticated request (Authorization header)."""

    request: RequestDescriptor
    region: str
    date: datetime


@dataclass(frozen=True)
class QueryParamsPresigned:
    """Presigned URL: signature travels in the query string."""

    request: RequestDescriptor
    region: str
    date: datetime


@dataclass(frozen=True)
class PostUploadPresigned:
    """Browser POST upload: the encoded policy is the string to sign."""

    policy: Policy


StringToSignType = Union[AuthorizationHeader, QueryParamsPresigned, PostUploadPresigned]


def string_to_sign(variant: StringToSignType) -> str:
    """Build the exact text that gets HMAC-signed.

    Args:
        variant: One of the three signing modes.

    Returns:
        The string to sign.
    """
    match variant:
        case AuthorizationHeader(request=request, region=region, date=date):
            result = _build(canonical_hex(request, include_payload=True), region, date)
        case QueryParamsPresigned(request=request, region=region, date=date):
            result = _build(canonical_hex(request, include_payload=False), region, date)
        case PostUploadPresigned(policy=policy):
            result = policy.encode()
        case _:
            raise TypeError(f"Unsupported string-to-sign variant: {type(variant).__name__}")
    logger.debug("String to sign:\n%s", result)
    return result


def scope(region: str, date: datetime) -> str:
    """Credential scope: YYYYMMDD/region/s3/aws4_request."""
    return f"{format_scope_date(date)}/{region}/{SERVICE_NAME}/{SCOPE_TERMINATOR}"


def format_amz_date(date: datetime) -> str:
    """Format a timestamp as YYYYMMDDTHHMMSSZ (UTC)."""
    return _to_utc(date).strftime(AMZ_DATE_FORMAT)


def format_scope_date(date: datetime) -> str:
    """Format a timestamp as YYYYMMDD (UTC)."""
    return _to_utc(date).strftime(SCOPE_DATE_FORMAT)


def _build(canonical_hash: str, region: str, date: datetime) -> str:
    return f"{ALGORITHM}\n{format_amz_date(date)}\n{scope(region, date)}\n{canonical_hash}"


def _to_utc(date: datetime) -> datetime:
    # Naive datetimes are taken to already be UTC.
    if date.tzinfo is None:
        return date.replace(tzinfo=timezone.utc)
    return date.astimezone(timezone.utc)
