"""POST policy documents for browser-based uploads.

A policy is a JSON document listing an expiration time and the conditions an
upload form must satisfy. Its base64 encoding is both the ``policy`` form
field and the string that gets signed.

Example document::

    {"expiration": "2026-10-19T13:00:00Z",
     "conditions": [["content-length-range", 0, 10485770],
                    {"bucket": "examplebucket"},
                    {"Content-Type": "image/png"},
                    {"key": "example.png"}]}
"""

import base64
import json
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from s3presign.constants import POLICY_EXPIRATION_FORMAT
from s3presign.errors import EncodingError

# Added to the caller's declared maximum content length to absorb
# multipart encoding overhead.
CONTENT_LENGTH_SLACK = 10


class Conditions:
    """Ordered list of policy conditions.

    Each condition is either an exact-match object ``{field: value}`` or a
    numeric range ``[field, min, max]``.
    """

    def __init__(self) -> None:
        self._items: list[Any] = []

    @classmethod
    def build(
        cls,
        content_length_range: tuple[int, int],
        bucket: str,
        fields: Mapping[str, str],
    ) -> "Conditions":
        """Build the standard condition list.

        Order: content-length-range, bucket, then one match per field in
        the mapping's iteration order.
        """
        conditions = cls()
        low, high = content_length_range
        conditions.insert_range("content-length-range", low, high)
        conditions.insert_match("bucket", bucket)
        for name, value in fields.items():
            conditions.insert_match(name, value)
        return conditions

    def insert_match(self, name: str, value: str) -> None:
        self._items.append({name: value})

    def insert_range(self, name: str, low: int, high: int) -> None:
        if low > high:
            raise ValueError(f"Invalid range for {name}: {low} > {high}")
        self._items.append([name, low, high])

    def to_list(self) -> list[Any]:
        return [item.copy() for item in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(self.to_list())


class Policy:
    """An upload policy document.

    Attributes:
        expiration: Expiry instant (UTC).
        conditions: The condition list.
    """

    def __init__(self, expiration: datetime, conditions: Conditions) -> None:
        if expiration.tzinfo is None:
            expiration = expiration.replace(tzinfo=timezone.utc)
        self.expiration = expiration.astimezone(timezone.utc)
        self.conditions = conditions

    @classmethod
    def build(
        cls,
        expire_duration: timedelta | int,
        bucket: str,
        content_length_range: tuple[int, int],
        fields: Mapping[str, str],
        now: datetime | None = None,
    ) -> "Policy":
        """Build a policy that expires ``expire_duration`` after ``now``.

        The expiration is rounded up to the next whole second.

        Args:
            expire_duration: Lifetime of the policy (timedelta or seconds).
            bucket: Target bucket name.
            content_length_range: Inclusive (min, max) upload size in bytes.
            fields: Additional exact-match form fields.
            now: Capture time; defaults to the current UTC time.

        Returns:
            The policy.

        Raises:
            ValueError: If the duration is not positive.
        """
        if not isinstance(expire_duration, timedelta):
            expire_duration = timedelta(seconds=expire_duration)
        if expire_duration <= timedelta(0):
            raise ValueError(f"Policy duration must be positive, got {expire_duration}")
        if now is None:
            now = datetime.now(timezone.utc)
        conditions = Conditions.build(content_length_range, bucket, fields)
        expiration = now + expire_duration
        # The document carries whole seconds; round up so it never precedes now.
        if expiration.microsecond:
            expiration = expiration.replace(microsecond=0) + timedelta(seconds=1)
        return cls(expiration, conditions)

    @property
    def expiration_string(self) -> str:
        """Expiration as RFC 3339 UTC, second precision, 'Z' suffix."""
        return self.expiration.strftime(POLICY_EXPIRATION_FORMAT)

    def to_dict(self) -> dict[str, Any]:
        return {
            "expiration": self.expiration_string,
            "conditions": self.conditions.to_list(),
        }

    def to_json(self) -> str:
        """Serialize the policy to compact JSON."""
        try:
            return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise EncodingError(f"Policy is not JSON-serializable: {exc}") from exc

    def encode(self) -> str:
        """Base64-encode the UTF-8 JSON document."""
        try:
            raw = self.to_json().encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EncodingError(f"Policy is not valid UTF-8: {exc}") from exc
        return base64.b64encode(raw).decode("ascii")

    @staticmethod
    def decode(encoded: str) -> dict[str, Any]:
        """Decode a base64 policy back into its JSON document."""
        return json.loads(base64.b64decode(encoded).decode("utf-8"))
