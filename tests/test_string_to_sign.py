"""Tests for string-to-sign construction."""

from datetime import datetime, timedelta, timezone

import pytest

from s3presign.canonical import RequestDescriptor, canonical_hex
from s3presign.constants import ALGORITHM, EMPTY_SHA256
from s3presign.policy import Policy
from s3presign.string_to_sign import (
    AuthorizationHeader,
    PostUploadPresigned,
    QueryParamsPresigned,
    format_amz_date,
    format_scope_date,
    scope,
    string_to_sign,
)

EXAMPLE_DATE = datetime(2013, 5, 24, tzinfo=timezone.utc)


def _request() -> RequestDescriptor:
    return RequestDescriptor(
        method="GET",
        host="examplebucket.s3.amazonaws.com",
        path="/test.txt",
        headers={
            "host": "examplebucket.s3.amazonaws.com",
            "range": "bytes=0-9",
            "x-amz-content-sha256": EMPTY_SHA256,
            "x-amz-date": "20130524T000000Z",
        },
    )


class TestFormatting:
    """Test timestamp and scope formatting."""

    def test_amz_date(self):
        assert format_amz_date(datetime(2026, 2, 22, 12, 5, 9, tzinfo=timezone.utc)) == (
            "20260222T120509Z"
        )

    def test_scope_date(self):
        assert format_scope_date(EXAMPLE_DATE) == "20130524"

    def test_scope(self):
        assert scope("us-east-1", EXAMPLE_DATE) == "20130524/us-east-1/s3/aws4_request"

    def test_non_utc_converted(self):
        """Aware timestamps in other zones are converted to UTC first."""
        plus_two = timezone(timedelta(hours=2))
        date = datetime(2013, 5, 24, 1, 0, 0, tzinfo=plus_two)
        assert format_amz_date(date) == "20130523T230000Z"
        assert scope("eu-west-1", date) == "20130523/eu-west-1/s3/aws4_request"

    def test_naive_treated_as_utc(self):
        assert format_amz_date(datetime(2013, 5, 24)) == "20130524T000000Z"


class TestStringToSign:
    """Test the three signing modes."""

    def test_authorization_header_aws_example(self):
        """Header mode reproduces the documented string to sign."""
        result = string_to_sign(AuthorizationHeader(_request(), "us-east-1", EXAMPLE_DATE))
        assert result == (
            "AWS4-HMAC-SHA256\n"
            "20130524T000000Z\n"
            "20130524/us-east-1/s3/aws4_request\n"
            "7344ae5b7ee6c3e7e6b0fe0640412a37625d1fbfff95c48bbb2dc43964946972"
        )

    def test_query_params_uses_unsigned_payload(self):
        """Presigned mode hashes the canonical request with UNSIGNED-PAYLOAD."""
        request = _request()
        result = string_to_sign(QueryParamsPresigned(request, "us-east-1", EXAMPLE_DATE))
        lines = result.split("\n")
        assert lines[0] == ALGORITHM
        assert lines[3] == canonical_hex(request, include_payload=False)
        assert lines[3] != canonical_hex(request, include_payload=True)

    def test_post_policy_is_encoded_policy(self):
        """POST mode signs the base64 policy with no prefix."""
        policy = Policy.build(
            timedelta(hours=1), "examplebucket", (0, 100), {"key": "a.txt"}, now=EXAMPLE_DATE
        )
        assert string_to_sign(PostUploadPresigned(policy)) == policy.encode()

    def test_unknown_variant_rejected(self):
        with pytest.raises(TypeError):
            string_to_sign("not a variant")

    def test_deterministic(self):
        variant = AuthorizationHeader(_request(), "us-east-1", EXAMPLE_DATE)
        assert string_to_sign(variant) == string_to_sign(variant)
