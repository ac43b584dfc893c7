"""Tests for configuration and parameter validation."""

import pytest

from s3presign.errors import ConfigurationError
from s3presign.validation import (
    validate_bucket_name,
    validate_expires,
    validate_host,
    validate_object_key,
)


class TestValidateBucketName:
    """Tests for validate_bucket_name()."""

    # -- Valid names ----------------------------------------------------------

    def test_valid_simple(self):
        validate_bucket_name("my-bucket")

    def test_valid_three_chars(self):
        """Minimum length (3 chars) is accepted."""
        validate_bucket_name("abc")

    def test_valid_63_chars(self):
        """Maximum length (63 chars) is accepted."""
        validate_bucket_name("a" * 63)

    def test_valid_with_dots(self):
        validate_bucket_name("my.bucket.name")

    # -- Invalid names --------------------------------------------------------

    def test_too_short(self):
        with pytest.raises(ConfigurationError):
            validate_bucket_name("ab")

    def test_too_long(self):
        with pytest.raises(ConfigurationError):
            validate_bucket_name("a" * 64)

    def test_uppercase(self):
        with pytest.raises(ConfigurationError):
            validate_bucket_name("MyBucket")

    def test_ends_with_hyphen(self):
        with pytest.raises(ConfigurationError):
            validate_bucket_name("my-bucket-")

    def test_ip_address(self):
        """Names formatted as IP addresses are rejected."""
        with pytest.raises(ConfigurationError):
            validate_bucket_name("192.168.1.1")

    def test_consecutive_periods(self):
        with pytest.raises(ConfigurationError):
            validate_bucket_name("my..bucket")

    def test_not_a_string(self):
        with pytest.raises(ConfigurationError):
            validate_bucket_name(None)


class TestValidateHost:
    """Tests for validate_host()."""

    @pytest.mark.parametrize(
        "value", ["us-east-1", "s3.amazonaws.com", "localhost:9000", "minio.internal"]
    )
    def test_valid(self, value):
        validate_host(value, "endpoint")

    @pytest.mark.parametrize(
        "value",
        ["", "bad host", "s3..amazonaws.com", "-leading.example.com", "host:port", "a/b"],
    )
    def test_invalid(self, value):
        with pytest.raises(ConfigurationError):
            validate_host(value, "endpoint")

    def test_error_names_setting(self):
        with pytest.raises(ConfigurationError, match="region"):
            validate_host("bad region", "region")


class TestValidateObjectKey:
    """Tests for validate_object_key()."""

    def test_valid_key(self):
        validate_object_key("photos/2026/cat.png")

    def test_max_length_key(self):
        """A key of exactly 1024 bytes is accepted."""
        validate_object_key("a" * 1024)

    def test_key_too_long(self):
        with pytest.raises(ConfigurationError):
            validate_object_key("a" * 1025)

    def test_multibyte_length_counted_in_bytes(self):
        """Length is measured in UTF-8 bytes, not characters."""
        with pytest.raises(ConfigurationError):
            validate_object_key("é" * 513)

    def test_empty_key(self):
        with pytest.raises(ConfigurationError):
            validate_object_key("")


class TestValidateExpires:
    """Tests for validate_expires()."""

    def test_valid(self):
        assert validate_expires(3600) == 3600

    def test_bounds(self):
        assert validate_expires(1) == 1
        assert validate_expires(604800) == 604800

    def test_string_number_accepted(self):
        assert validate_expires("60") == 60

    @pytest.mark.parametrize("value", [0, 604801, -10, "abc", None])
    def test_invalid(self, value):
        with pytest.raises(ConfigurationError):
            validate_expires(value)
