"""SigV4 constants shared by the signing pipeline.

These names are treated as read-only; nothing in the package rebinds them.
"""

# Algorithm and scope
ALGORITHM = "AWS4-HMAC-SHA256"
KEY_PREFIX = "AWS4"
SCOPE_TERMINATOR = "aws4_request"
SERVICE_NAME = "s3"

# Payload markers
UNSIGNED_PAYLOAD = "UNSIGNED-PAYLOAD"
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

# Timestamp formats
AMZ_DATE_FORMAT = "%Y%m%dT%H%M%SZ"
SCOPE_DATE_FORMAT = "%Y%m%d"
POLICY_EXPIRATION_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Query parameter / form field names
ALGORITHM_KEY = "X-Amz-Algorithm"
CREDENTIAL_KEY = "X-Amz-Credential"
DATE_KEY = "X-Amz-Date"
EXPIRES_KEY = "X-Amz-Expires"
SIGNED_HEADERS_KEY = "X-Amz-SignedHeaders"
SIGNATURE_KEY = "X-Amz-Signature"

# Header names (lower-case, as they appear in the canonical request)
HOST_HEADER = "host"
CONTENT_SHA256_HEADER = "x-amz-content-sha256"
AMZ_DATE_HEADER = "x-amz-date"
AUTHORIZATION_HEADER = "Authorization"

MAX_PRESIGNED_EXPIRES = 604800  # 7 days in seconds
