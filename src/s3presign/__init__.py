"""s3presign - AWS Signature Version 4 signing for S3 object operations.

Builds header-authenticated requests, presigned GET URLs and presigned POST
upload forms without depending on an AWS SDK.
"""

from s3presign.canonical import RequestDescriptor
from s3presign.client import PostPresignedInfo, S3Client
from s3presign.errors import (
    ConfigurationError,
    EncodingError,
    InvalidKeyError,
    S3SignerError,
    SignError,
    TransportError,
)
from s3presign.policy import Conditions, Policy
from s3presign.signer import Signer, derive_signing_key

__version__ = "0.1.0"

__all__ = [
    "Conditions",
    "ConfigurationError",
    "EncodingError",
    "InvalidKeyError",
    "Policy",
    "PostPresignedInfo",
    "RequestDescriptor",
    "S3Client",
    "S3SignerError",
    "SignError",
    "Signer",
    "TransportError",
    "derive_signing_key",
]
