# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
"""S3 Signers computes AWS Signature Version 2 and Version 4 authentication for
requests to S3-compatible object stores, as headers or as presigned URLs."""

from __future__ import annotations

from ._http import AWSRequest, Field, Fields, URI
from ._identity import AWSCredentialIdentity
from ._utils import encode_path, encode_url_to_path, trim_all
from .signers import (
    SigV2Signer,
    SigV2SigningProperties,
    SigV4Signer,
    SigV4SigningProperties,
    get_credential,
    post_presign_signature_v2,
    post_presign_signature_v4,
    presign_v2,
    presign_v4,
    sign_v2,
    sign_v4,
    sign_v4_sts,
    signing_key,
)

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "URI",
    "AWSCredentialIdentity",
    "AWSRequest",
    "Field",
    "Fields",
    "SigV2Signer",
    "SigV2SigningProperties",
    "SigV4Signer",
    "SigV4SigningProperties",
    "encode_path",
    "encode_url_to_path",
    "get_credential",
    "post_presign_signature_v2",
    "post_presign_signature_v4",
    "presign_v2",
    "presign_v4",
    "sign_v2",
    "sign_v4",
    "sign_v4_sts",
    "signing_key",
    "trim_all",
)
