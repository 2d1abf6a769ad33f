# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class AWSCredentialsIdentity(Protocol):
    """Static access key credentials used to sign a request."""

    access_key_id: str
    """A unique identifier for an AWS user or role. Empty for anonymous access."""

    secret_access_key: str
    """A secret key used in conjunction with the access key ID to authenticate
    programmatic access. Empty for anonymous access."""

    session_token: str
    """A temporary token used to specify the current session for the supplied
    credentials. Empty when the credentials are not temporary."""

    @property
    def is_anonymous(self) -> bool:
        """Whether both the access key and the secret key are empty."""
        return not self.access_key_id and not self.secret_access_key
