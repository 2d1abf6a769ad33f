# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0


class AWSSDKWarning(UserWarning): ...


class BaseAWSSDKException(Exception):
    """Top-level exception to capture signer-related errors."""


class MissingExpectedParameterException(BaseAWSSDKException, ValueError):
    """A signing step requires a property that was not supplied."""


class InvalidSigningParameterException(BaseAWSSDKException, ValueError):
    """A signing property was supplied with an unusable value."""
