# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0
# ruff: noqa: S101
import base64
import datetime
import hmac
import io
import logging
import warnings
from collections.abc import Iterable
from copy import deepcopy
from email.utils import format_datetime
from hashlib import sha1, sha256
from typing import Final, Required, TypedDict

from ._http import AWSRequest, Field, URI
from ._identity import AWSCredentialIdentity
from ._utils import (
    encode_path,
    encode_query,
    encode_url_to_path,
    parse_query,
    trim_all,
    uri_encode,
)
from .exceptions import (
    AWSSDKWarning,
    InvalidSigningParameterException,
    MissingExpectedParameterException,
)
from .interfaces.identity import AWSCredentialsIdentity as _AWSCredentialsIdentity
from .interfaces.io import Seekable

logger: Final = logging.getLogger(__name__)

HEADERS_EXCLUDED_FROM_SIGNING: Final[frozenset[str]] = frozenset(
    (
        "accept",
        "accept-encoding",
        "authorization",
        "connection",
        "content-length",
        "content-type",
        "expect",
        "user-agent",
        "x-amzn-trace-id",
    )
)
DEFAULT_PORTS: Final[dict[str, int]] = {"http": 80, "https": 443}

S3_SERVICE: Final = "s3"
STS_SERVICE: Final = "sts"

SIGV4_ALGORITHM: Final = "AWS4-HMAC-SHA256"
SIGV4_TERMINATOR: Final = "aws4_request"
SIGV4_TIMESTAMP_FORMAT: Final = "%Y%m%dT%H%M%SZ"
SIGV4_DATE_FORMAT: Final = "%Y%m%d"
UNSIGNED_PAYLOAD: Final = "UNSIGNED-PAYLOAD"
EMPTY_SHA256_HASH: Final = (
    "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
)
# Seven days, the longest lifetime S3 accepts for a SigV4 presigned URL.
DEFAULT_PRESIGN_EXPIRES: Final = 604800

# Query parameters owned by presigning, replaced on every presign call.
SIGV4_QUERY_PARAMETERS: Final[tuple[str, ...]] = (
    "X-Amz-Algorithm",
    "X-Amz-Credential",
    "X-Amz-Date",
    "X-Amz-Expires",
    "X-Amz-SignedHeaders",
    "X-Amz-Security-Token",
    "X-Amz-Signature",
)
# Header-form authentication left on a request by a previous SigV4Signer.sign.
_SIGV4_HEADER_AUTH_FIELDS: Final[tuple[str, ...]] = (
    "Authorization",
    "X-Amz-Date",
    "X-Amz-Content-SHA256",
    "X-Amz-Security-Token",
)
SIGV2_QUERY_PARAMETERS: Final[tuple[str, ...]] = (
    "AWSAccessKeyId",
    "Expires",
    "Signature",
)

# Sub-resources that take part in the SigV2 canonical resource. Must stay sorted.
SIGV2_SUB_RESOURCES: Final[tuple[str, ...]] = (
    "acl",
    "cors",
    "delete",
    "encryption",
    "legal-hold",
    "lifecycle",
    "location",
    "logging",
    "notification",
    "partNumber",
    "policy",
    "replication",
    "requestPayment",
    "response-cache-control",
    "response-content-disposition",
    "response-content-encoding",
    "response-content-language",
    "response-content-type",
    "response-expires",
    "retention",
    "select",
    "select-type",
    "tagging",
    "torrent",
    "uploadId",
    "uploads",
    "versionId",
    "versioning",
    "versions",
    "website",
)


class SigV4SigningProperties(TypedDict, total=False):
    region: Required[str]
    service: str
    date: str
    payload_signing_enabled: bool
    expires: int


class SigV2SigningProperties(TypedDict, total=False):
    virtual_host: bool
    date: datetime.datetime
    expires: int


def _hmac_sha256(key: bytes, value: str) -> bytes:
    return hmac.new(key=key, msg=value.encode(), digestmod=sha256).digest()


def signing_key(secret_key: str, date: str, region: str, service: str) -> bytes:
    """Derive the SigV4 signing key scoped to a date, region and service.

    DateKey              = HMAC-SHA256("AWS4"+"<SecretAccessKey>", "<YYYYMMDD>")
    DateRegionKey        = HMAC-SHA256(<DateKey>, "<aws-region>")
    DateRegionServiceKey = HMAC-SHA256(<DateRegionKey>, "<aws-service>")
    SigningKey           = HMAC-SHA256(<DateRegionServiceKey>, "aws4_request")

    :param date: The signing date. Only the leading ``YYYYMMDD`` is used, so a full
        SigV4 timestamp is accepted as well.
    """
    k_date = _hmac_sha256(key=f"AWS4{secret_key}".encode(), value=date[0:8])
    k_region = _hmac_sha256(key=k_date, value=region)
    k_service = _hmac_sha256(key=k_region, value=service)
    return _hmac_sha256(key=k_service, value=SIGV4_TERMINATOR)


def credential_scope(date: str, region: str, service: str = S3_SERVICE) -> str:
    # Scope format: <YYYYMMDD>/<AWS Region>/<AWS Service>/aws4_request
    return f"{date[0:8]}/{region}/{service}/{SIGV4_TERMINATOR}"


def get_credential(
    access_key: str, region: str, date: str, service: str = S3_SERVICE
) -> str:
    """Build the ``Credential`` value: ``<access_key>/<credential scope>``."""
    return f"{access_key}/{credential_scope(date, region, service)}"


class SigV4Signer:
    """Request signer for applying the AWS Signature Version 4 algorithm.

    The signer keeps no state between calls and may be shared across threads.
    """

    def sign(
        self,
        *,
        signing_properties: SigV4SigningProperties,
        request: AWSRequest,
        identity: AWSCredentialIdentity,
    ) -> AWSRequest:
        """Generate and apply a SigV4 ``Authorization`` header to a copy of the
        supplied request.

        Anonymous identities produce an unsigned copy.

        :param signing_properties: SigV4SigningProperties to define signing
            primitives such as the target region, service, and date.
        :param request: An AWSRequest to sign prior to sending to the service.
        :param identity: The credentials to sign with.
        """
        self._validate_identity(identity=identity)
        new_request = self._generate_new_request(request=request)
        if identity.is_anonymous:
            logger.debug("Anonymous credentials, leaving request unsigned.")
            return new_request

        new_signing_properties = self._normalize_signing_properties(
            signing_properties=signing_properties
        )
        assert "date" in new_signing_properties
        self._apply_required_fields(
            request=new_request,
            signing_properties=new_signing_properties,
            identity=identity,
        )

        canonical_request = self.canonical_request(
            signing_properties=new_signing_properties,
            request=new_request,
        )
        string_to_sign = self.string_to_sign(
            canonical_request=canonical_request,
            signing_properties=new_signing_properties,
        )
        signature = self._signature(
            string_to_sign=string_to_sign,
            secret_key=identity.secret_access_key,
            signing_properties=new_signing_properties,
        )

        signing_fields = self._normalize_signing_fields(request=new_request)
        credential = get_credential(
            identity.access_key_id,
            new_signing_properties["region"],
            new_signing_properties["date"],
            new_signing_properties["service"],
        )
        authorization = self.generate_authorization_field(
            credential=credential,
            signed_headers=list(signing_fields.keys()),
            signature=signature,
        )
        new_request.fields.set_field(authorization)
        return new_request

    def presign(
        self,
        *,
        signing_properties: SigV4SigningProperties,
        request: AWSRequest,
        identity: AWSCredentialIdentity,
    ) -> AWSRequest:
        """Generate a presigned copy of the supplied request.

        The authentication parameters are written to the query string in the
        order ``X-Amz-Algorithm``, ``X-Amz-Credential``, ``X-Amz-Date``,
        ``X-Amz-Expires``, ``X-Amz-SignedHeaders``, ``X-Amz-Security-Token`` (only
        with a session token) and ``X-Amz-Signature``. The signature covers every
        other parameter. The payload is always ``UNSIGNED-PAYLOAD``.
        Header-form authentication from an earlier :py:meth:`sign` is removed.

        :param signing_properties: SigV4SigningProperties. ``expires`` is the
            lifetime of the URL in seconds and defaults to seven days.
        :param request: An AWSRequest to presign.
        :param identity: The credentials to sign with.
        """
        self._validate_identity(identity=identity)
        new_request = self._generate_new_request(request=request)
        if identity.is_anonymous:
            logger.debug("Anonymous credentials, leaving request unsigned.")
            return new_request

        new_signing_properties = self._normalize_signing_properties(
            signing_properties=signing_properties
        )
        assert "date" in new_signing_properties
        expires = _validate_expires(
            new_signing_properties.get("expires", DEFAULT_PRESIGN_EXPIRES)
        )
        for name in _SIGV4_HEADER_AUTH_FIELDS:
            if name in new_request.fields:
                del new_request.fields[name]

        signing_fields = self._normalize_signing_fields(request=new_request)
        credential = get_credential(
            identity.access_key_id,
            new_signing_properties["region"],
            new_signing_properties["date"],
            new_signing_properties["service"],
        )
        params = [
            (key, value)
            for key, value in parse_query(new_request.destination.query)
            if key not in SIGV4_QUERY_PARAMETERS
        ]
        params.extend(
            (
                ("X-Amz-Algorithm", SIGV4_ALGORITHM),
                ("X-Amz-Credential", credential),
                ("X-Amz-Date", new_signing_properties["date"]),
                ("X-Amz-Expires", str(expires)),
                ("X-Amz-SignedHeaders", ";".join(signing_fields)),
            )
        )
        if identity.session_token:
            params.append(("X-Amz-Security-Token", identity.session_token))
        new_request.destination = new_request.destination.with_query(
            encode_query(params)
        )

        canonical_request = self.canonical_request(
            signing_properties=new_signing_properties,
            request=new_request,
            payload_hash=UNSIGNED_PAYLOAD,
        )
        string_to_sign = self.string_to_sign(
            canonical_request=canonical_request,
            signing_properties=new_signing_properties,
        )
        signature = self._signature(
            string_to_sign=string_to_sign,
            secret_key=identity.secret_access_key,
            signing_properties=new_signing_properties,
        )
        params.append(("X-Amz-Signature", signature))
        new_request.destination = new_request.destination.with_query(
            encode_query(params)
        )
        return new_request

    def generate_authorization_field(
        self, *, credential: str, signed_headers: list[str], signature: str
    ) -> Field:
        """Generate the `Authorization` field.

        :param credential:
            Credential scope string for generating the Authorization header.
            Defined as:
                <access_key>/<date>/<region>/<service>/<request_type>
        :param signed_headers:
            A list of the field names used in signing.
        :param signature:
            Final hash of the SigV4 signing algorithm generated from the
            canonical request and string to sign.
        """
        signed_headers_str = ";".join(signed_headers)
        auth_str = (
            f"{SIGV4_ALGORITHM} Credential={credential}, "
            f"SignedHeaders={signed_headers_str}, Signature={signature}"
        )
        return Field(name="Authorization", values=[auth_str])

    def _signature(
        self,
        *,
        string_to_sign: str,
        secret_key: str,
        signing_properties: SigV4SigningProperties,
    ) -> str:
        """Sign the string to sign with the key scoped to the request's date,
        region and service."""
        assert "date" in signing_properties
        k_signing = signing_key(
            secret_key,
            signing_properties["date"],
            signing_properties["region"],
            signing_properties.get("service", S3_SERVICE),
        )
        return _hmac_sha256(key=k_signing, value=string_to_sign).hex()

    def _validate_identity(self, *, identity: AWSCredentialIdentity) -> None:
        if not isinstance(identity, _AWSCredentialsIdentity):  # pyright: ignore
            raise ValueError(
                "Received unexpected value for identity parameter. Expected "
                f"AWSCredentialIdentity but received {type(identity)}."
            )

    def _normalize_signing_properties(
        self, *, signing_properties: SigV4SigningProperties
    ) -> SigV4SigningProperties:
        # Create copy of signing properties to avoid mutating the original
        new_signing_properties = SigV4SigningProperties(**signing_properties)
        if not new_signing_properties.get("region"):
            raise InvalidSigningParameterException(
                "A region is required for SigV4 signing."
            )
        if "date" not in new_signing_properties:
            date_obj = datetime.datetime.now(datetime.UTC)
            new_signing_properties["date"] = date_obj.strftime(SIGV4_TIMESTAMP_FORMAT)
        new_signing_properties.setdefault("service", S3_SERVICE)
        return new_signing_properties

    def _generate_new_request(self, *, request: AWSRequest) -> AWSRequest:
        return deepcopy(request)

    def _apply_required_fields(
        self,
        *,
        request: AWSRequest,
        signing_properties: SigV4SigningProperties,
        identity: AWSCredentialIdentity,
    ) -> None:
        assert "date" in signing_properties
        # X-Amz-Date must always match the timestamp in the string to sign.
        request.fields.set_field(
            Field(name="X-Amz-Date", values=[signing_properties["date"]])
        )
        if identity.session_token:
            request.fields.set_field(
                Field(name="X-Amz-Security-Token", values=[identity.session_token])
            )
        if "X-Amz-Content-SHA256" not in request.fields:
            payload_hash = self._compute_payload_hash(
                request=request, signing_properties=signing_properties
            )
            request.fields.set_field(
                Field(name="X-Amz-Content-SHA256", values=[payload_hash])
            )

    def canonical_request(
        self,
        *,
        signing_properties: SigV4SigningProperties,
        request: AWSRequest,
        payload_hash: str | None = None,
    ) -> str:
        """The canonical request is a standardized string laying out the components
        used in the SigV4 signing algorithm. This is useful to quickly compare inputs
        to find signature mismatches and unintended variances.

        The SigV4 specification defines the canonical request to be:
            <HTTPMethod>\n
            <CanonicalURI>\n
            <CanonicalQueryString>\n
            <CanonicalHeaders>\n
            <SignedHeaders>\n
            <HashedPayload>

        :param signing_properties:
            SigV4SigningProperties to define signing primitives such as
            the target service, region, and date.
        :param request:
            An AWSRequest to use for generating a SigV4 signature.
        :param payload_hash:
            Overrides the hashed payload, e.g. ``UNSIGNED-PAYLOAD`` for presigning.
            When omitted the ``X-Amz-Content-SHA256`` field is used, or the body is
            hashed.
        """
        if payload_hash is None:
            payload_hash = self._compute_payload_hash(
                request=request, signing_properties=signing_properties
            )
        canonical_path = encode_path(request.destination.path)
        canonical_query = self._format_canonical_query(query=request.destination.query)
        normalized_fields = self._normalize_signing_fields(request=request)
        canonical_fields = self._format_canonical_fields(fields=normalized_fields)
        canonical_request = (
            f"{request.method.upper()}\n"
            f"{canonical_path}\n"
            f"{canonical_query}\n"
            f"{canonical_fields}\n"
            f"{';'.join(normalized_fields)}\n"
            f"{payload_hash}"
        )
        logger.debug("SigV4 canonical request:\n%s", canonical_request)
        return canonical_request

    def string_to_sign(
        self,
        *,
        canonical_request: str,
        signing_properties: SigV4SigningProperties,
    ) -> str:
        """The string to sign concatenates the formal identifier of the signing
        algorithm, the signing DateTime, the scope of our credentials, and a hash of
        the canonical request.

        The SigV4 specification defines the string to sign as:
            Algorithm \n
            RequestDateTime \n
            CredentialScope  \n
            HashedCanonicalRequest

        :param canonical_request:
            String generated from the `canonical_request` method.
        :param signing_properties:
            SigV4SigningProperties to define signing primitives such as
            the target service, region, and date.
        """
        date = signing_properties.get("date")
        if date is None:
            raise MissingExpectedParameterException(
                "Cannot generate string_to_sign without a valid date "
                f"in your signing_properties. Current value: {date}"
            )
        scope = credential_scope(
            date,
            signing_properties["region"],
            signing_properties.get("service", S3_SERVICE),
        )
        string_to_sign = (
            f"{SIGV4_ALGORITHM}\n"
            f"{date}\n"
            f"{scope}\n"
            f"{sha256(canonical_request.encode()).hexdigest()}"
        )
        logger.debug("SigV4 string to sign:\n%s", string_to_sign)
        return string_to_sign

    def _format_canonical_query(self, *, query: str | None) -> str:
        query_parts = (
            (uri_encode(key), uri_encode(value)) for key, value in parse_query(query)
        )
        # key-value pairs must be in sorted order for their encoded forms.
        return "&".join(f"{key}={value}" for key, value in sorted(query_parts))

    def _normalize_signing_fields(self, *, request: AWSRequest) -> dict[str, str]:
        normalized_fields = {
            field.name.lower(): ",".join(trim_all(value) for value in field.values)
            for field in request.fields
            if self._is_signable_header(field.name.lower())
        }
        if "host" not in normalized_fields:
            normalized_fields["host"] = self._normalize_host_field(
                uri=request.destination
            )

        return dict(sorted(normalized_fields.items()))

    def _is_signable_header(self, field_name: str) -> bool:
        return field_name not in HEADERS_EXCLUDED_FROM_SIGNING

    def _normalize_host_field(self, *, uri: URI) -> str:
        if uri.port is not None and DEFAULT_PORTS.get(uri.scheme) == uri.port:
            return uri.host
        return uri.netloc

    def _format_canonical_fields(self, *, fields: dict[str, str]) -> str:
        return "".join(f"{key}:{value}\n" for key, value in fields.items())

    def _should_sha256_sign_payload(
        self,
        *,
        request: AWSRequest,
        signing_properties: SigV4SigningProperties,
    ) -> bool:
        # All insecure connections should be signed
        if request.destination.scheme != "https":
            return True

        return signing_properties.get("payload_signing_enabled", True)

    def _compute_payload_hash(
        self, *, request: AWSRequest, signing_properties: SigV4SigningProperties
    ) -> str:
        if "X-Amz-Content-SHA256" in request.fields:
            return request.fields["X-Amz-Content-SHA256"].as_string()

        if not self._should_sha256_sign_payload(
            request=request, signing_properties=signing_properties
        ):
            return UNSIGNED_PAYLOAD

        body = request.body

        if body is None:
            return EMPTY_SHA256_HASH

        if isinstance(body, bytes | bytearray):
            return sha256(body).hexdigest()

        if not isinstance(body, Iterable):
            raise TypeError(
                "Request bodies must be bytes or of type Iterable[bytes], "
                f"received {type(body)}."
            )

        warnings.warn(
            "Payload signing is enabled. This may result in "
            "decreased performance for large request bodies.",
            AWSSDKWarning,
        )

        checksum = sha256()
        if isinstance(body, Seekable):
            position = body.tell()
            for chunk in body:
                checksum.update(chunk)
            body.seek(position)
        else:
            buffer = io.BytesIO()
            for chunk in body:
                buffer.write(chunk)
                checksum.update(chunk)
            buffer.seek(0)
            request.body = buffer
        return checksum.hexdigest()


class SigV2Signer:
    """Request signer for the legacy AWS Signature Version 2 algorithm used by
    S3-compatible services that predate SigV4."""

    def sign(
        self,
        *,
        signing_properties: SigV2SigningProperties,
        request: AWSRequest,
        identity: AWSCredentialIdentity,
    ) -> AWSRequest:
        """Apply an ``Authorization: AWS <access_key>:<signature>`` header to a copy
        of the supplied request.

        A ``Date`` header is added when the request has none.
        """
        self._validate_identity(identity=identity)
        new_request = deepcopy(request)
        if identity.is_anonymous:
            logger.debug("Anonymous credentials, leaving request unsigned.")
            return new_request

        date = self._resolve_date(signing_properties=signing_properties)
        if "Date" not in new_request.fields:
            new_request.fields.set_field(
                Field(name="Date", values=[format_datetime(date, usegmt=True)])
            )

        string_to_sign = self.string_to_sign(
            request=new_request,
            virtual_host=signing_properties.get("virtual_host", False),
        )
        signature = self.signature(
            string_to_sign=string_to_sign, secret_key=identity.secret_access_key
        )
        new_request.fields.set_field(
            Field(
                name="Authorization",
                values=[f"AWS {identity.access_key_id}:{signature}"],
            )
        )
        return new_request

    def presign(
        self,
        *,
        signing_properties: SigV2SigningProperties,
        request: AWSRequest,
        identity: AWSCredentialIdentity,
    ) -> AWSRequest:
        """Generate a presigned copy of the supplied request.

        ``AWSAccessKeyId``, ``Expires`` and ``Signature`` are appended to the query
        string. ``Expires`` is the epoch second at which the URL stops being valid.
        """
        self._validate_identity(identity=identity)
        new_request = deepcopy(request)
        if identity.is_anonymous:
            logger.debug("Anonymous credentials, leaving request unsigned.")
            return new_request

        date = self._resolve_date(signing_properties=signing_properties)
        expires = _validate_expires(
            signing_properties.get("expires", DEFAULT_PRESIGN_EXPIRES)
        )
        epoch_expires = str(int(date.timestamp()) + expires)
        if "Authorization" in new_request.fields:
            del new_request.fields["Authorization"]

        string_to_sign = self.string_to_sign(
            request=new_request,
            virtual_host=signing_properties.get("virtual_host", False),
            expires=epoch_expires,
        )
        signature = self.signature(
            string_to_sign=string_to_sign, secret_key=identity.secret_access_key
        )

        params = [
            (key, value)
            for key, value in parse_query(new_request.destination.query)
            if key not in SIGV2_QUERY_PARAMETERS
        ]
        params.extend(
            (
                ("AWSAccessKeyId", identity.access_key_id),
                ("Expires", epoch_expires),
                ("Signature", signature),
            )
        )
        new_request.destination = new_request.destination.with_query(
            encode_query(params)
        )
        return new_request

    def string_to_sign(
        self, *, request: AWSRequest, virtual_host: bool, expires: str | None = None
    ) -> str:
        """Build the SigV2 string to sign:
            <HTTPMethod>\n
            <Content-MD5>\n
            <Content-Type>\n
            <Date, or Expires when presigning>\n
            <CanonicalizedAmzHeaders>
            <CanonicalizedResource>

        :param expires: Epoch seconds used in place of the ``Date`` header when
            presigning.
        """
        fields = request.fields
        date = fields.get_value("Date") if expires is None else expires
        string_to_sign = (
            f"{request.method.upper()}\n"
            f"{fields.get_value('Content-MD5')}\n"
            f"{fields.get_value('Content-Type')}\n"
            f"{date}\n"
            f"{self._canonical_amz_fields(request=request)}"
            f"{self.canonical_resource(request=request, virtual_host=virtual_host)}"
        )
        logger.debug("SigV2 string to sign:\n%s", string_to_sign)
        return string_to_sign

    def canonical_resource(self, *, request: AWSRequest, virtual_host: bool) -> str:
        """Build ``/bucket/key`` plus any whitelisted sub-resources.

        Only the first value of a sub-resource is used. Query parameters outside
        ``SIGV2_SUB_RESOURCES`` never change the signature.
        """
        path = encode_url_to_path(request.destination, virtual_host)
        values: dict[str, str] = {}
        for key, value in parse_query(request.destination.query):
            values.setdefault(key, value)

        sub_resources = [
            f"{name}={values[name]}" if values[name] else name
            for name in SIGV2_SUB_RESOURCES
            if name in values
        ]
        if not sub_resources:
            return path
        return f"{path}?{'&'.join(sub_resources)}"

    def signature(self, *, string_to_sign: str, secret_key: str) -> str:
        digest = hmac.new(
            key=secret_key.encode(), msg=string_to_sign.encode(), digestmod=sha1
        ).digest()
        return base64.b64encode(digest).decode()

    def _canonical_amz_fields(self, *, request: AWSRequest) -> str:
        amz_fields = {
            field.name.lower(): field.as_string()
            for field in request.fields
            if field.name.lower().startswith("x-amz-")
        }
        return "".join(
            f"{name}:{value}\n" for name, value in sorted(amz_fields.items())
        )

    def _resolve_date(
        self, *, signing_properties: SigV2SigningProperties
    ) -> datetime.datetime:
        date = signing_properties.get("date")
        if date is None:
            date = datetime.datetime.now(datetime.UTC)
        elif date.tzinfo is None:
            date = date.replace(tzinfo=datetime.UTC)
        return date.astimezone(datetime.UTC).replace(microsecond=0)

    def _validate_identity(self, *, identity: AWSCredentialIdentity) -> None:
        if not isinstance(identity, _AWSCredentialsIdentity):  # pyright: ignore
            raise ValueError(
                "Received unexpected value for identity parameter. Expected "
                f"AWSCredentialIdentity but received {type(identity)}."
            )


def _validate_expires(expires: int) -> int:
    if expires < 0:
        raise InvalidSigningParameterException(
            f"Presign expiry must be zero or more seconds, received {expires}."
        )
    return expires


def post_presign_signature_v4(
    policy_base64: str, date: datetime.datetime, secret_key: str, region: str
) -> str:
    """Sign a base64 encoded browser POST policy with SigV4."""
    key = signing_key(secret_key, date.strftime(SIGV4_DATE_FORMAT), region, S3_SERVICE)
    return _hmac_sha256(key=key, value=policy_base64).hex()


def post_presign_signature_v2(policy_base64: str, secret_key: str) -> str:
    """Sign a base64 encoded browser POST policy with SigV2."""
    return SigV2Signer().signature(string_to_sign=policy_base64, secret_key=secret_key)


_SIGV4_SIGNER: Final = SigV4Signer()
_SIGV2_SIGNER: Final = SigV2Signer()


def sign_v4(
    request: AWSRequest,
    access_key: str,
    secret_key: str,
    session_token: str,
    region: str,
) -> AWSRequest:
    """Sign ``request`` for S3 with a SigV4 ``Authorization`` header."""
    return _SIGV4_SIGNER.sign(
        signing_properties=SigV4SigningProperties(region=region, service=S3_SERVICE),
        request=request,
        identity=AWSCredentialIdentity(
            access_key_id=access_key,
            secret_access_key=secret_key,
            session_token=session_token,
        ),
    )


def sign_v4_sts(
    request: AWSRequest,
    access_key: str,
    secret_key: str,
    session_token: str,
    region: str,
) -> AWSRequest:
    """Sign ``request`` for the STS service with a SigV4 ``Authorization`` header."""
    return _SIGV4_SIGNER.sign(
        signing_properties=SigV4SigningProperties(region=region, service=STS_SERVICE),
        request=request,
        identity=AWSCredentialIdentity(
            access_key_id=access_key,
            secret_access_key=secret_key,
            session_token=session_token,
        ),
    )


def presign_v4(
    request: AWSRequest,
    access_key: str,
    secret_key: str,
    session_token: str,
    region: str,
    expires: int,
) -> AWSRequest:
    """Presign ``request`` for S3 with SigV4 query parameters valid for
    ``expires`` seconds."""
    return _SIGV4_SIGNER.presign(
        signing_properties=SigV4SigningProperties(
            region=region, service=S3_SERVICE, expires=expires
        ),
        request=request,
        identity=AWSCredentialIdentity(
            access_key_id=access_key,
            secret_access_key=secret_key,
            session_token=session_token,
        ),
    )


def sign_v2(
    request: AWSRequest, access_key: str, secret_key: str, virtual_host: bool
) -> AWSRequest:
    """Sign ``request`` with a SigV2 ``Authorization`` header."""
    return _SIGV2_SIGNER.sign(
        signing_properties=SigV2SigningProperties(virtual_host=virtual_host),
        request=request,
        identity=AWSCredentialIdentity(
            access_key_id=access_key, secret_access_key=secret_key
        ),
    )


def presign_v2(
    request: AWSRequest,
    access_key: str,
    secret_key: str,
    expires: int,
    virtual_host: bool,
) -> AWSRequest:
    """Presign ``request`` with SigV2 query parameters valid for ``expires``
    seconds."""
    return _SIGV2_SIGNER.presign(
        signing_properties=SigV2SigningProperties(
            virtual_host=virtual_host, expires=expires
        ),
        request=request,
        identity=AWSCredentialIdentity(
            access_key_id=access_key, secret_access_key=secret_key
        ),
    )
