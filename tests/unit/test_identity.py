import pytest
from s3_signers import AWSCredentialIdentity
from s3_signers.interfaces.identity import AWSCredentialsIdentity


@pytest.mark.parametrize(
    "access_key_id,secret_access_key,session_token,is_anonymous",
    [
        ("", "", "", True),
        ("", "", "SESS_TOKEN_1234", True),
        ("AKID1234EXAMPLE", "", "", False),
        ("", "SECRET1234", "", False),
        ("AKID1234EXAMPLE", "SECRET1234", "", False),
        ("AKID1234EXAMPLE", "SECRET1234", "SESS_TOKEN_1234", False),
    ],
)
def test_aws_credential_identity(
    access_key_id: str,
    secret_access_key: str,
    session_token: str,
    is_anonymous: bool,
) -> None:
    creds = AWSCredentialIdentity(
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        session_token=session_token,
    )
    assert creds.access_key_id == access_key_id
    assert creds.secret_access_key == secret_access_key
    assert creds.session_token == session_token
    assert creds.is_anonymous is is_anonymous
    assert isinstance(creds, AWSCredentialsIdentity)


def test_default_identity_is_anonymous() -> None:
    assert AWSCredentialIdentity().is_anonymous


def test_repr_hides_secret() -> None:
    creds = AWSCredentialIdentity(
        access_key_id="AKID1234EXAMPLE", secret_access_key="SECRET1234"
    )
    assert "SECRET1234" not in repr(creds)
    assert "AKID1234EXAMPLE" in repr(creds)
