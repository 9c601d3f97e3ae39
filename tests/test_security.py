from datetime import timedelta

from userhub.core.result import ErrorKind, Ok, bad_request, not_found, unauthorized
from userhub.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = get_password_hash("secret")
    assert hashed.startswith("$pbkdf2-sha256$")
    assert verify_password("secret", hashed)
    assert not verify_password("other", hashed)


def test_unknown_hash_does_not_verify():
    assert not verify_password("x", "x")
    assert not verify_password("x", "")


def test_token_subject():
    token = create_access_token({"sub": "user-1"}, "key", expires_delta=timedelta(minutes=1))
    assert decode_access_token(token, "key") == "user-1"


def test_token_with_wrong_key_is_rejected():
    token = create_access_token({"sub": "user-1"}, "key")
    assert decode_access_token(token, "other-key") is None


def test_error_helpers():
    assert not_found("x").error.kind == ErrorKind.NOT_FOUND
    assert unauthorized("x").error.kind == ErrorKind.UNAUTHORIZED
    assert bad_request("x").error.kind == ErrorKind.BAD_REQUEST
    assert not bad_request("x").is_ok()
    assert Ok(1).is_ok()
