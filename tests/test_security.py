from datetime import timedelta

import pytest
from jose import jwt

from marketplace_api.core.config import Settings
from marketplace_api.core.security import (
    ALGORITHM,
    InvalidToken,
    create_token,
    decode_token,
    hash_password,
    verify_password,
)

SETTINGS = Settings(JWT_SECRET="unit-test-secret")


def test_token_round_trip():
    token = create_token({"sub": "alice@example.com"}, SETTINGS)
    payload = decode_token(token, SETTINGS)
    assert payload["sub"] == "alice@example.com"
    assert payload["exp"] > payload["iat"]


def test_token_lifetime_comes_from_settings():
    short = Settings(JWT_SECRET="unit-test-secret", ACCESS_TOKEN_EXPIRE_MINUTES=30)
    payload = decode_token(create_token({"sub": "alice@example.com"}, short), short)
    assert payload["exp"] - payload["iat"] == 30 * 60


def test_expired_token_is_invalid():
    token = create_token({"sub": "alice@example.com"}, SETTINGS, timedelta(seconds=-5))
    with pytest.raises(InvalidToken):
        decode_token(token, SETTINGS)


def test_wrong_signature_is_invalid():
    token = jwt.encode({"sub": "alice@example.com"}, "another-secret", algorithm=ALGORITHM)
    with pytest.raises(InvalidToken):
        decode_token(token, SETTINGS)


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_malformed_token_is_invalid(token):
    with pytest.raises(InvalidToken):
        decode_token(token, SETTINGS)


def test_token_without_subject_is_invalid():
    token = create_token({"role": "admin"}, SETTINGS)
    with pytest.raises(InvalidToken):
        decode_token(token, SETTINGS)


def test_password_hashing():
    hashed = hash_password("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("wrong-pass", hashed)
    assert not verify_password("", hashed)


def test_token_signed_with_another_settings_secret_is_invalid():
    token = create_token({"sub": "alice@example.com"}, Settings(JWT_SECRET="other-app-secret"))
    with pytest.raises(InvalidToken):
        decode_token(token, SETTINGS)


def test_unknown_setting_is_rejected():
    with pytest.raises(TypeError):
        Settings(NOT_A_SETTING=1)
