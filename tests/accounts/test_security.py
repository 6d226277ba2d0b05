from datetime import timedelta

import pytest
from jose import jwt

from src.accounts.config import Settings
from src.accounts.exceptions import ConfigurationError, HashingError
from src.accounts.security import ALGORITHM, CredentialHasher, TokenIssuer


def test_hash_is_salted_and_verifiable():
    hasher = CredentialHasher(rounds=4)
    first = hasher.hash("Abc12345")
    second = hasher.hash("Abc12345")

    assert first != second
    assert first != "Abc12345"
    assert hasher.verify("Abc12345", first)
    assert hasher.verify("Abc12345", second)


def test_default_cost_factor_is_ten():
    hashed = CredentialHasher().hash("Abc12345")
    assert hashed.startswith("$2b$10$")


def test_verify_mismatch_returns_false():
    hasher = CredentialHasher(rounds=4)
    assert hasher.verify("wrong", hasher.hash("Abc12345")) is False


def test_verify_malformed_hash_raises():
    with pytest.raises(HashingError):
        CredentialHasher(rounds=4).verify("Abc12345", "not-a-bcrypt-hash")


def test_only_first_72_bytes_are_significant():
    hasher = CredentialHasher(rounds=4)
    base = "A1" + "a" * 70
    hashed = hasher.hash(base + "tail-one")
    assert hasher.verify(base + "tail-two", hashed)


def test_token_carries_user_id_and_thirty_day_expiry():
    issuer = TokenIssuer("secret")
    token = issuer.issue("user-123")

    claims = jwt.decode(token, "secret", algorithms=[ALGORITHM])
    assert claims["userId"] == "user-123"
    assert claims["exp"] - claims["iat"] == int(timedelta(days=30).total_seconds())


def test_tokens_for_same_subject_differ():
    issuer = TokenIssuer("secret")
    assert issuer.issue("user-123") != issuer.issue("user-123")


def test_missing_secret_raises_configuration_error():
    with pytest.raises(ConfigurationError):
        TokenIssuer(None).issue("user-123")


def test_issuer_from_settings_uses_configured_secret_and_lifetime():
    issuer = TokenIssuer.from_settings(Settings(jwt_secret="from-env", token_expire_days=7))
    claims = jwt.decode(issuer.issue("u"), "from-env", algorithms=[ALGORITHM])

    assert issuer.expires_in == timedelta(days=7)
    assert claims["exp"] - claims["iat"] == 7 * 24 * 3600
