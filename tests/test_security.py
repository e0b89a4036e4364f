from datetime import datetime, timezone

import jwt
import pytest

from app.core.exceptions import HashError, SigningError, UnauthorizedError
from app.core.security import TokenConfig, TokenIssuer

CLAIMS = {"id": "u-1", "email": "a@x.com", "userType": "listener"}


# ---- PasswordHasher ----
def test_hash_then_compare_matches(hasher):
    digest = hasher.hash("correct horse")
    assert digest != "correct horse"
    assert hasher.compare("correct horse", digest) is True


def test_compare_rejects_other_password(hasher):
    assert hasher.compare("pw1", hasher.hash("pw2")) is False


def test_hash_is_salted(hasher):
    a, b = hasher.hash("same"), hasher.hash("same")
    assert a != b
    assert hasher.compare("same", a) and hasher.compare("same", b)


@pytest.mark.parametrize("digest", ["", None, "not-a-bcrypt-hash", "$2b$04$short"])
def test_compare_never_raises_on_bad_digest(hasher, digest):
    assert hasher.compare("pw", digest) is False


def test_compare_empty_password_is_false(hasher):
    assert hasher.compare("", hasher.hash("pw")) is False


@pytest.mark.parametrize("plaintext", ["", None])
def test_hash_requires_password(hasher, plaintext):
    with pytest.raises(HashError):
        hasher.hash(plaintext)


# ---- TokenIssuer ----
def test_sign_embeds_claims_and_metadata(tokens):
    decoded = tokens.decode(tokens.sign(CLAIMS, False))
    assert {k: decoded[k] for k in CLAIMS} == CLAIMS
    assert decoded["type"] == "access"
    assert decoded["iss"] == "music-catalog-api"
    assert decoded["exp"] - decoded["iat"] == 5 * 60


def test_refresh_token_uses_longer_expiry():
    issuer = TokenIssuer(TokenConfig(secret_key="another-test-secret-key-32-bytes-long", refresh_token_expire_days=7))
    decoded = issuer.decode(issuer.sign(CLAIMS, True))
    assert decoded["type"] == "refresh"
    assert decoded["exp"] - decoded["iat"] == 7 * 24 * 3600


def test_repeated_signing_yields_distinct_tokens(tokens):
    assert tokens.sign(CLAIMS) != tokens.sign(CLAIMS)


@pytest.mark.parametrize("missing", ["id", "email", "userType"])
def test_sign_requires_identity_claims(tokens, missing):
    claims = {k: v for k, v in CLAIMS.items() if k != missing}
    with pytest.raises(SigningError):
        tokens.sign(claims)


def test_sign_without_key_fails():
    with pytest.raises(SigningError):
        TokenIssuer(TokenConfig(secret_key="")).sign(CLAIMS)


def test_decode_rejects_foreign_signature(tokens):
    other = TokenIssuer(TokenConfig(secret_key="foreign-secret-key-that-is-32-bytes-long"))
    with pytest.raises(UnauthorizedError):
        tokens.decode(other.sign(CLAIMS))


def test_decode_rejects_expired_token():
    issuer = TokenIssuer(TokenConfig(secret_key="another-test-secret-key-32-bytes-long", access_token_expire_minutes=-1))
    with pytest.raises(UnauthorizedError):
        issuer.decode(issuer.sign(CLAIMS))


def test_decode_rejects_token_without_expiry(tokens):
    raw = jwt.encode(
        {**CLAIMS, "iat": datetime.now(timezone.utc), "iss": "music-catalog-api"},
        "test-secret-key-for-music-catalog-api",
        algorithm="HS256",
    )
    with pytest.raises(UnauthorizedError):
        tokens.decode(raw)
