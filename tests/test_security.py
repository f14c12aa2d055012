import pytest
from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt

from lms_api.config import Settings
from lms_api.domain.entities import Identity, Role
from lms_api.domain.errors import ConfigurationError
from lms_api.infrastructure.security import PasswordHasher, TokenService

SECRET = "x" * 40


def make_service(**overrides) -> TokenService:
    values = {"SECRET_KEY": SECRET}
    values.update(overrides)
    return TokenService(Settings(**values))


def alice() -> Identity:
    return Identity(user_id=7, username="alice", roles=frozenset({Role.STUDENT}), role_names=("Student",))


def test_issue_and_decode():
    tokens = make_service()

    claims = tokens.decode(tokens.issue(alice()))

    assert claims["sub"] == "7"
    assert claims["name"] == "alice"
    assert claims["roles"] == ["Student"]
    assert claims["iss"] == "lms-api"
    assert claims["aud"] == "lms-clients"
    assert claims["jti"]
    assert tokens.identity_from_claims(claims) == alice()


def test_each_token_has_unique_jti():
    tokens = make_service()
    first = tokens.decode(tokens.issue(alice()))
    second = tokens.decode(tokens.issue(alice()))
    assert first["jti"] != second["jti"]


def test_wrong_secret_rejected():
    token = make_service().issue(alice())
    with pytest.raises(JWTError):
        make_service(SECRET_KEY="y" * 40).decode(token)


def test_expired_rejected():
    tokens = make_service()
    token = tokens.issue(alice(), now=datetime.now(timezone.utc) - timedelta(hours=2))
    with pytest.raises(JWTError):
        tokens.decode(token)


def test_wrong_audience_rejected():
    token = make_service(JWT_AUDIENCE="someone-else").issue(alice())
    with pytest.raises(JWTError):
        make_service().decode(token)


def test_wrong_issuer_rejected():
    token = make_service(JWT_ISSUER="impostor").issue(alice())
    with pytest.raises(JWTError):
        make_service().decode(token)


def test_non_numeric_subject_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "alice", "iss": "lms-api", "aud": "lms-clients", "iat": now, "exp": now + timedelta(minutes=5)},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(JWTError):
        make_service().decode(token)


def test_unknown_role_names_grant_nothing():
    identity = make_service().identity_from_claims({"sub": "3", "roles": ["Auditor", "Student"]})
    assert identity.roles == frozenset({Role.STUDENT})
    assert identity.role_names == ("Auditor", "Student")


def test_self_check_passes():
    make_service().self_check()


def test_self_check_fails_on_bad_algorithm():
    with pytest.raises(ConfigurationError):
        make_service(JWT_ALGORITHM="NOPE256").self_check()


def test_password_hashing():
    hasher = PasswordHasher()
    hashed = hasher.hash("correct horse")

    assert hashed != "correct horse"
    assert hasher.verify("correct horse", hashed)
    assert not hasher.verify("wrong horse", hashed)


def test_unrecognized_hash_fails_verification():
    assert PasswordHasher().verify("anything", "not-a-hash") is False
