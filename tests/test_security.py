import string
from datetime import datetime, timedelta, timezone

from academic_journey.models.user import Role
from academic_journey.utils.security import TokenService, hash_password, verify_password

CLAIMS = {"id": "3f1c2b9e-0000-4000-8000-000000000001", "email": "parent@school.test", "role": Role.PARENT}


def _tamper(token: str) -> str:
    header, payload, signature = token.split(".")
    middle = len(payload) // 2
    replacement = "A" if payload[middle] != "A" else "B"
    payload = payload[:middle] + replacement + payload[middle + 1:]
    return ".".join([header, payload, signature])


# ======================
# PASSWORD HASHER
# ======================

def test_hash_round_trip():
    hashed = hash_password("Secret123!")
    assert hashed != "Secret123!"
    assert verify_password("Secret123!", hashed) is True


def test_wrong_password_does_not_verify():
    hashed = hash_password("Secret123!")
    assert verify_password("secret123!", hashed) is False


def test_hash_is_salted():
    assert hash_password("Secret123!") != hash_password("Secret123!")


def test_malformed_hash_is_false_not_error():
    assert verify_password("Secret123!", "not-a-bcrypt-hash") is False
    assert verify_password("Secret123!", "") is False
    assert verify_password("Secret123!", None) is False


def test_passwords_beyond_bcrypt_limit_are_truncated():
    long_password = "x" * 100
    hashed = hash_password(long_password)
    assert verify_password(long_password, hashed) is True
    assert verify_password("x" * 72, hashed) is True


# ======================
# TOKEN SERVICE
# ======================

def test_issued_token_verifies_to_same_claims():
    service = TokenService("unit-test-secret")
    claims = service.verify(service.issue(CLAIMS))

    assert claims is not None
    assert claims.id == CLAIMS["id"]
    assert claims.email == CLAIMS["email"]
    assert claims.role is Role.PARENT
    assert claims.exp - claims.iat == 24 * 60 * 60


def test_tampered_token_is_invalid():
    service = TokenService("unit-test-secret")
    token = service.issue(CLAIMS)
    assert service.verify(_tamper(token)) is None


def test_any_single_character_change_is_invalid():
    service = TokenService("unit-test-secret")
    token = service.issue(CLAIMS)
    alphabet = string.ascii_letters + string.digits + "-_"

    accepted = []
    for position, original in enumerate(token):
        if original == ".":
            continue
        for replacement in alphabet:
            if replacement == original:
                continue
            tampered = token[:position] + replacement + token[position + 1:]
            if service.verify(tampered) is not None:
                accepted.append((position, original, replacement))

    assert accepted == []


def test_truncated_token_is_invalid():
    service = TokenService("unit-test-secret")
    token = service.issue(CLAIMS)
    assert service.verify(token[:-1]) is None


def test_token_signed_with_other_secret_is_invalid():
    token = TokenService("other-secret").issue(CLAIMS)
    assert TokenService("unit-test-secret").verify(token) is None


def test_expired_token_is_invalid():
    service = TokenService("unit-test-secret", ttl=timedelta(hours=1))
    issued = datetime.now(tz=timezone.utc) - timedelta(hours=2)
    assert service.verify(service.issue(CLAIMS, now=issued)) is None


def test_garbage_never_raises():
    service = TokenService("unit-test-secret")
    for value in (None, "", "not-a-token", "a.b.c", "....."):
        assert service.verify(value) is None


def test_unknown_role_in_token_is_invalid():
    service = TokenService("unit-test-secret")
    token = service.issue({**CLAIMS, "role": "principal"})
    assert service.verify(token) is None
