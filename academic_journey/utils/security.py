import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from jose.utils import base64url_decode, base64url_encode
from passlib.context import CryptContext
from pydantic import ValidationError as ClaimsValidationError

from academic_journey import schemas
from academic_journey.config import settings

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


# ==========================
# PASSWORD HASHER
# ==========================

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def _bcrypt_safe(password: str) -> str:
    """
    Bcrypt max input length = 72 bytes
    Truncate safely to avoid crash
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        password = password_bytes[:BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore")
    return password


def hash_password(password: str) -> str:
    # Fresh salt on every call; errors here are fatal for the caller.
    return pwd_context.hash(_bcrypt_safe(password))


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(_bcrypt_safe(plain_password), hashed_password)
    except (ValueError, TypeError):
        # Unrecognised or corrupted hash string.
        logger.warning("Stored password hash could not be parsed")
        return False


# ==========================
# TOKEN SERVICE
# ==========================

class TokenService:
    """Stateless HS256 identity tokens carrying {id, email, role}."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", ttl: Optional[timedelta] = None):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl = ttl if ttl is not None else timedelta(days=1)

    def issue(self, claims: Dict[str, Any], now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(tz=timezone.utc)
        payload = {
            "sub": str(claims["id"]),
            "id": str(claims["id"]),
            "email": claims["email"],
            "role": getattr(claims["role"], "value", claims["role"]),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> Optional[schemas.TokenClaims]:
        """Return the claims of a valid, unexpired token; None for anything else."""
        if not token:
            return None
        try:
            if not _canonical_signature(token):
                return None
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
            return schemas.TokenClaims(**payload)
        except (JWTError, ClaimsValidationError, TypeError, ValueError):
            return None


def _canonical_signature(token: str) -> bool:
    # jose ignores the unused low bits of the last base64 character, so a
    # signature segment that does not re-encode to itself is a tampered token.
    segment = token.rsplit(".", 1)[-1].encode("ascii")
    return base64url_encode(base64url_decode(segment)) == segment


token_service = TokenService(
    secret_key=settings.SECRET_KEY,
    algorithm=settings.ALGORITHM,
    ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
)


def create_access_token(profile) -> str:
    return token_service.issue({"id": profile.id, "email": profile.email, "role": profile.role})


def decode_access_token(token: Optional[str]) -> Optional[schemas.TokenClaims]:
    return token_service.verify(token)
