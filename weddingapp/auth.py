import time
from dataclasses import dataclass
from typing import Optional, Union

import jwt
from passlib.context import CryptContext

from .errors import AuthError

# Use pbkdf2_sha256 as default to avoid bcrypt 72-byte limitation in some envs
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")

ALGORITHM = "HS256"
EXP_SECONDS = 60 * 60 * 24  # 1 day


@dataclass(frozen=True)
class UserPrincipal:
    user_id: int
    email: str


@dataclass(frozen=True)
class AdminPrincipal:
    admin_id: int
    email: str
    role: str


Principal = Union[UserPrincipal, AdminPrincipal]


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def dummy_verify() -> None:
    """Spend the same time as a real verification when the account is unknown."""
    pwd_context.dummy_verify()


def create_access_token(claims: dict, secret: str, expires_delta: Optional[int] = None) -> str:
    now = int(time.time())
    ttl = EXP_SECONDS if expires_delta is None else expires_delta
    payload = {**claims, "iat": now, "exp": now + ttl}
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_access_token(token: str, secret: str) -> dict:
    return jwt.decode(token, secret, algorithms=[ALGORITHM])


def user_token(user_id: int, email: str, secret: str, expires_delta: Optional[int] = None) -> str:
    return create_access_token({"userId": user_id, "email": email}, secret, expires_delta)


def admin_token(admin_id: int, email: str, role: str, secret: str, expires_delta: Optional[int] = None) -> str:
    return create_access_token({"adminId": admin_id, "email": email, "role": role}, secret, expires_delta)


def principal_from_claims(claims: dict) -> Principal:
    """Map a decoded payload onto exactly one principal kind.

    Admin tokens carry ``adminId`` and ``role``; user tokens carry ``userId``
    and never a role. Anything else is not a token this service issued.
    """
    if "adminId" in claims:
        if "userId" in claims or "role" not in claims:
            raise AuthError("Invalid token", 403)
        return AdminPrincipal(admin_id=int(claims["adminId"]), email=claims.get("email", ""), role=claims["role"])
    if "userId" in claims and "role" not in claims:
        return UserPrincipal(user_id=int(claims["userId"]), email=claims.get("email", ""))
    raise AuthError("Invalid token", 403)


def principal_from_token(token: str, secret: str) -> Principal:
    try:
        claims = decode_access_token(token, secret)
    except jwt.PyJWTError:
        raise AuthError("Invalid token", 403)
    return principal_from_claims(claims)
