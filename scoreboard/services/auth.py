# scoreboard/services/auth.py
import hashlib
import hmac
import secrets
import uuid
from datetime import datetime, timedelta
from typing import Optional, Tuple

import jwt
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from scoreboard.logging_config import app_logger
from scoreboard.models.account import Admin, UserAccount
from scoreboard.schema.account import Credentials, Role, SignupRequest, Token
from scoreboard.settings import settings

PBKDF2_ITERATIONS = 260_000
TOKEN_ALGORITHM = "HS256"


def hash_password(password: str, salt: Optional[str] = None) -> str:
    """Return `salt$digest` for a password using PBKDF2-SHA256."""
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256",
        password.encode("utf-8"),
        salt.encode("utf-8"),
        PBKDF2_ITERATIONS,
    ).hex()
    return f"{salt}${digest}"


def verify_password(password: str, password_hash: str) -> bool:
    salt, _, expected = password_hash.partition("$")
    _, _, actual = hash_password(password, salt).partition("$")
    return hmac.compare_digest(actual, expected)


def create_access_token(user_id: uuid.UUID) -> Token:
    expires_at = datetime.utcnow() + timedelta(hours=settings.TOKEN_EXPIRE_HOURS)
    access_token = jwt.encode(
        {"sub": str(user_id), "exp": expires_at},
        settings.SECRET_KEY,
        algorithm=TOKEN_ALGORITHM,
    )
    return Token(access_token=access_token, expires_at=expires_at)


def decode_access_token(token: str) -> uuid.UUID:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[TOKEN_ALGORITHM])
        return uuid.UUID(payload["sub"])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired")
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise HTTPException(status_code=401, detail="Token is invalid")


def create_identity(email: str, password: str, db: Session) -> UserAccount:
    """
    First half of sign-up: store the credentials.
    """
    account = UserAccount(email=email, password_hash=hash_password(password))
    db.add(account)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="User already registered")
    db.refresh(account)
    return account


def create_profile(
    account: UserAccount,
    name: str,
    role: Role,
    db: Session,
) -> Admin:
    """
    Second half of sign-up: store the admin profile for an identity.
    """
    profile = Admin(id=account.id, email=account.email, name=name, role=role.value)
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def sign_up(
    request: SignupRequest,
    db: Session,
    role: Role = Role.VIEWER,
) -> Tuple[UserAccount, Admin]:
    account = create_identity(request.email, request.password, db)
    profile = create_profile(account, request.name, role, db)
    app_logger.info(f"Registered {account.email} as {role.value}")
    return account, profile


def sign_in(credentials: Credentials, db: Session) -> Token:
    account = (
        db.query(UserAccount)
        .filter(UserAccount.email == credentials.email)
        .first()
    )
    if not account or not verify_password(credentials.password, account.password_hash):
        raise HTTPException(status_code=401, detail="Invalid login credentials")

    app_logger.info(f"Signed in {account.email}")
    return create_access_token(account.id)
