"""
Password auth provider.

Stores bcrypt credentials next to the users table and issues HS256 session
tokens. Every call runs in its own session: nothing here joins the caller's
unit of work.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Optional

import bcrypt
from jose import JWTError, jwt
from sqlalchemy import delete
from sqlmodel import select

from src.adapter.repositories.store_errors import translate_store_errors
from src.app.errors import ConflictError, OperationError, ValidationError
from src.app.services.auth_provider import AuthIdentity, IAuthProvider
from src.domain.base import normalize_email
from src.domain.entities import Credential, User

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
BCRYPT_ROUNDS = 12
JWT_ALGORITHM = "HS256"


class JwtAuthProvider(IAuthProvider):
    def __init__(self, session_factory, jwt_secret: str, session_ttl: timedelta):
        self.session_factory = session_factory
        self.jwt_secret = jwt_secret
        self.session_ttl = session_ttl

    async def sign_up_with_password(
        self, email: str, password: str, name: Optional[str] = None
    ) -> AuthIdentity:
        email = normalize_email(email)
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise OperationError(
                ValidationError(
                    "INVALID_PASSWORD",
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
                )
            )

        password_hash = bcrypt.hashpw(
            password.encode("utf-8"), bcrypt.gensalt(BCRYPT_ROUNDS)
        ).decode("utf-8")

        async with self.session_factory() as session:
            result = await session.exec(select(User).where(User.email == email))
            if result.first() is not None:
                raise OperationError(
                    ConflictError("EMAIL_ALREADY_REGISTERED", "Email already registered")
                )

            user = User(email=email, name=name)
            with translate_store_errors("Email already registered"):
                session.add(user)
                await session.flush()
                session.add(Credential(user_id=user.id, password_hash=password_hash))
                await session.commit()

        logger.info(f"Created auth identity {user.id}")
        return AuthIdentity(user_id=user.id, email=email, name=name)

    async def sign_in_with_password(self, email: str, password: str) -> Optional[str]:
        email = normalize_email(email)
        async with self.session_factory() as session:
            user = (await session.exec(select(User).where(User.email == email))).first()
            credential = None
            if user is not None:
                credential = await session.get(Credential, user.id)

        if credential is None:
            # Burn comparable time so unknown emails are not distinguishable
            bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(BCRYPT_ROUNDS))
            return None

        if not bcrypt.checkpw(password.encode("utf-8"), credential.password_hash.encode("utf-8")):
            return None

        now = datetime.now(UTC)
        payload = {
            "sub": user.id,
            "email": user.email,
            "iat": now,
            "exp": now + self.session_ttl,
        }
        return jwt.encode(payload, self.jwt_secret, algorithm=JWT_ALGORITHM)

    async def verify_session(self, token: str) -> Optional[AuthIdentity]:
        try:
            payload = jwt.decode(token, self.jwt_secret, algorithms=[JWT_ALGORITHM])
        except JWTError:
            return None

        user_id = payload.get("sub")
        if not user_id:
            return None

        async with self.session_factory() as session:
            user = await session.get(User, user_id)
        if user is None:
            return None
        return AuthIdentity(user_id=user.id, email=user.email, name=user.name)

    async def delete_user(self, user_id: str) -> None:
        async with self.session_factory() as session:
            with translate_store_errors():
                await session.execute(delete(Credential).where(Credential.user_id == user_id))
                await session.execute(delete(User).where(User.id == user_id))
                await session.commit()
        logger.info(f"Deleted auth identity {user_id}")
