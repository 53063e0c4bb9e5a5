"""
Credential Entity

Password credential held by the auth provider.
"""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, SQLModel

from src.domain.base import utcnow


class Credential(SQLModel, table=True):
    """
    Credential entity - one password credential per user.

    Business Rules:
    - Password stored as bcrypt hash (cost factor 12)
    - Removed together with the user on compensating cleanup
    """

    __tablename__ = "credentials"

    user_id: str = Field(
        foreign_key="users.id", primary_key=True, max_length=64, ondelete="CASCADE"
    )
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
