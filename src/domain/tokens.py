"""
Invitation token codec.

Tokens are 256-bit random values handed to the invitee once. Only their
SHA-256 digest is stored and used for lookup.
"""

import hashlib
import secrets
from typing import Tuple

TOKEN_BYTES = 32


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def generate_token() -> Tuple[str, str]:
    """
    Generate a new bearer token.

    Returns:
        (plaintext, sha256 hex digest)
    """
    token = secrets.token_urlsafe(TOKEN_BYTES)
    return token, hash_token(token)
