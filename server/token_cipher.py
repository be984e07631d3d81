"""
Session and forgery token utilities.

Session tokens are random URL-safe strings handed to the browser as a cookie;
only their SHA-256 hash is stored. Forgery tokens are stored Fernet-encrypted
(AES-128) with a key derived from TOKEN_MASTER_KEY and decrypted when the
session is asked for them.
"""
import base64
import hashlib
import os
import secrets

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import constant_time

TOKEN_BYTES = 32

_SEED = os.getenv("TOKEN_MASTER_KEY", "notes-demo-master-key")
_KEY = base64.urlsafe_b64encode(hashlib.sha256(_SEED.encode()).digest())
_CIPHER = Fernet(_KEY)


def new_token() -> str:
    """Mint a fresh opaque token."""
    return secrets.token_urlsafe(TOKEN_BYTES)


def hash_token(value: str) -> str:
    """SHA-256 of a token, used as the storage lookup key."""
    return hashlib.sha256(value.encode()).hexdigest()


def encrypt_token(value: str) -> str:
    if not value:
        return ""
    return _CIPHER.encrypt(value.encode()).decode()


def decrypt_token(token: str):
    """Decrypt a stored token; returns None if it was tampered with or the key changed."""
    if not token:
        return None
    try:
        return _CIPHER.decrypt(token.encode()).decode()
    except InvalidToken:
        return None


def tokens_match(expected: str, candidate) -> bool:
    if not expected or not isinstance(candidate, str) or not candidate:
        return False
    return constant_time.bytes_eq(expected.encode(), candidate.encode())
