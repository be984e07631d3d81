"""Session manager.

A session binds one opaque cookie token to one user for its whole lifetime.
The raw token only ever lives in the browser cookie; the table keeps its hash
plus the encrypted forgery token minted alongside it.
"""
import logging
import re

from database import storage_errors
from token_cipher import decrypt_token, encrypt_token, hash_token, new_token, tokens_match

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r"[A-Za-z0-9_-]{32,128}")


def _well_formed(token):
    return isinstance(token, str) and _TOKEN_PATTERN.fullmatch(token) is not None


def create(conn, user_id):
    """Mint a session for ``user_id`` and return the raw token for the cookie."""
    token = new_token()
    with storage_errors(), conn:
        conn.execute(
            "INSERT INTO sessions (token_hash, user_id, forgery_token) VALUES (?, ?, ?)",
            (hash_token(token), user_id, encrypt_token(new_token())),
        )
    logger.info("Opened session for user %s", user_id)
    return token


def _lookup(conn, token):
    if not _well_formed(token):
        return None
    with storage_errors():
        return conn.execute(
            """
            SELECT sessions.forgery_token,
                   users.id,
                   users.username
            FROM sessions
            JOIN users ON users.id = sessions.user_id
            WHERE sessions.token_hash = ?
            """,
            (hash_token(token),),
        ).fetchone()


def resolve(conn, token):
    """Return the user bound to ``token``, or None for missing, malformed or unknown tokens."""
    row = _lookup(conn, token)
    if row is None:
        return None
    return {"id": row["id"], "username": row["username"]}


def forgery_token(conn, token):
    row = _lookup(conn, token)
    if row is None:
        return None
    return decrypt_token(row["forgery_token"])


def verify_forgery_token(conn, token, candidate):
    expected = forgery_token(conn, token)
    if expected is None:
        logger.warning("Session has no readable forgery token")
        return False
    return tokens_match(expected, candidate)
