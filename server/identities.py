"""Identity store: usernames mapped to durable user rows.

Lookup and creation are separate operations; ``find`` never writes and
the login handler composes the two.
"""
import logging

from database import storage_errors

logger = logging.getLogger(__name__)


def find(conn, username):
    with storage_errors():
        return conn.execute(
            "SELECT id, username FROM users WHERE username = ? ORDER BY id LIMIT 1",
            (username,),
        ).fetchone()


def get(conn, user_id):
    with storage_errors():
        return conn.execute(
            "SELECT id, username FROM users WHERE id = ?", (user_id,)
        ).fetchone()


def create(conn, username):
    with storage_errors(), conn:
        cursor = conn.execute("INSERT INTO users (username) VALUES (?)", (username,))
    logger.info("Created user %s", cursor.lastrowid)
    return get(conn, cursor.lastrowid)
