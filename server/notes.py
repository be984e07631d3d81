import logging

from database import storage_errors
from errors import ValidationError

logger = logging.getLogger(__name__)


def _as_dict(row):
    return {key: row[key] for key in row.keys()}


def list_for(conn, user_id):
    """All notes owned by ``user_id``, oldest first."""
    with storage_errors():
        rows = conn.execute(
            "SELECT id, user_id, title, body FROM notes WHERE user_id = ? ORDER BY id",
            (user_id,),
        ).fetchall()
    return [_as_dict(row) for row in rows]


def create(conn, user_id, title, body):
    if not isinstance(title, str) or not isinstance(body, str):
        raise ValidationError()

    with storage_errors(), conn:
        cursor = conn.execute(
            "INSERT INTO notes (user_id, title, body) VALUES (?, ?, ?)",
            (user_id, title, body),
        )
    logger.info("User %s created note %s", user_id, cursor.lastrowid)
    return {"id": cursor.lastrowid, "user_id": user_id, "title": title, "body": body}
