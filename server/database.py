import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path

from errors import StorageUnavailable

logger = logging.getLogger(__name__)

DB_PATH = Path(os.getenv("DATABASE_PATH", Path(__file__).parent / "notes.db"))


def get_connection(path=None):
    try:
        conn = sqlite3.connect(str(path or DB_PATH))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
    except sqlite3.Error as exc:
        logger.error("Could not open database %s: %s", path or DB_PATH, exc)
        raise StorageUnavailable() from exc
    return conn


@contextmanager
def storage_errors():
    """Surface any sqlite failure inside the block as StorageUnavailable."""
    try:
        yield
    except sqlite3.Error as exc:
        logger.error("Storage operation failed: %s", exc)
        raise StorageUnavailable() from exc
