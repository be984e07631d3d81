import argparse
from pathlib import Path

import identities
from database import DB_PATH, get_connection


def bootstrap_schema(conn):
    with conn:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                username TEXT NOT NULL,
                created_at TEXT DEFAULT CURRENT_TIMESTAMP
            );

            CREATE INDEX IF NOT EXISTS users_username ON users (username);

            CREATE TABLE IF NOT EXISTS sessions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                token_hash TEXT UNIQUE NOT NULL,
                user_id INTEGER NOT NULL,
                forgery_token TEXT NOT NULL,
                created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY(user_id) REFERENCES users(id)
            );

            CREATE TABLE IF NOT EXISTS notes (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                title TEXT,
                body TEXT,
                FOREIGN KEY(user_id) REFERENCES users(id)
            );

            CREATE INDEX IF NOT EXISTS notes_user_id ON notes (user_id);
            """
        )


def seed_users(conn, usernames):
    for username in usernames:
        if identities.find(conn, username) is None:
            identities.create(conn, username)
            print(f"Added user {username}")


def main():
    parser = argparse.ArgumentParser(description="Initialize the notes demo database.")
    parser.add_argument(
        "--database",
        type=Path,
        default=DB_PATH,
        help="SQLite file to create or update.",
    )
    parser.add_argument(
        "--user",
        action="append",
        default=[],
        help="Username to pre-create; may be repeated.",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop the existing SQLite file first (wipes users, sessions and notes).",
    )
    args = parser.parse_args()

    if args.reset:
        args.database.unlink(missing_ok=True)
        print("Existing database removed.")

    conn = get_connection(args.database)
    bootstrap_schema(conn)
    seed_users(conn, args.user)
    conn.close()
    print(f"Database initialized/updated at {args.database}")


if __name__ == "__main__":
    main()
