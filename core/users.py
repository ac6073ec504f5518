"""
SQLite-backed identity store for the dashboard's signup and login.

Schema
──────
table: users
  id            INTEGER PRIMARY KEY AUTOINCREMENT
  username      TEXT NOT NULL UNIQUE
  password_hash TEXT NOT NULL  (werkzeug.security hash)
  created_at    TEXT NOT NULL  (ISO-8601 UTC)
"""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path

from werkzeug.security import check_password_hash, generate_password_hash

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(__file__).parent.parent / "data" / "users.db"


class DuplicateUsernameError(Exception):
    """Raised when registering a username that is already taken."""


class InvalidCredentialsError(Exception):
    """Raised when a username/password pair does not match a stored user."""


def _db_path() -> Path:
    """Return the database file path, honouring a DB_PATH env var if set."""
    env = os.getenv("DB_PATH")
    return Path(env) if env else DEFAULT_DB_PATH


@contextmanager
def _connect():
    """Yield a connected sqlite3.Connection, creating the file/dir if needed."""
    path = _db_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db() -> None:
    """Create the users table if it doesn't exist yet."""
    with _connect() as conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS users (
                id            INTEGER PRIMARY KEY AUTOINCREMENT,
                username      TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                created_at    TEXT NOT NULL
            )
            """
        )
    logger.info("Users DB initialised at %s", _db_path())


def _require(username: str, password: str) -> str:
    """Validate signup input and return the username with whitespace stripped."""
    if not isinstance(username, str) or not username.strip():
        raise ValueError("Username must be a non-empty string.")
    if not isinstance(password, str) or not password:
        raise ValueError("Password must be a non-empty string.")
    return username.strip()


def register_user(username: str, password: str) -> int:
    """Create a user and return their new ID.

    Args:
        username: Unique login name. Surrounding whitespace is stripped.
        password: Plain-text password; only its hash is stored.

    Returns:
        The integer primary key of the inserted row.

    Raises:
        ValueError: If username or password is blank or not a string.
        DuplicateUsernameError: If the username is already registered.
    """
    username = _require(username, password)
    now = datetime.now(timezone.utc).isoformat()
    password_hash = generate_password_hash(password)

    try:
        with _connect() as conn:
            cursor = conn.execute(
                "INSERT INTO users (username, password_hash, created_at) VALUES (?, ?, ?)",
                (username, password_hash, now),
            )
            user_id = cursor.lastrowid
    except sqlite3.IntegrityError:
        raise DuplicateUsernameError(f"Username {username!r} already taken") from None

    logger.info("Registered user id=%d username=%r", user_id, username)
    return user_id


def verify_credentials(username: str, password: str) -> int:
    """Return the user ID if *password* matches the stored hash.

    Unknown usernames and wrong passwords raise the same error so callers
    cannot tell which one failed. The username is stripped the same way as
    on registration.

    Raises:
        InvalidCredentialsError: On any mismatch.
    """
    if not isinstance(username, str) or not isinstance(password, str):
        raise InvalidCredentialsError("Invalid username or password")

    with _connect() as conn:
        row = conn.execute(
            "SELECT id, password_hash FROM users WHERE username = ?",
            (username.strip(),),
        ).fetchone()

    if row is None or not check_password_hash(row["password_hash"], password):
        logger.info("Failed login for username=%r", username)
        raise InvalidCredentialsError("Invalid username or password")

    return row["id"]
