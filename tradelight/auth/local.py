"""Local identity provider storing accounts in SQLite."""

import hashlib
import hmac
import logging
import secrets
import sqlite3
import uuid
from typing import Optional

from tradelight.auth.base import AuthError, BaseIdentityProvider
from tradelight.db.store import DataStore
from tradelight.models import User

logger = logging.getLogger(__name__)

SESSION_KEY = "auth-session"
MIN_PASSWORD_LENGTH = 6
PBKDF2_ITERATIONS = 200_000


def _hash_password(password: str, salt: str) -> str:
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), PBKDF2_ITERATIONS
    )
    return digest.hex()


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class LocalIdentityProvider(BaseIdentityProvider):
    """Identity provider for single-machine use.

    Accounts live in the ``users`` table; the signed-in uid is kept in the
    local cache so it survives between CLI invocations.
    """

    def __init__(self, data_store: DataStore):
        """Initialize the provider.

        Args:
            data_store: DataStore instance for persistence.
        """
        self._data_store = data_store

    @staticmethod
    def _to_user(row: dict) -> User:
        return User(uid=row["uid"], email=row["email"], display_name=row["display_name"] or "")

    @property
    def current_user(self) -> Optional[User]:
        uid = self._data_store.get_item(SESSION_KEY)
        if not uid:
            return None
        row = self._data_store.get_user(uid)
        if row is None:
            logger.warning("Session refers to unknown user %s; signing out", uid)
            self._data_store.remove_item(SESSION_KEY)
            return None
        return self._to_user(row)

    def sign_in(self, email: str, password: str) -> User:
        row = self._data_store.get_user_by_email(_normalize_email(email))
        if row is None or not hmac.compare_digest(
            row["password_hash"], _hash_password(password or "", row["salt"])
        ):
            raise AuthError("Invalid email or password")
        self._data_store.set_item(SESSION_KEY, row["uid"])
        return self._to_user(row)

    def sign_up(self, email: str, password: str, display_name: str) -> User:
        email = _normalize_email(email)
        if "@" not in email or email.startswith("@") or email.endswith("@"):
            raise AuthError(f"Invalid email address: {email!r}")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        uid = uuid.uuid4().hex
        salt = secrets.token_hex(16)
        try:
            self._data_store.create_user(
                uid=uid,
                email=email,
                display_name=(display_name or "").strip(),
                password_hash=_hash_password(password, salt),
                salt=salt,
            )
        except sqlite3.IntegrityError as e:
            raise AuthError(f"An account already exists for {email}") from e

        self._data_store.set_item(SESSION_KEY, uid)
        return User(uid=uid, email=email, display_name=(display_name or "").strip())

    def sign_out(self) -> None:
        self._data_store.remove_item(SESSION_KEY)

    def update_display_name(self, display_name: str) -> User:
        user = self.current_user
        if user is None:
            raise AuthError("Not signed in")
        self._data_store.update_display_name(user.uid, display_name.strip())
        return user.model_copy(update={"display_name": display_name.strip()})
