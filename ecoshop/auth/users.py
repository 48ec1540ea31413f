from __future__ import annotations

import logging
import threading
import uuid
from typing import Any

import bcrypt
import pyotp

from ..config import DEFAULT_APP_CONFIG
from ..errors import ConflictError, NotFoundError
from .models import MAX_PASSWORD_BYTES

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_users: dict[str, dict[str, Any]] = {}


def _hash_password(plain: str) -> str:
    salt = bcrypt.gensalt(rounds=DEFAULT_APP_CONFIG.bcrypt_rounds)
    return bcrypt.hashpw(plain.encode(), salt).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _public(record: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": record["id"],
        "username": record["username"],
        "email": record["email"],
        "role": record["role"],
        "is_2fa_enabled": record["is_2fa_enabled"],
    }


def _find_by_email(email: str) -> dict[str, Any] | None:
    wanted = email.strip().lower()
    for record in _users.values():
        if record["email"] == wanted:
            return record
    return None


def register(username: str, email: str, password: str, role: str = "user") -> dict[str, Any]:
    """Create a user. Raises ``ConflictError`` when the email is taken."""
    password_hash = _hash_password(password)
    with _lock:
        if _find_by_email(email) is not None:
            raise ConflictError(
                f"Email '{email}' is already registered", details={"email": email}
            )
        record = {
            "id": uuid.uuid4().hex,
            "username": username.strip(),
            "email": email.strip().lower(),
            "password_hash": password_hash,
            "role": role,
            "two_factor_secret": None,
            "is_2fa_enabled": False,
        }
        _users[record["id"]] = record
    logger.info("User registered", extra={"user_id": record["id"]})
    return _public(record)


def authenticate(email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns the public user dict or ``None``."""
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        return None
    record = _find_by_email(email)
    if record and _verify_password(password, record["password_hash"]):
        return _public(record)
    return None


def enable_two_factor(user_id: str) -> str:
    """Generate a fresh TOTP secret for the user and return its provisioning URI."""
    secret = pyotp.random_base32()
    with _lock:
        record = _users.get(user_id)
        if record is None:
            raise NotFoundError("user", user_id)
        record["two_factor_secret"] = secret
        record["is_2fa_enabled"] = True
    logger.info("Two-factor enabled", extra={"user_id": user_id})
    return pyotp.TOTP(secret).provisioning_uri(name=record["email"], issuer_name="EcoShop")


def verify_two_factor(user_id: str, token: str | None) -> bool:
    """Check a TOTP code. Users without 2FA always pass."""
    record = _users.get(user_id)
    if record is None or not record["is_2fa_enabled"]:
        return True
    if not token:
        return False
    return pyotp.TOTP(record["two_factor_secret"]).verify(token.strip(), valid_window=1)


def find_user(user_id: str) -> dict[str, Any] | None:
    record = _users.get(user_id)
    return _public(record) if record else None


def get_user(user_id: str) -> dict[str, Any]:
    user = find_user(user_id)
    if user is None:
        raise NotFoundError("user", user_id)
    return user


def update_profile(
    user_id: str,
    username: str | None = None,
    password: str | None = None,
) -> dict[str, Any]:
    password_hash = _hash_password(password) if password else None
    with _lock:
        record = _users.get(user_id)
        if record is None:
            raise NotFoundError("user", user_id)
        if username:
            record["username"] = username.strip()
        if password_hash:
            record["password_hash"] = password_hash
    return _public(record)


def clear_users() -> None:
    """Drop every account and re-create the demo ones."""
    with _lock:
        _users.clear()
    _seed_users()


def _seed_users() -> None:
    """Pre-seed demo users on import."""
    register("admin", "admin@ecoshop.local", "admin123", role="admin")
    register("user", "user@ecoshop.local", "user123")


_seed_users()
