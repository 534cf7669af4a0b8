import secrets
import string
import time

from plan2read.preferences import PreferenceStore

_ALPHABET = string.digits + string.ascii_lowercase


def _now_ms() -> int:
    return int(time.time() * 1000)


def _suffix(length: int) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def new_id(prefix: str = "") -> str:
    """Fresh entity ID: millisecond timestamp plus a short random base-36 suffix"""
    return f"{prefix}{_now_ms()}{_suffix(4)}"


def get_user_id(prefs: PreferenceStore) -> str:
    """Return this installation's user ID, creating and storing it on first use"""
    user_id = prefs.user_id
    if not user_id:
        user_id = f"user_{_now_ms()}_{_suffix(9)}"
        prefs.user_id = user_id
    return user_id
