"""GitHub token persistence in the OS keychain."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_SERVICE_NAME = "RepoTree"
_TOKEN_KEY = "github_token"
_AVAILABLE = False

try:
    import keyring

    _AVAILABLE = True
except Exception:
    logger.warning("keyring not available; token persistence disabled")


def is_available() -> bool:
    """Return True if the OS keychain is usable."""
    return _AVAILABLE


def load_token() -> str | None:
    """Return the saved GitHub token, or None."""
    if not _AVAILABLE:
        return None
    try:
        return keyring.get_password(_SERVICE_NAME, _TOKEN_KEY)
    except Exception as exc:
        logger.warning("Failed to read token from keyring: %s", exc)
        return None


def save_token(value: str) -> bool:
    """Save the GitHub token. Returns True on success."""
    value = value.strip()
    if not _AVAILABLE or not value:
        return False
    try:
        keyring.set_password(_SERVICE_NAME, _TOKEN_KEY, value)
        return True
    except Exception as exc:
        logger.warning("Failed to save token to keyring: %s", exc)
        return False


def delete_token() -> bool:
    """Remove the saved GitHub token. Returns True if one was removed."""
    if not _AVAILABLE:
        return False
    try:
        keyring.delete_password(_SERVICE_NAME, _TOKEN_KEY)
        return True
    except Exception:
        return False
