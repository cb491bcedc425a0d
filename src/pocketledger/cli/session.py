"""CLI helpers for the stored session token."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import click

from pocketledger.cli.error_handling import handle_domain_error
from pocketledger.domain.errors import AuthenticationError
from pocketledger.domain.user import UserService
from pocketledger.storage.factories import default_data_dir


def resolve_session_file(session_file: Optional[str] = None) -> Path:
    """Return the session file path.

    Checks the explicit argument, then POCKETLEDGER_SESSION_FILE, then
    defaults to ~/.pocketledger/session.
    """
    if session_file is None:
        session_file = os.environ.get("POCKETLEDGER_SESSION_FILE")
    if session_file is None:
        return default_data_dir() / "session"
    return Path(session_file)


def read_token(path: Path) -> Optional[str]:
    """Read the stored token, or None if there is none."""
    if not path.exists():
        return None
    token = path.read_text().strip()
    return token or None


def write_token(path: Path, token: str) -> None:
    """Store a session token readable only by the current user."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(token)
    path.chmod(0o600)


def clear_token(path: Path) -> None:
    """Remove the stored session token."""
    path.unlink(missing_ok=True)


def require_owner(ctx: click.Context) -> str:
    """Resolve the logged-in owner, or exit with a CLI error."""
    token = read_token(ctx.obj["session_file"])
    try:
        return UserService(ctx.obj["storage"]).resolve_session(token)
    except AuthenticationError as exc:
        handle_domain_error(ctx, exc)
