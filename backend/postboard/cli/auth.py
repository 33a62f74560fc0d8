"""Flask CLI commands for session administration."""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from postboard.api.deps import get_auth_service
from postboard.services._shared.errors import NotFoundError


@click.group("auth")
def auth_cli() -> None:
    """Session administration commands."""


@auth_cli.command("revoke-sessions")
@click.argument("email")
@with_appcontext
def revoke_sessions_command(email: str) -> None:
    """Empty the refresh-token ledger of the account owning EMAIL."""
    try:
        revoked = get_auth_service().revoke_all_sessions(email)
    except NotFoundError as exc:
        raise click.ClickException(f"No user with email {email}") from exc
    click.echo(f"Revoked {revoked} session(s) for {email}")
