"""Operator commands registered on the ``flask`` CLI.

Usage:
    flask create-user --email me@example.com --password secret123
    flask weekly-score me@example.com --as-of 2026-10-14
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext
from pydantic import ValidationError
from sqlalchemy import func

from rhythm.core.auth.auth_service import register_user
from rhythm.core.auth.schemas import RegisterRequest
from rhythm.core.users.models import User
from rhythm.core.utils.clock import parse_day, today
from rhythm.domains.habits.services import weekly_score


def _find_user(email: str) -> User:
    user = User.query.filter(func.lower(User.email) == email.strip().lower()).first()
    if not user:
        raise click.ClickException(f"No user with email {email}")
    return user


@click.command("create-user")
@click.option("--email", required=True)
@click.option("--password", required=True, prompt=True, hide_input=True)
@click.option("--full-name", default=None)
@with_appcontext
def create_user_command(email: str, password: str, full_name: str | None):
    """Create an account without going through the HTTP API."""
    try:
        user = register_user(RegisterRequest(email=email, password=password, full_name=full_name))
    except ValidationError as exc:
        raise click.ClickException(f"Invalid input: {exc.error_count()} error(s)") from exc
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Created user {user.id} <{user.email}>")


@click.command("weekly-score")
@click.argument("email")
@click.option("--as-of", "as_of", default=None, help="ISO date; defaults to today")
@with_appcontext
def weekly_score_command(email: str, as_of: str | None):
    """Print a user's weekly execution score."""
    user = _find_user(email)
    day = parse_day(as_of) if as_of else today()
    score = weekly_score(user.id, day)
    click.echo(
        f"{day.isoformat()}: {score['weekly_score']}% "
        f"({score['total_completed']}/{score['total_possible']} over {score['days_elapsed']} days, "
        f"{score['habit_count']} habits)"
    )


def register_commands(app):
    """Register CLI commands with the app."""
    app.cli.add_command(create_user_command)
    app.cli.add_command(weekly_score_command)
