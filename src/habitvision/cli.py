"""Flask CLI commands for HabitVision."""

from __future__ import annotations

import json

import click


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("habitvision-seed")
    @click.option("--username", required=True, help="Account to seed (created if missing)")
    @click.option("--password", default=None, help="Password used when creating the account")
    @click.option("--seed", "rng_seed", type=int, default=None, help="Random seed for demo history")
    def habitvision_seed(username: str, password: str | None, rng_seed: int | None) -> None:
        """Seed demo habits and a week of completion history."""

        import random

        from .extensions import get_session_factory, get_tracker
        from .services import auth
        from .services.seed import seed_demo_habits

        session_factory = get_session_factory()
        user = auth.get_user_by_username(username, session_factory)
        if user is None:
            if not password:
                raise click.UsageError("--password is required to create a new account")
            user = auth.create_user(
                username=username, password=password, session_factory=session_factory
            )
            click.echo(f"Created user {user.username} (#{user.id})")

        created = seed_demo_habits(get_tracker(), user_id=user.id, rng=random.Random(rng_seed))
        if created:
            click.echo(f"Seeded {len(created)} habits for {user.username}.")
        else:
            click.echo(f"{user.username} already has habits; nothing seeded.")

    @app.cli.command("habitvision-stats")
    @click.option("--username", required=True)
    def habitvision_stats(username: str) -> None:
        """Print dashboard stats for a user as JSON."""

        from .extensions import get_session_factory, get_tracker
        from .services import auth

        user = auth.get_user_by_username(username, get_session_factory())
        if user is None:
            raise click.ClickException(f"Unknown user: {username}")
        stats = get_tracker().stats(user_id=user.id)
        click.echo(json.dumps(stats.to_dict(), indent=2))
