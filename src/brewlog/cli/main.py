"""Brewlog CLI — set up the database, create users, run the server.

Usage:
    brewlog init-db                              # Create tables
    brewlog create-user cupajoe@aol.com          # Prompts for a password
    brewlog claim-username CupAJoe               # Username-only placeholder
    brewlog serve                                # Run the API with uvicorn
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import sys

import click

from brewlog import __version__
from brewlog.config import settings
from brewlog.errors import BrewlogError

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


async def _with_session(database_url: str, fn):
    """Open a one-off engine + session, run fn(session), dispose."""
    from brewlog.db.engine import build_engine, build_session_factory

    engine = build_engine(database_url)
    try:
        factory = build_session_factory(engine)
        async with factory() as session:
            return await fn(session)
    finally:
        await engine.dispose()


def _fail(exc: BrewlogError) -> None:
    click.secho(f"Error: {exc.message}", fg="red", err=True)
    sys.exit(1)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="brewlog")
@click.option(
    "--database-url",
    default=lambda: settings.database_url,
    show_default="BREWLOG_DATABASE_URL",
    help="SQLAlchemy async database URL.",
)
@click.pass_context
def main(ctx: click.Context, database_url: str):
    """Brewlog — coffee drink catalogue backend."""
    ctx.ensure_object(dict)
    ctx.obj["database_url"] = database_url


@main.command("init-db")
@click.pass_context
def init_db(ctx: click.Context):
    """Create all tables."""
    from brewlog.db.engine import build_engine, create_schema

    async def _go():
        engine = build_engine(ctx.obj["database_url"])
        try:
            await create_schema(engine)
        finally:
            await engine.dispose()

    _run(_go())
    click.secho("Database tables created.", fg="green")


@main.command("create-user")
@click.argument("email")
@click.password_option()
@click.pass_context
def create_user(ctx: click.Context, email: str, password: str):
    """Create an email/password account."""
    from brewlog.services.auth_service import AuthService

    async def _go(session):
        svc = AuthService(session, bcrypt_rounds=settings.bcrypt_rounds)
        return await svc.signup(email, password)

    try:
        identity = _run(_with_session(ctx.obj["database_url"], _go))
    except BrewlogError as e:
        _fail(e)
    click.echo(f"Created user {identity.id} <{identity.email}>")


@main.command("claim-username")
@click.argument("username")
@click.pass_context
def claim_username(ctx: click.Context, username: str):
    """Reserve a username without email or password.

    The resulting identity can't log in with a password.
    """
    from brewlog.services.user_store import UserStore

    async def _go(session):
        return await UserStore(session).insert_by_username(username)

    try:
        identity = _run(_with_session(ctx.obj["database_url"], _go))
    except BrewlogError as e:
        _fail(e)
    click.echo(f"Claimed username {identity.username} (user {identity.id})")


@main.command()
@click.option("--host", default=lambda: settings.host, help="Bind address.")
@click.option("--port", default=lambda: settings.port, type=int, help="Bind port.")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes.")
def serve(host: str, port: int, reload: bool):
    """Run the API server."""
    import uvicorn

    uvicorn.run("brewlog.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    main()
