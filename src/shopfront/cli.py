"""Command-line interface for Shopfront.

This module provides the CLI commands for running and managing
the Shopfront application.
"""

import asyncio
from typing import NoReturn

import click

from shopfront.core.config import get_settings
from shopfront.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version="0.1.0", prog_name="Shopfront")
def cli() -> None:
    """Shopfront - storefront API with bearer-token authentication.

    Configuration is read from SHOPFRONT_* environment variables and .env.
    """


@cli.command()
@click.option("--host", type=str, default=None, help="Host to bind to (overrides config)")
@click.option("--port", type=int, default=None, help="Port to bind to (overrides config)")
@click.option(
    "--workers",
    type=int,
    default=None,
    help="Number of worker processes (overrides config)",
)
@click.option(
    "--reload/--no-reload",
    default=None,
    help="Enable auto-reload (defaults to on in development)",
)
def serve(host: str | None, port: int | None, workers: int | None, reload: bool | None) -> None:
    """Start the Shopfront server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port
    bind_workers = workers or settings.workers

    if bind_workers > 1 and settings.database_url.startswith("sqlite"):
        click.echo(
            "Error: SQLite does not support multiple worker processes. "
            "Use --workers 1 or switch to PostgreSQL.",
            err=True,
        )
        raise SystemExit(1)

    if reload is None:
        reload = settings.is_development

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting Shopfront server",
        host=bind_host,
        port=bind_port,
        workers=bind_workers,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "shopfront.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        workers=1 if reload else bind_workers,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("init-db")
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
def init_db(force: bool) -> None:
    """Create the database tables."""
    from shopfront.infrastructure.persistence.database import get_db_manager, init_database

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Pass --force to create tables anyway.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command("hash-password")
@click.option(
    "--password",
    type=str,
    default=None,
    help="Password to hash (prompts if not provided)",
)
def hash_password_command(password: str | None) -> None:
    """Print the Argon2id hash of a password."""
    from shopfront.infrastructure.auth import CredentialHasher, PasswordHashingError

    if password is None:
        password = click.prompt("Password", hide_input=True, confirmation_prompt=True)

    hasher = CredentialHasher.from_settings(get_settings())
    try:
        click.echo(hasher.hash(password))
    except PasswordHashingError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@cli.command("issue-token")
@click.argument("subject")
def issue_token(subject: str) -> None:
    """Issue a bearer token for SUBJECT using the configured secret."""
    from shopfront.infrastructure.auth import TokenEncodingError, TokenService

    settings = get_settings()
    if settings.uses_default_token_secret:
        click.echo("Warning: signing with the development token secret", err=True)

    service = TokenService.from_settings(settings)
    try:
        click.echo(service.issue(subject))
    except TokenEncodingError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@cli.command()
def info() -> None:
    """Display Shopfront configuration."""
    settings = get_settings()

    click.echo(f"""
Shopfront v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}
  Workers:      {settings.workers}

Database:
  URL:          {settings.database_url}
  Echo:         {settings.db_echo}

Security:
  Token TTL:    {settings.token_ttl_seconds} seconds
  Dev secret:   {settings.uses_default_token_secret}
  Argon2id:     m={settings.password_memory_cost} t={settings.password_time_cost} p={settings.password_parallelism}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called by the `shopfront` console script and `python -m shopfront`.
    """
    cli()


if __name__ == "__main__":
    main()
