"""Command-line interface for TeamHub."""

from __future__ import annotations

import json
from typing import Optional

import typer

from teamhub.config import get_settings
from teamhub.db.features import create_feature, list_features, seed_features
from teamhub.db.repository import get_engine
from teamhub.errors import DuplicateError

app = typer.Typer(help="TeamHub collaboration backend commands.")


@app.command("init-db")
def init_db() -> None:
    """Create the database schema at the configured location."""

    settings = get_settings()
    get_engine()
    typer.echo(f"Database ready at {settings.database_path}")


@app.command("seed-features")
def seed_features_command() -> None:
    """Insert the default feature catalogue entries that are missing."""

    created = seed_features()
    if not created:
        typer.echo("Feature catalogue already up to date.")
        return
    for feature in created:
        typer.echo(f"Added feature {feature.name}")


@app.command("add-feature")
def add_feature(
    name: str = typer.Argument(..., help="Unique feature name."),
    description: Optional[str] = typer.Option(None, "--description", help="Human-readable summary."),
    free: bool = typer.Option(True, "--free/--no-free", help="Enable for free-tier users."),
    paid: bool = typer.Option(True, "--paid/--no-paid", help="Enable for paid-tier users."),
) -> None:
    """Add a feature flag to the catalogue."""

    try:
        feature = create_feature(
            name=name,
            description=description,
            is_enabled_free=free,
            is_enabled_paid=paid,
        )
    except DuplicateError:
        typer.secho(f"Feature {name} already exists", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    typer.echo(
        f"Added feature {feature.name} "
        f"(id={feature.id}, free={feature.is_enabled_free}, paid={feature.is_enabled_paid})"
    )


@app.command()
def features(
    pretty: bool = typer.Option(True, "--pretty/--no-pretty", help="Pretty-print output JSON."),
) -> None:
    """Print the feature flag table as JSON."""

    payload = [feature.model_dump(mode="json") for feature in list_features()]
    typer.echo(json.dumps(payload, indent=2 if pretty else None, sort_keys=pretty))


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address."),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port."),
    reload: bool = typer.Option(False, "--reload", help="Enable auto-reload."),
) -> None:
    """Run the HTTP API with uvicorn."""

    from teamhub.server.run import serve as run_server

    run_server(host=host, port=port, reload=reload)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the `teamhub` console script and `python -m teamhub`."""
    app(prog_name="teamhub", args=argv)


if __name__ == "__main__":
    main()
