"""Guru CLI: prognosis commands, config and server."""

import asyncio
import dataclasses
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from typing import Annotated, Any

import typer

from guru.application.config import AppConfig, resolve_config
from guru.application.prognosis.service import PrognosisService
from guru.domain.prognosis.errors import GuruError

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="guru: approval prognosis for exam-preparation learners.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

config_app = typer.Typer(help="Manage guru configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)


def _setup_logging(verbose: int) -> None:
    level = logging.WARNING if verbose <= 0 else logging.INFO if verbose == 1 else logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(levelname)s:%(name)s:%(message)s",
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    database_url: Annotated[
        str | None, typer.Option(help="SQLAlchemy URL of the platform database.")
    ] = None,
):
    """Global settings for guru."""
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {"database_url": database_url, "verbose": verbose or None}


def _config(ctx: typer.Context) -> AppConfig:
    """Resolve config (-v beats GURU_VERBOSE and the TOML file) and set up logging."""
    config = resolve_config(ctx.obj.get("overrides") if ctx.obj else None)
    _setup_logging(config.verbose)
    return config


def _to_json(value: Any) -> str:
    if dataclasses.is_dataclass(value):
        value = dataclasses.asdict(value)
    return json.dumps(value, indent=2, default=str, ensure_ascii=False)


def _run(ctx: typer.Context, action: Callable[[PrognosisService], Awaitable[Any]]) -> Any:
    """Build the service, run one action against it and dispose the engine."""
    from guru.application.factory import build_prognosis_service, get_engine
    from guru.infrastructure.adapters.activity import SqlActivityDataSource

    config = _config(ctx)
    engine = get_engine(config)
    service = build_prognosis_service(config, source=SqlActivityDataSource(engine))
    try:
        return asyncio.run(action(service))
    except GuruError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(2) from e
    finally:
        engine.dispose()


# ---------------------------------------------------------------------------
# Prognosis commands
# ---------------------------------------------------------------------------

LearnerArg = Annotated[str, typer.Argument(help="Learner id.")]


@app.command()
def metrics(ctx: typer.Context, learner_id: LearnerArg):
    """Compute the learner's readiness metrics."""
    snapshot = _run(ctx, lambda s: s.compute_metrics(learner_id))
    typer.echo(_to_json(snapshot))


@app.command()
def prognosis(ctx: typer.Context, learner_id: LearnerArg):
    """Distance to goal, time estimate and recommendations."""
    result = _run(ctx, lambda s: s.compute_prognosis(learner_id))
    typer.echo(_to_json(result))


@app.command()
def analysis(ctx: typer.Context, learner_id: LearnerArg):
    """Detailed analysis: strengths, weaknesses, disciplines and score timeline."""
    result = _run(ctx, lambda s: s.detailed_analysis(learner_id))
    typer.echo(_to_json(result))


@app.command()
def refresh(ctx: typer.Context, learner_id: LearnerArg):
    """Recompute the learner's metrics, ignoring any cached snapshot."""
    _run(ctx, lambda s: s.refresh(learner_id))
    typer.secho(f"Metrics refreshed for {learner_id}", fg=typer.colors.GREEN)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display the resolved configuration as JSON."""
    config = _config(ctx)
    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


@app.command()
def server(
    ctx: typer.Context,
    host: Annotated[str | None, typer.Option(help="Interface to bind.")] = None,
    port: Annotated[int | None, typer.Option(help="Port to listen on.")] = None,
    reload: Annotated[bool, typer.Option("--reload", help="Auto-reload on code changes.")] = False,
):
    """Run the HTTP server."""
    import uvicorn

    config = _config(ctx)
    uvicorn.run(
        "guru.server:app",
        host=host or config.host,
        port=port or config.port,
        reload=reload,
    )
