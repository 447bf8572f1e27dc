"""CLI commands for voxroute."""

import asyncio
import json

import typer
from rich.console import Console
from rich.table import Table

from voxroute import __logo__, __version__

app = typer.Typer(
    name="voxroute",
    help=f"{__logo__} voxroute - intent resolution adapter for voice-driven terminals",
    no_args_is_help=True,
)

console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"{__logo__} voxroute v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    """voxroute - intent resolution adapter for voice-driven terminals."""
    pass


def _load_config_or_exit():
    from voxroute.config.loader import load_config
    from voxroute.errors import ConfigError

    try:
        return load_config()
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


# ============================================================================
# Tasks
# ============================================================================


@app.command()
def tasks():
    """Show configured task profiles."""
    from voxroute.config.loader import CONFIG_ENV_VAR, get_config_path
    from voxroute.providers.registry import find_provider

    config = _load_config_or_exit()

    console.print(f"{__logo__} voxroute tasks (language: {config.language})\n")
    console.print(f"Config: ${CONFIG_ENV_VAR} or {get_config_path()}\n")

    table = Table(title="Task profiles")
    table.add_column("Task", style="cyan")
    table.add_column("Provider")
    table.add_column("Dispatch", style="dim")
    table.add_column("Model")
    table.add_column("Max tokens", justify="right")
    table.add_column("Temperature", justify="right")
    table.add_column("Credentials")

    for name in config.task_names:
        task = config.tasks[name]
        spec = find_provider(task.provider)
        creds = "[green]✓[/green]" if task.api_key else "[dim]env[/dim]"
        if task.base_url:
            creds += f" {task.base_url}"
        table.add_row(name, task.provider, spec.label, task.model, str(task.max_tokens), str(task.temperature), creds)

    console.print(table)


# ============================================================================
# Resolve (one-shot)
# ============================================================================


@app.command()
def resolve(
    transcript: str = typer.Argument(..., help="Utterance to resolve"),
    event_type: str = typer.Option("EVENT_TYPE_USER_INTENT", "--event-type", "-e", help="Wire event type"),
    session_id: str = typer.Option("", "--session", "-s", help="Current session id"),
    language: str = typer.Option("", "--lang", help="English language name sent as client metadata"),
):
    """Resolve a single utterance and print the response as JSON."""
    from voxroute.intent.engine import Failed, FailureKind, IntentService, to_response
    from voxroute.intent.models import ResolveIntentRequest
    from voxroute.intent.language import METADATA_LANGUAGE_KEY
    from voxroute.routing import TaskRouter

    config = _load_config_or_exit()
    service = IntentService(TaskRouter(config))
    request = ResolveIntentRequest(
        prompt_id="cli",
        transcript=transcript,
        session_id=session_id,
        event_type=event_type,
        metadata={METADATA_LANGUAGE_KEY: language} if language else {},
    )

    outcome = asyncio.run(service.resolve(request))
    if isinstance(outcome, Failed) and outcome.kind != FailureKind.BACKEND:
        console.print(f"[red]Error ({outcome.kind.value}): {outcome.message}[/red]")
        raise typer.Exit(1)

    response = to_response(outcome, request)
    console.print_json(json.dumps(response.model_dump(by_alias=True, mode="json")))


# ============================================================================
# Serve (FastAPI HTTP)
# ============================================================================


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind host (default: VOXROUTE_HOST)"),
    port: int = typer.Option(None, "--port", "-p", help="Bind port (default: VOXROUTE_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
):
    """Start the voxroute HTTP API server (FastAPI + Uvicorn)."""
    import uvicorn

    from voxroute.log import configure_logging
    from voxroute.settings import get_settings

    settings = get_settings()
    configure_logging(settings.log_level)
    bind_host = host or settings.host
    bind_port = port or settings.port

    console.print(f"{__logo__} Starting voxroute API on {bind_host}:{bind_port} ...")
    uvicorn.run(
        "voxroute.api.app:create_app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        factory=True,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
