"""Armory Command Line Interface.

Entry point for the armory CLI tool.
"""

from pathlib import Path

import typer
from pydantic import ValidationError

from armory import __version__
from armory.contracts import ArmoryError, PipelineOutcome, PipelineState, PluginKind
from armory.core.config import ArmorySettings, load_settings
from armory.core.logging import configure_logging
from armory.core.repos import RepositoryCache
from armory.plugins import ClassRegistry, PluginPipeline

app = typer.Typer(
    name="armory",
    help="Armory: build payloads, run encoders and render exploits.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"armory version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Armory: build payloads, run encoders and render exploits."""
    pass


SETTINGS_OPTION = typer.Option(
    None,
    "--settings",
    "-s",
    help="Path to settings YAML file (ARMORY_* environment variables also apply).",
)


def _load(settings: str | None) -> ArmorySettings:
    """Load settings or exit with the configuration errors."""
    try:
        config = load_settings(Path(settings) if settings else None)
    except FileNotFoundError:
        typer.echo(f"Error: Settings file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None
    configure_logging(config.logging)
    return config


def _registry(config: ArmorySettings) -> ClassRegistry:
    registry = ClassRegistry(search_paths=RepositoryCache(config.repos_dir).search_paths)
    registry.register_builtin_plugins()
    return registry


def _parse_kind(text: str) -> PluginKind:
    for kind in PluginKind:
        if text in (kind.value, kind.singular):
            return kind
    valid = ", ".join(kind.singular for kind in PluginKind)
    raise typer.BadParameter(f"Invalid kind '{text}'. Valid kinds: {valid}")


def _parse_params(pairs: list[str] | None) -> dict[str, str | list[str]]:
    """Turn repeated ``name=value`` options into form-style params."""
    params: dict[str, str | list[str]] = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Expected name=value, got '{pair}'")
        existing = params.get(name)
        if existing is None:
            params[name] = value
        elif isinstance(existing, list):
            existing.append(value)
        else:
            params[name] = [existing, value]
    return params


def _report(outcome: PipelineOutcome) -> None:
    """Print the artifact, or every error and exit 1."""
    if outcome.ok:
        typer.echo(outcome.artifact_text())
        return

    if outcome.state is PipelineState.VALIDATION_FAILED:
        typer.echo("Invalid params:", err=True)
        for error in outcome.errors:
            typer.echo(f"  - {error.field}: {error.message}", err=True)
    elif outcome.state is PipelineState.BIND_FAILED:
        typer.echo(f"Error: {outcome.bind_error}", err=True)
    elif outcome.failure is not None:
        typer.echo(
            f"Error during {outcome.failure.stage.value}: {outcome.failure.message}",
            err=True,
        )
    raise typer.Exit(1)


@app.command()
def serve(
    settings: str | None = SETTINGS_OPTION,
    host: str | None = typer.Option(None, "--host", help="Override server.host."),
    port: int | None = typer.Option(None, "--port", "-p", help="Override server.port."),
) -> None:
    """Run the web console."""
    import uvicorn

    from armory.web.app import create_app

    config = _load(settings)
    web_app = create_app(config)
    uvicorn.run(
        web_app,
        host=host or config.server.host,
        port=port or config.server.port,
        log_config=None,  # Keep configure_logging() handlers
    )


@app.command()
def encode(
    encoder: str = typer.Argument(..., help="Encoder identifier, e.g. base64."),
    data: str = typer.Argument(..., help="Data to encode."),
    param: list[str] | None = typer.Option(
        None,
        "--param",
        "-p",
        help="Encoder param as name=value (repeatable).",
    ),
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """Encode DATA with an encoder."""
    pipeline = PluginPipeline(_registry(_load(settings)))
    params = _parse_params(param)
    try:
        outcome = pipeline.encode(encoder, params, data.encode("utf-8"))
    except ArmoryError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    _report(outcome)


@app.command()
def build(
    identifier: str = typer.Argument(..., help="Payload (or exploit) identifier."),
    param: list[str] | None = typer.Option(
        None,
        "--param",
        "-p",
        help="Param as name=value (repeatable).",
    ),
    kind: str = typer.Option(
        "payload",
        "--kind",
        "-k",
        help="What to build: payload or exploit.",
    ),
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """Build a payload or an exploit and print it."""
    plugin_kind = _parse_kind(kind)
    if plugin_kind is PluginKind.ENCODER:
        raise typer.BadParameter("Encoders are run with 'armory encode'")
    params = _parse_params(param)
    pipeline = PluginPipeline(_registry(_load(settings)))
    try:
        outcome = pipeline.build(identifier, params, plugin_kind)
    except ArmoryError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    _report(outcome)


# Plugins subcommand group
plugins_app = typer.Typer(help="Plugin discovery commands.")
app.add_typer(plugins_app, name="plugins")


@plugins_app.command("list")
def plugins_list(
    kind: str | None = typer.Option(
        None,
        "--kind",
        "-k",
        help="Filter by kind (payload, encoder, exploit).",
    ),
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """List available plugins."""
    kinds = [_parse_kind(kind)] if kind else list(PluginKind)
    registry = _registry(_load(settings))

    for plugin_kind in kinds:
        typer.echo(f"\n{plugin_kind.value.upper()}:")
        ids = registry.list_ids(plugin_kind)
        if not ids:
            typer.echo("  (none available)")
        for plugin_id in ids:
            try:
                summary = registry.resolve(plugin_id, plugin_kind).summary()
            except ArmoryError as e:
                summary = f"(unavailable: {e})"
            typer.echo(f"  {plugin_id:24} - {summary}")

    typer.echo()  # Final newline


@plugins_app.command("show")
def plugins_show(
    kind: str = typer.Argument(..., help="payload, encoder or exploit."),
    identifier: str = typer.Argument(..., help="Plugin identifier."),
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """Show a plugin's description and params."""
    plugin_kind = _parse_kind(kind)
    pipeline = PluginPipeline(_registry(_load(settings)))
    try:
        plugin_cls, specs = pipeline.describe(identifier, plugin_kind)
    except ArmoryError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    typer.echo(f"{plugin_cls.id} ({plugin_kind.singular})")
    description = plugin_cls.description()
    if description:
        typer.echo(f"\n{description}")
    typer.echo("\nParams:")
    if not specs:
        typer.echo("  (none)")
    for spec in specs:
        flags = " required" if spec.required else ""
        default = f" [default: {spec.default}]" if spec.has_default else ""
        typer.echo(f"  {spec.name:12} {spec.kind.value}{flags}{default}  {spec.description}")


# Jobs subcommand group
jobs_app = typer.Typer(help="Job queue commands.")
app.add_typer(jobs_app, name="jobs")


@jobs_app.command("list")
def jobs_list(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of jobs to show."),
    settings: str | None = SETTINGS_OPTION,
) -> None:
    """List recently enqueued jobs."""
    from armory.core.jobs import JobQueue, JobsDB

    config = _load(settings)
    with JobsDB.from_url(config.database.url, echo=config.database.echo) as db:
        jobs = JobQueue(db).recent(limit)

    if not jobs:
        typer.echo("No jobs.")
        return
    for job in jobs:
        typer.echo(
            f"{job.job_id}  {job.status.value:9}  {job.enqueued_at:%Y-%m-%d %H:%M:%S}  {job.name}"
        )


if __name__ == "__main__":
    app()
