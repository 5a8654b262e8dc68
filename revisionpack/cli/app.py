import json
from importlib.metadata import PackageNotFoundError, version as package_version
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer

from revisionpack.artifact import ArtifactError, read_revision
from revisionpack.compare import (
    ComparisonConfig,
    ComparisonError,
    classify_sections,
    compare_revisions,
    render_comparison,
)
from revisionpack.plugins import (
    PluginError,
    SectionPluginRegistry,
    get_active_plugin_registry,
    load_plugin_registry_from_file,
)

app = typer.Typer(help="RevisionKit CLI")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("revisionkit")
    except PackageNotFoundError:
        from revisionpack import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show RevisionKit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable ANSI color output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.no_color = no_color
    _OUTPUT_OPTIONS.stable_json = stable_json


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
        )
    else:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            indent=2,
        )
    typer.echo(rendered, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _fail(message: str, *, json_output: bool, extra: dict[str, Any] | None = None) -> None:
    if json_output:
        _echo_json({"status": "error", "exit_code": 1, "message": message, **(extra or {})})
    else:
        _echo(message, err=True)


def _load_plugin_registry(config_path: Path | None) -> SectionPluginRegistry:
    if config_path is None:
        return get_active_plugin_registry()
    return load_plugin_registry_from_file(config_path)


def _split_keys(raw: str) -> list[str]:
    return [key.strip() for key in raw.split(",") if key.strip()]


@app.command()
def compare(
    old: Path = typer.Argument(..., help="Path to old revision (.json or .json.zst)."),
    new: Path = typer.Argument(..., help="Path to new revision (.json or .json.zst)."),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable comparison output.",
    ),
    plugin_config: Path | None = typer.Option(
        None,
        "--plugin-config",
        help="Path to JSON section plugin config (defaults to REVISIONKIT_PLUGIN_CONFIG).",
    ),
    no_tokens: bool = typer.Option(
        False,
        "--no-tokens",
        help="Skip inline edit tokens.",
    ),
    max_lines: int = typer.Option(
        20,
        "--max-lines",
        help="Maximum number of diff lines to print per entry in text mode.",
    ),
) -> None:
    """Compare two document revisions section by section."""
    paths = {"old_path": str(old), "new_path": str(new)}
    try:
        old_revision = read_revision(old)
        new_revision = read_revision(new)
        registry = _load_plugin_registry(plugin_config)
    except (ArtifactError, PluginError, OSError) as error:
        _fail(f"compare failed: {error}", json_output=json_output, extra=paths)
        raise typer.Exit(code=1) from error

    try:
        comparison = compare_revisions(
            old_revision,
            new_revision,
            resolver=registry,
            config=ComparisonConfig(inline_tokens=not no_tokens),
        )
    except ComparisonError as error:
        _fail(f"compare failed: {error}", json_output=json_output, extra=paths)
        raise typer.Exit(code=1) from error

    if json_output:
        _echo_json(
            {
                **comparison.to_dict(),
                "status": "ok",
                "exit_code": 0,
                "message": "compare completed",
                **paths,
            }
        )
        return

    _echo(render_comparison(comparison, max_lines=max(1, max_lines)))


@app.command()
def classify(
    old: str = typer.Option(..., "--old", help="Comma-separated old section keys."),
    new: str = typer.Option(..., "--new", help="Comma-separated new section keys."),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable classification output.",
    ),
) -> None:
    """Classify section keys of two revisions into interleaved display order."""
    try:
        entries = classify_sections(_split_keys(old), _split_keys(new))
    except ComparisonError as error:
        _fail(f"classify failed: {error}", json_output=json_output)
        raise typer.Exit(code=1) from error

    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "entries": [
                    {"key": entry.key, "change_type": entry.change_type} for entry in entries
                ],
            }
        )
        return

    for entry in entries:
        _echo(f"{entry.key}\t{entry.change_type}")


def main() -> None:
    app()
