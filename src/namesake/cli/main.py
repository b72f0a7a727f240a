"""
Namesake CLI

Command-line interface for finding confusingly similar identifier names.

Usage::

    namesake check ./src                       # Check a project
    namesake check app.py -t 0.8 -f compact    # One file, stricter threshold
    namesake compare ALEXANDRE ALEKSANDER      # Compare two strings
    namesake mcp                               # Start the MCP server
"""

import dataclasses
import logging
import time

import click

from namesake.core.config import NamesakeConfig
from namesake.core.matcher import compare as compare_strings
from namesake.core.reporter import ResultFormatter
from namesake.exceptions import ConfigError, NamesakeError


# ---------------------------------------------------------------------------
# Logging helpers
# ---------------------------------------------------------------------------

def _configure_logging(verbose: bool, config: NamesakeConfig) -> None:
    """Set up logging for the CLI session."""
    level = logging.DEBUG if verbose else getattr(logging, config.log_level, logging.INFO)
    logging.basicConfig(level=level, format=config.log_format)


# ---------------------------------------------------------------------------
# Top-level group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(package_name="namesake")
@click.option(
    "-t", "--threshold",
    type=float,
    default=None,
    envvar="NAMESAKE_SIMILARITY_THRESHOLD",
    help="Similarity threshold in (0, 1] (default: $NAMESAKE_SIMILARITY_THRESHOLD or 0.75).",
)
@click.pass_context
def cli(ctx: click.Context, threshold: float | None):
    """Namesake — find near-duplicate identifier names."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = _build_config(threshold=threshold)


# ---------------------------------------------------------------------------
# namesake check
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("paths", nargs=-1, type=click.Path(exists=True))
@click.option("-t", "--threshold", type=float, default=None,
              help="Similarity threshold for this check (overrides the global option).")
@click.option("--nested", is_flag=True,
              help="Also compare names of nested scopes against enclosing scopes.")
@click.option("-f", "--format", "fmt",
              type=click.Choice(["console", "compact", "json"]),
              default="console", help="Output format.")
@click.option("--fail-on-match", is_flag=True,
              help="Exit with status 1 when any similar pair is found.")
@click.option("--progress", is_flag=True, help="Show a progress bar.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def check(ctx: click.Context, paths: tuple, threshold: float | None, nested: bool,
          fmt: str, fail_on_match: bool, progress: bool, verbose: bool):
    """Check Python files or directories in PATHS for similar names per scope."""
    config = ctx.obj["config"]
    overrides = {}
    if threshold is not None:
        overrides["similarity_threshold"] = threshold
    if nested:
        overrides["propagate_nested"] = True
    if overrides:
        config = _validated(dataclasses.replace(config, **overrides))

    _configure_logging(verbose, config)
    t0 = time.perf_counter()

    from namesake.client import Namesake  # noqa: E402

    try:
        result = Namesake(config=config).check(*(paths or (".",)), show_progress=progress)
    except NamesakeError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)

    elapsed = time.perf_counter() - t0
    formatter = ResultFormatter()

    if fmt == "json":
        click.echo(formatter.format_json(result))
    elif fmt == "compact":
        output = formatter.format_compact(result)
        if output:
            click.echo(output)
    else:
        click.echo(formatter.format_console(result))
        timing_str = f"{elapsed:.3f}".replace(',', '.')
        click.echo(
            f"  Checked {result.files_processed} files, "
            f"{result.scopes_examined} scopes in {timing_str} seconds"
        )

    if result.errors:
        click.echo(f"  {result.errors} error(s) during the check; see log output.", err=True)
    if fail_on_match and result.matches_found:
        raise SystemExit(1)


# ---------------------------------------------------------------------------
# namesake compare
# ---------------------------------------------------------------------------

@cli.command()
@click.argument("first")
@click.argument("second")
@click.pass_context
def compare(ctx: click.Context, first: str, second: str):
    """Compare two strings FIRST and SECOND and show a longest common subsequence."""
    config = ctx.obj["config"]
    result = compare_strings(first, second, config.similarity_threshold)
    click.echo(f"\"{first}\" and \"{second}\" are {result.score * 100:3.0f}% similar.")
    click.echo(f"One of the longest common sequences is \"{result.evidence}\".")
    if result.exceeds_threshold:
        click.echo(f"Above the similarity threshold of {result.threshold:.2f}.")


# ---------------------------------------------------------------------------
# namesake mcp
# ---------------------------------------------------------------------------

@cli.command()
@click.option("--transport", type=click.Choice(["stdio", "sse"]),
              default="stdio", help="MCP transport (default: stdio).")
@click.option("-v", "--verbose", is_flag=True)
@click.pass_context
def mcp(ctx: click.Context, transport: str, verbose: bool):
    """Start the Namesake MCP server for agent integration."""
    config = ctx.obj["config"]
    _configure_logging(verbose, config)
    try:
        from namesake.mcp.server import create_server  # noqa: E402
    except ImportError:
        click.echo(
            "Error: MCP dependencies not installed.\n"
            "Install with:  pip install 'namesake[mcp]'",
            err=True,
        )
        raise SystemExit(1)

    server = create_server(config)
    server.run(transport=transport)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _build_config(threshold: float | None = None) -> NamesakeConfig:
    """Build the session config from the environment plus CLI overrides."""
    try:
        config = NamesakeConfig.from_env()
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)
    if threshold is not None:
        config = dataclasses.replace(config, similarity_threshold=threshold)
    return _validated(config)


def _validated(config: NamesakeConfig) -> NamesakeConfig:
    """Reject an invalid configuration before any matching begins."""
    try:
        config.validate()
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        raise SystemExit(1)
    return config


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    cli()
