"""priv8 CLI - parse a script and write its sanitized copy."""

from __future__ import annotations

from pathlib import Path

import click
import structlog

from priv8.cli.version import version_text
from priv8.config import LoggingConfig, Priv8Config, load_config
from priv8.core.console import pluralize, status
from priv8.core.errors import Priv8Error
from priv8.core.logging import configure_logging, get_log_file_path, log_context
from priv8.parser.bash import BASH, BashParser
from priv8.treesitter.arena import ParsedTree
from priv8.treesitter.grammars import load_configured_grammars
from priv8.treesitter.registry import GrammarRegistry
from priv8.treesitter.text import node_to_string

log = structlog.get_logger(__name__)


def default_output_path(target: Path, suffix: str) -> Path:
    return target.with_name(target.name + suffix)


def error_line(message: str) -> str:
    """CLI error text, pointing at the log file when one is configured."""
    log_file = get_log_file_path()
    if log_file is None:
        return f"Error: {message}"
    return f"Error: {message}. See {log_file} for details."


def parse_content(content: bytes, config: Priv8Config) -> ParsedTree:
    """Parse ``content`` with the configured default grammar."""
    registry = GrammarRegistry()
    load_configured_grammars(registry, config.grammars)

    grammar = config.grammars.default
    if grammar == BASH:
        return BashParser(registry).parse(content)
    return registry.parse(grammar, content)


def process_file(
    target: Path,
    output: Path | None,
    config: Priv8Config,
    *,
    verbose: bool = False,
) -> ParsedTree:
    """Analyze ``target`` and, unless ``output`` is None, write the sanitized copy.

    No substitution is applied yet: the written bytes are the original bytes.
    """
    try:
        content = target.read_bytes()
    except OSError as e:
        raise click.ClickException(f"Failed to read file: {e}") from e

    parsed = parse_content(content, config)
    log.info(
        "file_parsed",
        path=str(target),
        grammar=parsed.grammar,
        nodes=parsed.total_nodes,
        errors=parsed.error_count,
    )
    status(
        f"Parsed {target} ({pluralize(parsed.total_nodes, 'node')}, "
        f"{pluralize(parsed.error_count, 'syntax error')})"
    )
    if parsed.has_errors:
        status("Script contains syntax errors; results may be partial", style="warning")

    if verbose:
        click.echo(node_to_string(parsed.root_node, content), err=True)

    if output is None:
        status("Dry run: no output written")
        return parsed

    try:
        output.write_bytes(content)
    except OSError as e:
        raise click.ClickException(f"Failed to write sanitized file: {e}") from e

    status(f"Sanitized file written to {output}", style="success")
    return parsed


@click.command()
@click.option("--version", "show_version", is_flag=True, help="Print version information")
@click.option(
    "--file",
    "target_file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Target file to analyze",
)
@click.option(
    "--output",
    "output_file",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Output file for sanitized content (default: adds .sanitized suffix)",
)
@click.option("--dry-run", is_flag=True, help="Only detect issues without modifying files")
@click.option("-v", "--verbose", is_flag=True, help="Show detailed processing information")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML configuration file",
)
@click.pass_context
def cli(
    ctx: click.Context,
    show_version: bool,
    target_file: Path | None,
    output_file: Path | None,
    dry_run: bool,
    verbose: bool,
    config_path: Path | None,
) -> None:
    """priv8 - find sensitive data in shell scripts."""
    if show_version:
        click.echo(version_text())
        return

    try:
        config = load_config(config_path)
    except Priv8Error as e:
        status(f"Error: {e.message}", style="error")
        ctx.exit(1)

    logging_config = config.logging
    if verbose:
        logging_config = LoggingConfig(level="DEBUG", outputs=config.logging.outputs)
    configure_logging(config=logging_config)

    if target_file is None:
        status("Error: No target file specified. Use --file flag.", style="error")
        click.echo(ctx.get_help(), err=True)
        ctx.exit(1)

    if not target_file.exists():
        status(f"Error: File '{target_file}' does not exist", style="error")
        ctx.exit(1)

    if output_file is None and not dry_run:
        output_file = default_output_path(target_file, config.output.suffix)
    if dry_run:
        output_file = None

    try:
        with log_context(path=str(target_file), grammar=config.grammars.default):
            process_file(target_file, output_file, config, verbose=verbose)
    except Priv8Error as e:
        with log_context(path=str(target_file)):
            log.error("processing_failed", **e.to_dict())
        status(error_line(e.message), style="error")
        ctx.exit(1)

    status("Processing complete!", style="success")


if __name__ == "__main__":
    cli()
