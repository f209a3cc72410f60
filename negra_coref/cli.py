"""Command line entry-point for NEGRA export to CoNLL-X conversion."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, TextIO

import click
import yaml

from .core.errors import ConversionError
from .core.pipeline import ConversionConfig, CorpusConverter
from .utils.config import ConfigManager
from .utils.logging import setup_logging

logger = logging.getLogger("negra_coref.cli")


@click.command()
@click.option("--input", "-i", type=click.File("r", encoding="utf-8"), default="-", help="NEGRA export file (defaults to stdin)")
@click.option("--output", "-o", type=click.File("w", encoding="utf-8", lazy=True), default="-", help="CoNLL-X destination (defaults to stdout)")
@click.option("--keep-comments", "-k", is_flag=True, help="Keep NEGRA comments on tokens")
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False, path_type=Path), help="YAML configuration file")
@click.option("--report", "-r", type=click.File("w", lazy=True), help="Write a JSON conversion report")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def main(
    input: TextIO,
    output: TextIO,
    keep_comments: bool,
    config_path: Optional[Path],
    report: Optional[TextIO],
    verbose: bool,
) -> None:
    """Convert a NEGRA export treebank to CoNLL-X, resolving coreference links."""

    try:
        manager = ConfigManager(config_path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise click.ClickException(f"Cannot load config {config_path}: {exc}") from exc
    try:
        setup_logging(level=manager.get("logging.level"), verbose=verbose)
    except ValueError as exc:
        raise click.ClickException(f"Cannot configure logging: {exc}") from exc

    if keep_comments:
        manager.set("export.keep_comments", keep_comments)

    converter = CorpusConverter(ConversionConfig.from_manager(manager))
    try:
        result = converter.convert(input, output)
    except ConversionError as exc:
        logger.error("Conversion failed: %s", exc)
        raise click.ClickException(str(exc)) from exc

    logger.info(
        "Converted %d sentences, resolved %d coreference markers",
        result.sentences,
        result.coref_markers,
    )

    if report is not None:
        report.write(result.model_dump_json(indent=2))
        report.write("\n")


if __name__ == "__main__":  # pragma: no cover
    main()
