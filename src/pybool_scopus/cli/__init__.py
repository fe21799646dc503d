"""
Command line interface for pybool_scopus.
"""

from pathlib import Path

import click
from tqdm.contrib.logging import logging_redirect_tqdm

import pybool_scopus
from pybool_scopus.util import configure_logging

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=pybool_scopus.__version__)
@click.option(
    "--log-level",
    "log_level",
    default="WARNING",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    multiple=False,
    required=False,
    help="minimum level of log messages to display"
)
def cli(log_level: str):
    """
    pybool_scopus utilities.
    """
    configure_logging(log_level)


@cli.command("convert")
@click.argument(
    "input_path",
    type=click.Path(dir_okay=False),
)
@click.option(
    "-o",
    "--output",
    "output_path",
    default=None,
    type=click.Path(dir_okay=False),
    multiple=False,
    required=False,
    help="location to write the JSON file (defaults to the input path with a .json extension)"
)
@click.option(
    "--indent",
    "indent",
    default=2,
    type=click.IntRange(min=0),
    multiple=False,
    required=False,
    help="number of spaces to indent the JSON output with"
)
@click.option(
    "-w",
    "--workers",
    "workers",
    default=1,
    type=click.IntRange(min=1),
    multiple=False,
    required=False,
    help="number of processes to parse queries with"
)
@click.option(
    "--progress/--no-progress",
    "progress",
    default=False,
    help="whether to display a progress bar or not"
)
def convert(input_path: str, output_path: str, indent: int, workers: int, progress: bool):
    """
    Convert a file of Scopus queries, one per line, into JSON.
    """
    from pybool_scopus.convert import convert_file
    try:
        with logging_redirect_tqdm():
            conversion = convert_file(Path(input_path), output_path, indent=indent, workers=workers, progress=progress)
    except OSError as e:
        raise click.ClickException(str(e))
    click.echo(f"Successfully processed {len(conversion.queries)} queries. Output written to: {conversion.output_path}")


@cli.command("parse")
@click.argument(
    "raw_query",
    type=click.STRING,
)
@click.option(
    "-f",
    "--format",
    "output_format",
    default="json",
    type=click.Choice(["json", "text"]),
    multiple=False,
    required=False,
    help="print the query tree as JSON, or formatted back into a query"
)
def parse(raw_query: str, output_format: str):
    """
    Parse a single Scopus query.
    """
    from pybool_scopus.query import EmptyResultError, ScopusQueryParser
    parser = ScopusQueryParser()
    try:
        if output_format == "text":
            click.echo(parser.reformat(raw_query))
        else:
            click.echo(parser.parse_ast(raw_query).to_json(indent=2, ensure_ascii=False))
    except EmptyResultError as e:
        raise click.ClickException(str(e))
