try:
    import orjson as json  # type: ignore[import-not-found]
except ImportError:
    import json

import logging
import os
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Optional

import click
import yaml  # type: ignore
from dotenv import load_dotenv

from wepar import parser

try:
    __version__ = version("wepar")
except PackageNotFoundError:
    __version__ = "0.0.1-dev"


def _dump_json(data: dict) -> str:
    """Serialize ``data`` with whichever JSON module is available."""

    dumped = json.dumps(data)
    if isinstance(dumped, bytes):
        return dumped.decode()
    return dumped


@click.group()
@click.option("--debug/--no-debug", default=False)
@click.option("--trace/--no-trace", default=False)
@click.option(
    "--log-file",
    type=click.Path(file_okay=True, dir_okay=False),
    envvar="WEPAR_LOG_FILE",
)
@click.version_option(__version__, prog_name="wepar")
def cli(debug: bool, trace: bool, log_file: Optional[str] = None) -> None:
    """Configure logging and load environment variables.

    Args:
        debug: Toggle debug logging.
        trace: Toggle trace logging.
        log_file: Optional path to the log file.
    """
    if trace:
        level = 1
    elif debug:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        filename=log_file,
        level=level,
        format="[%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if trace:
        logging.debug("Trace mode is on")
    if debug:
        logging.debug("Debug mode is on")
    load_dotenv()


@cli.command()
@click.argument("url")
@click.option(
    "--output",
    "output_path",
    type=click.Path(file_okay=True, dir_okay=False),
    default=None,
    help="Write output to FILE instead of the console.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Output format.",
)
@click.option(
    "--validate/--no-validate",
    default=True,
    show_default=True,
    help="Reject URLs that are not WeChat article links.",
)
def parse(
    url: str,
    output_path: Optional[str] = None,
    output_format: str = "json",
    validate: bool = True,
) -> None:
    """Parse the article at URL and print its title, content and images.

    Args:
        url: Article URL to parse.
        output_path: Optional file receiving the result.
        output_format: Format of the result.
        validate: Whether to check the URL shape before fetching.
    """

    request = parser.ArticleRequest(url)
    if validate and not request.is_valid:
        raise click.UsageError(f"Not a WeChat article link: {url}")

    # Fallback content is returned instead of raising, so this always
    # yields something printable.
    outcome = parser.parse_article(request.url)
    data = outcome.to_dict()

    if output_format == "json":
        content = _dump_json(data)
    else:
        content = yaml.safe_dump(data, allow_unicode=True, sort_keys=False)

    if output_path:
        Path(output_path).write_text(content, encoding="utf-8")
    else:
        click.echo(content)


@cli.command()
@click.option(
    "--host",
    default=os.environ.get("WEPAR_HOST", "127.0.0.1"),
    show_default=True,
)
@click.option(
    "--port",
    type=int,
    default=int(os.environ.get("WEPAR_PORT", "3303")),
    show_default=True,
)
def serve(host: str, port: int) -> None:
    """Run the web service."""

    import uvicorn

    click.echo(f"Serving on http://{host}:{port}")
    uvicorn.run("wepar.web:app", host=host, port=port)
