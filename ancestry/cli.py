"""
cli.py

Command-line entry points.

    ancestry query digraph1.txt < pairs.txt
        reads "v w" pairs from stdin and prints one line per pair:
        length = L, ancestor = A   (-1 for both when there is no path)

    ancestry serve digraph1.txt --port 8000
        runs the HTTP query service on the given graph
"""

import logging
import sys

import click

from ancestry import config
from ancestry.digraph import Digraph
from ancestry.sap import SAP

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL"]


def load_engine(graph_file) -> SAP:
    with open(graph_file, "r") as stream:
        graph = Digraph.read(stream)
    return SAP(graph)


def read_pairs(stream):
    """Yield (v, w) integer pairs from whitespace-separated tokens"""
    tokens = (token for line in stream for token in line.split())
    for v in tokens:
        w = next(tokens, None)
        if w is None:
            raise click.ClickException(f"Unpaired vertex at end of input: {v}")
        try:
            yield int(v), int(w)
        except ValueError:
            raise click.ClickException(f"Expected two integers, got {v!r} {w!r}")


@click.group()
@click.option("--log-level", default=config.LOG_LEVEL, show_default=True,
              type=click.Choice(LOG_LEVELS, case_sensitive=False))
def cli(log_level):
    """Shortest ancestral path queries over a directed graph."""
    logging.basicConfig(
        level=log_level.upper(),
        format=config.LOG_FORMAT,
        stream=sys.stderr
    )


@cli.command(no_args_is_help=True)
@click.argument("graph_file", required=True, type=click.Path(exists=True, dir_okay=False))
def query(graph_file):
    """Answer "v w" pairs read from stdin."""
    try:
        engine = load_engine(graph_file)
    except ValueError as e:
        raise click.ClickException(f"{graph_file}: {e}")

    for v, w in read_pairs(click.get_text_stream("stdin")):
        try:
            result = engine.query(v, w)
        except IndexError as e:
            click.echo(f"error: {e}", err=True)
            continue
        ancestor = -1 if result.ancestor is None else result.ancestor
        click.echo(f"length = {result.length}, ancestor = {ancestor}")


@cli.command(no_args_is_help=True)
@click.argument("graph_file", required=True, type=click.Path(exists=True, dir_okay=False))
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, type=int, show_default=True)
def serve(graph_file, host, port):
    """Run the HTTP query service."""
    import uvicorn
    from ancestry import api

    try:
        api.set_engine(load_engine(graph_file))
    except ValueError as e:
        raise click.ClickException(f"{graph_file}: {e}")

    logger.info(f"Serving {graph_file} on {host}:{port}")
    uvicorn.run(api.app, host=host, port=port, log_level=logging.getLevelName(logger.getEffectiveLevel()).lower())


def main():
    cli()


if __name__ == "__main__":
    main()
