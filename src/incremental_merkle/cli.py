"""CLI for Incremental Merkle."""

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .chunks import file_root
from .config import MerkleConfig, load_config
from .errors import MerkleError
from .fixed import FixedSizeTree
from .hashing import Digest, get_hasher
from .tree import level_sizes_for

console = Console()
error_console = Console(stderr=True)


def format_digest(digest: Digest) -> str:
    """Render a digest for display; raw digests are shown as hex."""
    if isinstance(digest, bytes):
        return digest.hex()
    return digest


def fail(error: Exception) -> NoReturn:
    """Print an error and exit with status 1."""
    error_console.print(f"[red]Error:[/red] {escape(str(error))}")
    sys.exit(1)


def get_config() -> MerkleConfig:
    """Load config for the working directory, exiting on invalid settings."""
    try:
        return load_config(Path.cwd())
    except (ValidationError, json.JSONDecodeError) as e:
        fail(e)


@click.group()
@click.version_option(version=__version__, prog_name="imerkle")
@click.option("--verbose", "-v", is_flag=True, help="Log tree events to stderr")
def main(verbose: bool) -> None:
    """Incremental Merkle - merkle roots over leaves set in any order."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--chunk-size", type=int, default=None, help="Bytes per leaf (default: from config)")
@click.option("--algorithm", default=None, help="hashlib algorithm (default: from config)")
@click.option(
    "--order",
    type=click.Choice(["sequential", "reverse", "shuffle"]),
    default="sequential",
    help="Order in which chunks are fed to the tree",
)
@click.option("--seed", type=int, default=None, help="Seed for --order shuffle")
def root(
    path: Path,
    chunk_size: int | None,
    algorithm: str | None,
    order: str,
    seed: int | None,
) -> None:
    """Compute the merkle root of a file's chunks."""
    config = get_config()
    if chunk_size is None:
        chunk_size = config.chunk_size
    if chunk_size < 1:
        fail(ValueError(f"chunk size must be at least 1 (got {chunk_size})"))

    try:
        if algorithm:
            hasher = get_hasher(algorithm, config.digest_format)
        else:
            hasher = config.hasher()
        digest, tree = file_root(path, hasher, chunk_size, order=order, seed=seed)
    except MerkleError as e:
        fail(e)

    console.print(
        Panel(
            f"[green]{format_digest(digest)}[/green]\n\n"
            f"File: [dim]{path}[/dim]\n"
            f"Algorithm: [bold]{hasher.algorithm}[/bold]\n"
            f"Chunks: {tree.width} x {chunk_size} bytes ({order})\n"
            f"Levels: {tree.levels()}\n"
            f"Nodes hashed: {tree.stats.nodes_resolved}",
            title="imerkle root",
        )
    )


@main.command()
@click.argument("width", type=int)
def shape(width: int) -> None:
    """Show the level layout of a tree with WIDTH leaves."""
    if width < 1:
        fail(ValueError(f"width cannot be less than 1 (got {width})"))

    sizes = level_sizes_for(width)

    table = Table(title=f"Tree of width {width}")
    table.add_column("Level", style="cyan", justify="right")
    table.add_column("Nodes", justify="right")
    table.add_column("Degenerate", justify="right")

    for level, size in enumerate(sizes):
        # An odd level below the root leaves its last parent with one child
        degenerate = level > 0 and sizes[level - 1] % 2 == 1
        table.add_row(str(level), str(size), "1" if degenerate else "")

    console.print(table)


@main.command()
@click.argument("values", nargs=-1, required=True)
@click.option("--algorithm", default=None, help="hashlib algorithm (default: from config)")
def leaves(values: tuple[str, ...], algorithm: str | None) -> None:
    """Compute the merkle root of VALUES, one leaf each."""
    config = get_config()
    try:
        hasher = get_hasher(algorithm, config.digest_format) if algorithm else config.hasher()
        tree = FixedSizeTree(len(values), hasher)
        for index, value in enumerate(values):
            tree.set(index, value)
    except MerkleError as e:
        fail(e)

    console.print(format_digest(tree.hash()))


if __name__ == "__main__":
    main()
