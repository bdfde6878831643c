import json
import logging
import time

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from saleind.constants import EventKind
from saleind.core.config import IndexerConfig, load_config
from saleind.core.errors import ConfigError, MalformedEventError
from saleind.core.models import Block
from saleind.decoding.selectors import SELECTOR_KEYS, format_felt
from saleind.indexers import INDEXERS, build_filter, get_indexer, host_config
from saleind.storage.sink import DocumentSink

# stdout carries JSON; summaries and logs go to stderr
console = Console(stderr=True)

log = logging.getLogger("saleind")

INDEXER_CHOICE = click.Choice(sorted(INDEXERS))


def _config() -> IndexerConfig:
    try:
        return load_config()
    except ConfigError as e:
        raise click.ClickException(f"configuration: {e}") from e


def _dump(payload: object) -> None:
    click.echo(json.dumps(payload, indent=2))


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """saleind: starknet.id sale, renewal and tax transforms."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@cli.command("selectors")
def selectors_cmd() -> None:
    """List every known event kind with its selector."""
    table = Table(title="event selectors")
    table.add_column("kind", no_wrap=True)
    table.add_column("event name", no_wrap=True)
    table.add_column("selector", overflow="fold")
    for kind in EventKind:
        table.add_row(kind.name, kind.value, format_felt(SELECTOR_KEYS[kind]))
    Console().print(table)


@cli.command("filter")
@click.argument("indexer", type=INDEXER_CHOICE)
def filter_cmd(indexer: str) -> None:
    """Print the event filter the host should stream for INDEXER."""
    _dump(build_filter(get_indexer(indexer), _config()))


@cli.command("host-config")
@click.argument("indexer", type=INDEXER_CHOICE)
def host_config_cmd(indexer: str) -> None:
    """Print the full host runtime declaration for INDEXER."""
    _dump(host_config(get_indexer(indexer), _config()))


@cli.command("transform")
@click.argument("indexer", type=INDEXER_CHOICE)
@click.argument("blocks", type=click.File("r"))
@click.option("--out", "out_path", type=click.Path(dir_okay=False), default=None, help="Write sink rows to this Parquet file instead of printing documents")
def transform_cmd(indexer: str, blocks, out_path: str | None) -> None:
    """Run INDEXER over BLOCKS (one block JSON per line, '-' for stdin)."""
    definition = get_indexer(indexer)
    cfg = _config()
    sink = DocumentSink(entity_mode=definition.entity_mode)

    t0 = time.time()
    n_blocks = 0
    n_docs = 0
    for lineno, line in enumerate(blocks, start=1):
        if not line.strip():
            continue
        try:
            block = Block.model_validate_json(line)
            documents = definition.transform(block, cfg)
        except (ValidationError, MalformedEventError) as e:
            raise click.ClickException(f"block on line {lineno}: {e}") from e

        n_blocks += 1
        n_docs += sink.write(documents)
        log.debug("line %d: %d documents", lineno, len(documents))
        if out_path is None:
            for doc in documents:
                click.echo(json.dumps(doc, separators=(",", ":")))

    if out_path is not None:
        written = sink.write_parquet(out_path)
        console.print(f"[bold]wrote[/]: {len(sink)} rows → {written}")

    console.print(
        f"[bold]done[/]: [green]blocks[/]={n_blocks}  [green]documents[/]={n_docs}  "
        f"({time.time() - t0:.2f}s)"
    )
