"""
``tokenkit`` command-line tool.

Commands:
    detect      Resolve a deployed contract and report its token standards
                and the support level of every extension.
    interfaces  List the bundled interface artifacts.

Usage::

    tokenkit detect 0xContract --rpc-url https://rpc.example
    tokenkit detect 0xContract --rpc-url https://rpc.example --abi abi.json --json
    tokenkit interfaces
"""

import asyncio
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import click
from rich.console import Console
from rich.table import Table
from web3 import AsyncHTTPProvider, AsyncWeb3

from . import __version__
from .artifacts.loader import get_abi, list_available_interfaces
from .core.context import Connection
from .core.resolver import ContractResolver
from .exceptions import DescriptorFetchFailed
from .features.probe import supports
from .features.registry import detect_families, requirements_for

console = Console()


async def _detect(address: str, rpc_url: str, abi: Optional[List[Dict[str, Any]]]) -> Dict[str, Any]:
    w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
    resolver = ContractResolver(Connection(w3))
    resolved = await resolver.resolve(address, abi)
    descriptor = resolved.descriptor

    report: Dict[str, Any] = {
        "address": resolved.address,
        "source": descriptor.source,
        "selectors": len(descriptor),
        "families": {},
    }
    for family in detect_families(descriptor):
        report["families"][str(family)] = {
            str(name): supports(descriptor, req).name
            for name, req in requirements_for(family).items()
        }
    return report


def _print_report(report: Dict[str, Any]) -> None:
    console.print(
        f"[bold]{report['address']}[/bold]: {report['selectors']} selectors "
        f"from {report['source']}"
    )
    if not report["families"]:
        console.print("[yellow]No ERC20, ERC721 or ERC1155 interface detected[/yellow]")
        return

    styles = {"FULL": "green", "PARTIAL": "yellow", "NONE": "dim"}
    for family, levels in report["families"].items():
        table = Table(title=family)
        table.add_column("Extension")
        table.add_column("Support")
        for name, level in levels.items():
            table.add_row(name, f"[{styles[level]}]{level}[/{styles[level]}]")
        console.print(table)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log detection details to stderr.")
def cli(verbose: bool) -> None:
    """tokenkit: detect token standards and extensions of deployed contracts."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )


@click.command("detect")
@click.argument("address")
@click.option("--rpc-url", required=True, envvar="TOKENKIT_RPC_URL", help="EVM JSON-RPC endpoint.")
@click.option("--abi", "abi_path", type=click.Path(exists=True, dir_okay=False), help="Explicit ABI JSON file.")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
def detect_command(address: str, rpc_url: str, abi_path: Optional[str], as_json: bool) -> None:
    """Report the token standards and extensions of ADDRESS."""
    abi = None
    if abi_path:
        with open(abi_path, encoding="utf-8") as f:
            loaded = json.load(f)
        # Accept bare ABIs and compiler artifacts alike
        abi = loaded["abi"] if isinstance(loaded, dict) else loaded

    try:
        report = asyncio.run(_detect(address, rpc_url, abi))
    except DescriptorFetchFailed as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(report, indent=2))
    else:
        _print_report(report)


@click.command("interfaces")
def interfaces_command() -> None:
    """List the bundled interface artifacts."""
    table = Table(title=f"tokenkit v{__version__} interfaces")
    table.add_column("Interface")
    table.add_column("Functions", justify="right")
    table.add_column("Events", justify="right")
    for name in list_available_interfaces():
        abi = get_abi(name)
        functions = sum(1 for item in abi if item.get("type") == "function")
        events = sum(1 for item in abi if item.get("type") == "event")
        table.add_row(name, str(functions), str(events))
    console.print(table)


cli.add_command(detect_command)
cli.add_command(interfaces_command)


def main() -> None:
    cli()
