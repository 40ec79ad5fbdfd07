"""
Command-line interface for xpub_principals.
"""

import asyncio
import logging
import sys

import click
import structlog

from xpub_principals.config import PrincipalsConfig
from xpub_principals.crypto.fingerprint import decode_principal
from xpub_principals.exceptions import PrincipalFormatError, XpubPrincipalsError
from xpub_principals.generator import PrincipalGenerator


def configure_logging(verbose: bool) -> None:
    """Send structlog output to stderr so stdout only carries principals."""
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


@click.group()
@click.option("--verbose", is_flag=True, help="Enable debug logging on stderr.")
def cli(verbose: bool) -> None:
    """Derive self-authenticating principals from an extended public key."""
    configure_logging(verbose)


@cli.command("generate")
@click.option("--xpub", required=True, help="Extended public key. (required)")
@click.option(
    "-n",
    "--count",
    type=click.IntRange(min=0),
    default=PrincipalsConfig().default_count,
    show_default=True,
    help="Number of principals.",
)
@click.option("--parallel", is_flag=True, help="Derive child keys concurrently.")
def generate(xpub: str, count: int, parallel: bool) -> None:
    """Prints one principal per derived key, in index order."""
    generator = PrincipalGenerator()
    try:
        if parallel:
            for principal in asyncio.run(generator.generate_async(xpub, count)):
                click.echo(principal)
        else:
            for principal in generator.iter_principals(xpub, count):
                click.echo(principal)
    except XpubPrincipalsError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command("check")
@click.argument("principals", nargs=-1, required=True)
def check(principals: tuple[str, ...]) -> None:
    """Validates the checksum and type of each principal."""
    failed = False
    for principal in principals:
        try:
            decoded = decode_principal(principal)
        except PrincipalFormatError as e:
            click.echo(f"{principal}: {e}")
            failed = True
            continue
        if not decoded.is_self_authenticating:
            click.echo(f"{principal}: not a self-authenticating principal (tag={decoded.tag})")
            failed = True
            continue
        click.echo(f"{principal}: ok")
    if failed:
        sys.exit(1)


def main() -> None:
    cli()
