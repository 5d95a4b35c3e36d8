# eas_offchain/cli/main.py
"""
CLI for encoding, decoding and inspecting shareable EAS offchain attestations.
"""

import binascii
import json
import logging
import zlib
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from eas_offchain.codec.share import build_share_url, decode_from_text, encode_to_text, unzip_tuple
from eas_offchain.compact.compactor import COMPACT_TUPLE_LENGTH, decompact
from eas_offchain.core.errors import OffchainPackageError
from eas_offchain.core.types import AttestationShareablePackage

app = typer.Typer(
    name="eas-offchain",
    help="Encode, decode and inspect shareable EAS offchain attestation links",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()

# Errors a malformed package file or share text can raise
DECODE_ERRORS = (OffchainPackageError, binascii.Error, zlib.error, json.JSONDecodeError, UnicodeDecodeError)

SLOT_LABELS = (
    "domain.version",
    "domain.chainId",
    "domain.verifyingContract",
    "signature.r",
    "signature.s",
    "signature.v",
    "signer",
    "uid",
    "message.schema",
    "message.recipient",
    "message.time",
    "message.expirationTime",
    "message.refUID",
    "message.revocable",
    "message.data",
    "reserved",
    "message.version",
    "message.salt",
)


def load_package(path: Path) -> AttestationShareablePackage:
    """Read a package JSON file: {"sig": {...}, "signer": "0x..."}"""
    if not path.exists():
        console.print(f"[red]Package file not found: {path}[/]")
        raise typer.Exit(1)

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        return AttestationShareablePackage.from_dict(raw)
    except (ValueError, KeyError, TypeError) as e:
        console.print(f"[red]Failed to read package from {path}: {str(e)}[/]")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Convert signed offchain attestations to and from share links."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@app.command()
def encode(
    package: Path = typer.Argument(..., help="Package JSON file to encode"),
):
    """Print the compressed, URL-safe text form of a package."""
    pkg = load_package(package)
    try:
        text = encode_to_text(pkg)
    except ValueError as e:
        console.print(f"[red]Encoding failed: {str(e)}[/]")
        raise typer.Exit(1)
    typer.echo(text)


@app.command()
def url(
    package: Path = typer.Argument(..., help="Package JSON file to share"),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="Scheme and host to prefix (overrides EAS_OFFCHAIN_BASE_URL env var)",
    ),
):
    """Print the share URL of a package."""
    pkg = load_package(package)
    try:
        share_url = build_share_url(pkg, base_url=base_url)
    except ValueError as e:
        console.print(f"[red]Encoding failed: {str(e)}[/]")
        raise typer.Exit(1)
    typer.echo(share_url)


@app.command()
def decode(
    text: str = typer.Argument(..., help="Shareable text (the attestation= value of a share URL)"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write package JSON to this file"),
):
    """Decode shareable text back into the package JSON."""
    try:
        pkg = decode_from_text(text)
    except DECODE_ERRORS as e:
        console.print(f"[red]Decoding failed: {str(e)}[/]")
        raise typer.Exit(1)

    if output is None:
        typer.echo(json.dumps(pkg.to_dict(), indent=2))
        return

    with open(output, "w", encoding="utf-8") as f:
        json.dump(pkg.to_dict(), f, indent=2)
        f.write("\n")
    console.print(f"[green]Wrote {pkg.sig.version.name} attestation {pkg.sig.uid} to {output}[/]")


@app.command()
def inspect(
    text: str = typer.Argument(..., help="Shareable text to inspect"),
):
    """Show the compact tuple slots carried by shareable text."""
    try:
        compacted = unzip_tuple(text)
        pkg = decompact(compacted)
    except DECODE_ERRORS as e:
        console.print(f"[red]Decoding failed: {str(e)}[/]")
        raise typer.Exit(1)

    padded = tuple(compacted) + (None,) * (COMPACT_TUPLE_LENGTH - len(compacted))

    table = Table(title=f"Compact attestation ({pkg.sig.version.name}, {pkg.sig.primary_type})")
    table.add_column("Slot", justify="right")
    table.add_column("Field")
    table.add_column("Value", overflow="fold")

    for slot, (label, value) in enumerate(zip(SLOT_LABELS, padded)):
        table.add_row(str(slot), label, "—" if value is None else json.dumps(value))

    console.print(table)


if __name__ == "__main__":
    app()
