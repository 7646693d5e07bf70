"""Gatehouse CLI application using Typer.

Commands:
- ``gatehouse serve``: run the HTTP API with uvicorn
- ``gatehouse keys generate``: create the RS256 signing key pair
"""

import os
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from rich.console import Console

from gatehouse_config import get_config_dir, get_settings

app = typer.Typer(
    name="gatehouse",
    help="Gatehouse - account authentication and token issuance CLI",
    no_args_is_help=True,
)
console = Console()

keys_app = typer.Typer(
    name="keys",
    help="Signing key utilities",
    no_args_is_help=True,
)
app.add_typer(keys_app)

RSA_KEY_SIZE = 2048
PRIVATE_KEY_FILENAME = "private_key.pem"
PUBLIC_KEY_FILENAME = "public_key.pem"


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, help="Bind port (default: API_PORT)"),
) -> None:
    """Run the HTTP API."""
    settings = get_settings()
    uvicorn.run(
        "gatehouse.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_level=settings.log_level.lower(),
    )


def generate_key_pair() -> tuple[bytes, bytes]:
    """Generate an RSA key pair as (private PKCS#8 PEM, public SPKI PEM)."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=RSA_KEY_SIZE)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem, public_pem


def _write_private_key(path: Path, pem: bytes) -> None:
    """Write the private key into a fresh owner-only file."""
    # O_CREAT modes only apply to new files
    path.unlink(missing_ok=True)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    with os.fdopen(fd, "wb") as f:
        f.write(pem)


@keys_app.command("generate")
def generate_keys(
    out_dir: Optional[Path] = typer.Option(
        None,
        "--out-dir",
        help="Directory for the PEM files (default: config/)",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite existing keys"),
) -> None:
    """Generate the RS256 key pair used to sign access tokens.

    Rotating the pair invalidates every token issued with the old one.
    """
    out_dir = out_dir or get_config_dir()
    private_path = out_dir / PRIVATE_KEY_FILENAME
    public_path = out_dir / PUBLIC_KEY_FILENAME

    existing = [p for p in (private_path, public_path) if p.exists()]
    if existing and not force:
        console.print(
            f"[red]Refusing to overwrite {existing[0]}. Use --force.[/red]",
        )
        raise typer.Exit(code=1)

    out_dir.mkdir(parents=True, exist_ok=True)
    private_pem, public_pem = generate_key_pair()
    _write_private_key(private_path, private_pem)
    public_path.write_bytes(public_pem)

    console.print("\n[bold green]Gatehouse Key Generation[/bold green]")
    console.print(f"[cyan]JWT_PRIVATE_KEYFILE[/cyan]={private_path}")
    console.print(f"[cyan]JWT_PUBLIC_KEYFILE[/cyan]={public_path}")
    console.print(
        "[yellow]⚠  Keep the private key secure and never commit it "
        "to version control![/yellow]\n"
    )


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
