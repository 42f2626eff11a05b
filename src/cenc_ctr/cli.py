"""Command line interface for cenc-ctr."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Callable

import click
from rich.console import Console

from cenc_ctr import __version__
from cenc_ctr.crypto.block import BLOCK_SIZE, random_bytes
from cenc_ctr.crypto.counter import CounterBlock
from cenc_ctr.encryptor import _validate_iv_size
from cenc_ctr.errors import CencCtrError
from cenc_ctr.stream import STREAM_CHUNK_SIZE, transform_file

EXIT_SUCCESS = 0
EXIT_USAGE = 1
EXIT_FS = 3

console = Console()


def _package_version() -> str:
    try:
        return version("cenc-ctr")
    except PackageNotFoundError:
        return __version__


def _parse_hex(value: str, name: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except ValueError as exc:
        raise ValueError(f"{name} is not valid hex") from exc


def _handle_action(action: Callable[[], None]) -> int:
    try:
        action()
    except CencCtrError as exc:
        console.print(f"[red]Invalid key or IV:[/red] {exc}")
        return EXIT_USAGE
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        return EXIT_USAGE
    except FileExistsError as exc:
        console.print(f"[red]{exc}. Use --overwrite to replace.[/red]")
        return EXIT_FS
    except FileNotFoundError as exc:
        console.print(f"[red]File not found:[/red] {exc}")
        return EXIT_FS
    except PermissionError as exc:
        console.print(f"[red]Permission denied:[/red] {exc}")
        return EXIT_FS
    except OSError as exc:  # noqa: BLE001
        console.print(f"[red]Filesystem error:[/red] {exc}")
        return EXIT_FS
    return EXIT_SUCCESS


def _run_transform(
    ctx: click.Context,
    verb: str,
    input_path: Path,
    output_path: Path,
    key_hex: str,
    iv: Callable[[], bytes],
    chunk_size: int,
    overwrite: bool,
) -> None:
    def action() -> None:
        key = _parse_hex(key_hex, "Key")
        iv_bytes = iv()
        written = transform_file(
            input_path,
            output_path,
            key,
            iv_bytes,
            overwrite=overwrite,
            chunk_size=chunk_size,
        )
        console.print(f"[green]{verb} {written} bytes[/green] -> {output_path}")
        console.print(f"IV: {iv_bytes.hex()}")

    ctx.exit(_handle_action(action))


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=False,
)
@click.version_option(version=_package_version(), prog_name="cenc-ctr")
def cli() -> None:
    """AES-128-CTR encryption following Common Encryption (CENC) rules."""


@cli.command(
    help="Encrypt a file as a single CENC sample.",
    epilog="Examples:\n  cencctr encrypt clip.bin clip.enc --key 2b7e...3c --iv f0f1...ff\n  cencctr encrypt clip.bin clip.enc --key 2b7e...3c --iv-size 8",
)
@click.argument("input_path", type=click.Path(path_type=Path))
@click.argument("output_path", type=click.Path(path_type=Path))
@click.option("--key", "key_hex", required=True, help="AES-128 key as 32 hex digits.")
@click.option("--iv", "iv_hex", help="IV as 16 or 32 hex digits.")
@click.option(
    "--iv-size",
    type=click.Choice(["8", "16"]),
    default="16",
    show_default=True,
    help="Size of the random IV generated when --iv is omitted.",
)
@click.option("--chunk-size", type=click.IntRange(min=1), default=STREAM_CHUNK_SIZE, show_default=True)
@click.option("--overwrite/--no-overwrite", default=False, help="Overwrite output if it already exists.")
@click.pass_context
def encrypt(
    ctx: click.Context,
    input_path: Path,
    output_path: Path,
    key_hex: str,
    iv_hex: str | None,
    iv_size: str,
    chunk_size: int,
    overwrite: bool,
) -> None:
    def resolve_iv() -> bytes:
        if iv_hex is not None:
            return _parse_hex(iv_hex, "IV")
        return random_bytes(int(iv_size))

    _run_transform(ctx, "Encrypted", input_path, output_path, key_hex, resolve_iv, chunk_size, overwrite)


@cli.command(help="Decrypt a file that was encrypted as a single CENC sample.")
@click.argument("input_path", type=click.Path(path_type=Path))
@click.argument("output_path", type=click.Path(path_type=Path))
@click.option("--key", "key_hex", required=True, help="AES-128 key as 32 hex digits.")
@click.option("--iv", "iv_hex", required=True, help="IV the file was encrypted with.")
@click.option("--chunk-size", type=click.IntRange(min=1), default=STREAM_CHUNK_SIZE, show_default=True)
@click.option("--overwrite/--no-overwrite", default=False, help="Overwrite output if it already exists.")
@click.pass_context
def decrypt(
    ctx: click.Context,
    input_path: Path,
    output_path: Path,
    key_hex: str,
    iv_hex: str,
    chunk_size: int,
    overwrite: bool,
) -> None:
    _run_transform(
        ctx,
        "Decrypted",
        input_path,
        output_path,
        key_hex,
        lambda: _parse_hex(iv_hex, "IV"),
        chunk_size,
        overwrite,
    )


@cli.command("next-iv", help="Print the IV of the sample following one of SAMPLE_SIZE bytes.")
@click.option("--iv", "iv_hex", required=True, help="IV of the current sample.")
@click.option("--sample-size", type=click.IntRange(min=0), required=True, help="Protected bytes in the sample.")
@click.pass_context
def next_iv(ctx: click.Context, iv_hex: str, sample_size: int) -> None:
    def action() -> None:
        iv = _parse_hex(iv_hex, "IV")
        _validate_iv_size(len(iv))
        blocks = -(-sample_size // BLOCK_SIZE)
        console.print(CounterBlock.from_iv(iv).next_sample(blocks).iv.hex())

    ctx.exit(_handle_action(action))


@cli.command("version", help="Show cenc-ctr version.")
def version_cmd() -> None:
    console.print(f"cenc-ctr {_package_version()}")


def main(argv: list[str] | None = None) -> int:
    try:
        return cli.main(args=argv, prog_name="cencctr", standalone_mode=False)
    except SystemExit as exc:  # noqa: TRY003
        code = exc.code if isinstance(exc.code, int) else EXIT_USAGE
        return code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
