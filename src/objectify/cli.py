# src/objectify/cli.py
from __future__ import annotations

from pathlib import Path
import logging
import time
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
import orjson

from objectify.config_store import ConfigStore
from objectify.errors import ObjectifyError
from objectify.fileobj import FileObj
from objectify.scanner import scan_file, scan_path
from objectify.sets import Sets, preset_names, sets_from_preset

app = typer.Typer(help="objectify – file metadata objects (size, mode, checksums, link targets)")
console = Console()

# --- sub apps ---
config_app = typer.Typer(help="Manage scan profiles")
app.add_typer(config_app, name="config")

PRESET_HELP = f"Sets preset: {', '.join(preset_names())}"


def _store() -> ConfigStore:
    return ConfigStore()


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def resolve_sets(preset: Optional[str], profile: str) -> Sets:
    try:
        if preset:
            return sets_from_preset(preset)
        return _store().resolve_sets(profile)
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=2)


def dump_json(files: List[FileObj]) -> str:
    payload = {
        "version": 1,
        "generated_at": time.time(),
        "count": len(files),
        "items": [fo.to_dict() for fo in files],
    }
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode()


def summary_table(files: List[FileObj], title: str, caption: str = "") -> Table:
    table = Table(title=title, caption=caption)
    table.add_column("Name", no_wrap=True)
    table.add_column("Mode", no_wrap=True)
    table.add_column("Size", justify="right", no_wrap=True)
    table.add_column("MD5", overflow="fold")
    table.add_column("SHA256")
    table.add_column("Target")
    for fo in files:
        table.add_row(
            fo.filename,
            str(fo.mode),
            fo.size_string(),
            fo.checksum_md5,
            fo.checksum_sha256[:16],
            str(fo.target_final or fo.target or ""),
        )
    return table


def detail_table(fo: FileObj) -> Table:
    table = Table(title=str(fo.full_path), show_header=False)
    table.add_column("Field", style="bold", no_wrap=True)
    table.add_column("Value", overflow="fold")
    rows = [
        ("Filename", fo.filename),
        ("Root", str(fo.root)),
        ("Size", fo.size_string()),
        ("ChecksumMD5", fo.checksum_md5),
        ("ChecksumSHA256", fo.checksum_sha256),
        ("EntMode", str(fo.mode)),
        ("Target", str(fo.target or "")),
        ("TargetFinal", str(fo.target_final or "")),
        ("IsExists", str(fo.exists)),
        ("IsReadable", str(fo.readable)),
        ("IsLink", str(fo.is_link)),
        ("Sets", repr(fo.sets)),
        ("UpdatedAt", fo.updated_at.isoformat() if fo.updated_at else ""),
    ]
    for label, value in rows:
        table.add_row(label, value)
    for w in fo.warnings:
        table.add_row("[yellow]Warning[/yellow]", w)
    return table


@app.command("scan")
def scan_cmd(
    root: Path = typer.Argument(..., help="Directory to scan (one level only)"),
    preset: Optional[str] = typer.Option(None, "--sets", "-s", help=PRESET_HELP),
    profile: str = typer.Option("default", "--profile", "-p", help="Profile used when --sets is omitted"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
):
    setup_logging(verbose)
    sets = resolve_sets(preset, profile)
    if verbose:
        console.print(f"[bold]Root:[/bold] {root}  [bold]Sets:[/bold] {sets}")

    try:
        files = scan_path(root, sets)
    except ObjectifyError as e:
        typer.secho(f"[scan] {e}", fg=typer.colors.RED)
        raise typer.Exit(code=2)

    if as_json:
        typer.echo(dump_json(files))
        return

    console.print(summary_table(files, "Scan Summary", caption=str(root)))
    warned = sum(1 for fo in files if fo.warnings)
    if warned:
        console.print(f"[yellow]{warned} entries with warnings[/yellow] (use --verbose or `objectify file` for detail)")


@app.command("file")
def file_cmd(
    paths: List[Path] = typer.Argument(..., help="One or more files"),
    preset: Optional[str] = typer.Option(None, "--sets", "-s", help=PRESET_HELP),
    profile: str = typer.Option("default", "--profile", "-p"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    setup_logging(verbose)
    sets = resolve_sets(preset, profile)

    files: List[FileObj] = []
    for p in paths:
        try:
            files.append(scan_file(p, sets))
        except ObjectifyError as e:
            typer.secho(f"[file] {e}", fg=typer.colors.RED)
            raise typer.Exit(code=2)

    if as_json:
        typer.echo(dump_json(files))
        return
    for fo in files:
        console.print(detail_table(fo))


@config_app.command("set-sets")
def config_set_sets(
    profile: str = typer.Argument(..., help="Profile name (e.g. default)"),
    preset: str = typer.Argument(..., help=PRESET_HELP),
):
    """Store the Sets preset a profile scans with."""
    try:
        saved = _store().set_preset(profile, preset)
    except ValueError as e:
        typer.secho(f"[config] error: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=2)
    typer.secho(f'[config] "{profile}" = {saved}', fg=typer.colors.GREEN)


@config_app.command("show")
def config_show(
    profile: str = typer.Argument("default", help="Profile name (default: default)"),
):
    preset = _store().get_preset(profile)
    if not preset:
        typer.secho(f'[config] "{profile}" is not set', fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)
    typer.echo(preset)


@config_app.command("list")
def config_list():
    store = _store()
    names = store.list_profiles()
    if not names:
        typer.echo("(no profiles yet)")
    else:
        for n in names:
            typer.echo(f"{n}: {store.get_preset(n) or '(unset)'}")


def main():
    app()

if __name__ == "__main__":
    main()
