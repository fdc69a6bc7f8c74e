"""
nvtrc CLI.

Commands:
- info: Device enumeration and record counts
- dump: Full plain-text dump of a capture
- export: Convert a capture to Chrome trace JSON
- demo: Write a synthetic capture
- config: Configuration management
- version: Show version
"""

import io
import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .. import __version__
from ..adapters import StringPool, adapt
from ..config import NvtrcConfig, load_config, generate_default_config
from ..core.errors import CodecError
from ..demo import write_demo_file
from ..exporters import write_chrome_trace
from ..formats import read_file, pretty_print, printable_uuid
from ..formats.pretty import ctxsw_support_message


app = typer.Typer(
    name="nvtrc",
    help="Decode NVIDIA GPU context-switch captures",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def _configure_logging(cfg: NvtrcConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, str(cfg.logging.level).upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False, markup=False)],
        force=True,
    )


def _load(trace_file: Path):
    """Read a capture, turning codec errors into exit code 1."""
    try:
        return read_file(trace_file)
    except CodecError as e:
        err_console.print(f"[red]Error:[/] {escape(str(trace_file))}: {escape(str(e))}", highlight=False)
        raise typer.Exit(1)


# === INFO COMMAND ===

@app.command()
def info(
    trace_file: Path = typer.Argument(..., help="Capture file path"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
    verbose: bool = typer.Option(False, "-v", "--verbose"),
):
    """Show the devices in a capture and their record counts."""
    cfg = load_config(config_path)
    _configure_logging(cfg, verbose)

    file_data = _load(trace_file)

    table = Table(title=str(trace_file))
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("UUID")
    table.add_column("Ctx-switch trace")
    table.add_column("Records", justify="right")

    for i, (desc, records) in enumerate(file_data.devices(), start=1):
        table.add_row(
            str(i),
            escape(desc.name),
            printable_uuid(desc.uuid),
            ctxsw_support_message(desc.gpu_ctxsw_trace_error),
            f"{len(records):,}",
        )

    console.print(table)
    console.print(f"Devices: {file_data.device_count}  Records: {file_data.record_count:,}",
                  highlight=False)


# === DUMP COMMAND ===

@app.command()
def dump(
    trace_file: Path = typer.Argument(..., help="Capture file path"),
    devices: Optional[bool] = typer.Option(None, "--devices/--no-devices", help="Show device descriptors"),
    records: Optional[bool] = typer.Option(None, "--records/--no-records", help="Show every record"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
):
    """Print a plain-text dump of a capture."""
    cfg = load_config(config_path)
    _configure_logging(cfg, False)

    file_data = _load(trace_file)

    buffer = io.StringIO()
    pretty_print(
        file_data,
        buffer,
        show_device_descs=cfg.output.show_devices if devices is None else devices,
        show_records=cfg.output.show_records if records is None else records,
    )
    typer.echo(buffer.getvalue(), nl=False)


# === EXPORT COMMAND ===

@app.command()
def export(
    trace_file: Path = typer.Argument(..., help="Capture file path"),
    output: Path = typer.Option(..., "-o", "--output", help="Chrome trace JSON output"),
    raw_gpu: Optional[bool] = typer.Option(None, "--raw-gpu/--cpu-time", help="Keep GPU timestamps"),
    time_divisor: Optional[float] = typer.Option(None, "--time-divisor", help="Divide timestamps by this"),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config"),
    verbose: bool = typer.Option(False, "-v", "--verbose"),
):
    """Convert a capture to Chrome trace-event JSON."""
    cfg = load_config(config_path)
    _configure_logging(cfg, verbose)

    if raw_gpu is not None:
        cfg.timestamps.raw_gpu = raw_gpu
    if time_divisor is not None:
        cfg.export.time_divisor = time_divisor

    errors = cfg.validate()
    if errors:
        err_console.print("[red]Invalid configuration:[/]")
        for e in errors:
            err_console.print(f"  - {e}", highlight=False)
        raise typer.Exit(1)

    file_data = _load(trace_file)

    strpool = StringPool()
    trace_info, events = adapt(file_data, str(trace_file), strpool, cfg.timestamps.raw_gpu)

    count = write_chrome_trace(
        output,
        trace_info,
        events,
        strpool,
        time_divisor=cfg.export.time_divisor,
        indent=cfg.export.indent,
    )
    console.print(f"[green]Written to:[/] {output} ({count:,} events)", highlight=False)


# === DEMO COMMAND ===

@app.command()
def demo(
    output: Path = typer.Argument(..., help="Capture file to write"),
    device_count: int = typer.Option(1, "--devices", min=0, help="Number of GPUs"),
    record_count: int = typer.Option(100, "--records", min=0, help="Records per GPU"),
    seed: int = typer.Option(42, "--seed"),
):
    """Write a synthetic capture."""
    try:
        file_data = write_demo_file(output, device_count, record_count, seed)
    except CodecError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    console.print(
        f"[green]Wrote[/] {output}: {file_data.device_count} devices, "
        f"{file_data.record_count:,} records",
        highlight=False,
    )


# === CONFIG COMMAND ===

@app.command("config")
def config_cmd(
    action: str = typer.Argument(..., help="Action: init|validate|dump"),
    path: Optional[Path] = typer.Argument(None, help="Config file path"),
):
    """Configuration management."""
    if action == "init":
        typer.echo(generate_default_config(), nl=False)

    elif action == "validate":
        if not path:
            err_console.print("[red]Path required for validate[/]")
            raise typer.Exit(1)
        try:
            cfg = NvtrcConfig.load(path)
        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            err_console.print(f"[red]Error:[/] {escape(str(e))}", highlight=False)
            raise typer.Exit(1)
        errors = cfg.validate()
        if errors:
            err_console.print("[red]Invalid configuration:[/]")
            for e in errors:
                err_console.print(f"  - {e}", highlight=False)
            raise typer.Exit(1)
        console.print(f"[green]Valid:[/] {path}", highlight=False)

    elif action == "dump":
        cfg = NvtrcConfig.load(path) if path else load_config()
        typer.echo(cfg.to_yaml(), nl=False)

    else:
        err_console.print(f"[red]Unknown action:[/] {action}")
        err_console.print("Valid actions: init, validate, dump")
        raise typer.Exit(1)


# === VERSION COMMAND ===

@app.command()
def version():
    """Show version information."""
    console.print(f"[bold blue]nvtrc v{__version__}[/]")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
