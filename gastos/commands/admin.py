"""Admin commands for init and backup."""

import shutil
import sys
from datetime import datetime
from pathlib import Path

from rich.markup import escape

from gastos.commands.common import console, fail
from gastos.config import (
    build_backend,
    create_default_config,
    data_files,
    get_config_path,
    get_data_path,
    load_config,
)
from gastos.errors import GastosError


def backup_command(
    output_dir: str | None = None,
) -> None:
    """Backup data files and configuration."""
    config_path = get_config_path()
    try:
        config = load_config(config_path)
    except GastosError as e:
        fail(e)

    sources = [path for path in data_files(config) if path.exists()]
    if not sources:
        console.print("[red]No data found. Add an expense or run 'gastos init' first.[/red]", style="bold")
        sys.exit(1)

    # Determine backup directory
    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = get_data_path(config) / "backups"

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)

        for source in sources:
            target = backup_dir / f"{source.stem}_{timestamp}{source.suffix}"
            shutil.copy2(source, target)
            console.print(f"[green]✓[/green] Data backed up to: {escape(str(target))}")

        if config_path.exists():
            config_backup = backup_dir / f"config_{timestamp}.toml"
            shutil.copy2(config_path, config_backup)
            console.print(f"[green]✓[/green] Config backed up to: {escape(str(config_backup))}")

        console.print("\n[green]Backup complete![/green]", style="bold")
        console.print(f"[dim]Backup directory: {escape(str(backup_dir))}[/dim]")

    except OSError as e:
        console.print(f"[red]Backup failed: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def init_command(force: bool = False) -> None:
    """Initialize gastos configuration and data storage."""
    config_path = get_config_path()

    # Guard: refuse to overwrite without force flag
    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {escape(str(config_path))}")
        console.print("\n[yellow]Use 'gastos init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {escape(str(config_path))}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        config = load_config(config_path)
        build_backend(config)
        console.print(f"[green]✓[/green] Data storage ready ({config['backend']})")

    except GastosError as e:
        fail(e)
    except OSError as e:
        console.print(f"[red]Filesystem error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Data: {escape(str(get_data_path(config)))}[/dim]")
    console.print(f"[dim]Config: {escape(str(config_path))}[/dim]")
