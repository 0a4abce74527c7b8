"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, save_config
from ..config.loader import DEFAULT_CONFIG_PATH

console = Console()


def init_command(
    config_dir: Path = typer.Option(
        DEFAULT_CONFIG_PATH.parent,
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    language: str = typer.Option("en", "--language", "-l", help="Display language (en, ar)"),
    page_size: int = typer.Option(10, "--page-size", help="Items per page", min=1, max=100),
    timeout: float = typer.Option(6.0, "--timeout", help="Per-strategy timeout in seconds"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Write a default cyberfeed configuration."""
    console.print(Panel.fit("🛡️ cyberfeed - Initialization", style="bold blue"))

    config_path = config_dir / "config.yaml"
    if config_path.exists() and not force:
        console.print(f"[red]Config already exists: {config_path} (use --force to overwrite)[/red]")
        raise typer.Exit(1)

    try:
        config = ConfigModel(
            transport={"timeout": timeout},
            display={"language": language, "page_size": page_size},
        )
    except ValueError as e:
        console.print(f"[red]❌ Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    console.print(
        Panel(
            f"[green]✅ cyberfeed initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n\n"
            f"Next steps:\n"
            f"1. Optional, for analysis and translation: [bold]export OPENAI_API_KEY=your_key[/bold]\n"
            f"2. Run: [bold]cyberfeed fetch[/bold]",
            style="green",
        )
    )
