"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .analyze import analyze_command
from .fetch import fetch_command
from .init import init_command
from .timeline import timeline_command

app = typer.Typer(
    name="cyberfeed",
    help="cyberfeed - Cybersecurity news aggregator",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("fetch")(fetch_command)
app.command("timeline")(timeline_command)
app.command("analyze")(analyze_command)


if __name__ == "__main__":
    app()
