"""
Command-line entry point for pyforestry.

Usage:
    pyforestry north south

Each named forest is loaded in turn and explored through the interactive
menu. (N)ext moves to the following forest; e(X)it ends the program.
"""
import argparse
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from .config_loader import get_config_loader
from .exceptions import ConfigurationError
from .logging_config import setup_logging
from .session import ForestrySession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyforestry",
        description="Forestry Simulation - grow, cut and reap saved forests",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pyforestry north              # Explore the forest saved in north.db
  pyforestry north south        # Explore north, then south
        """
    )
    parser.add_argument(
        "forests",
        nargs="*",
        metavar="FOREST",
        help="Names of saved forests to load, in order"
    )
    return parser


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    """Main entry point for the forestry simulation."""
    args = build_parser().parse_args(argv)
    console = console if console is not None else Console()

    try:
        loader = get_config_loader()
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {escape(str(e))}")
        return 1
    setup_logging(loader.log_level)

    console.print("[bold green]Welcome to the Forestry Simulation[/bold green]")
    console.print("----------------------------------")

    session = ForestrySession(console=console)
    try:
        session.run(args.forests)
    except KeyboardInterrupt:
        console.print()

    console.print("Exiting the Forestry Simulation")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
