"""
Interactive forestry session.

ForestrySession owns the single "current forest" slot and maps the
single-letter menu commands onto Forest operations. All user-facing text goes
through a rich Console; forest operations never prompt or print themselves.
"""
import random
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .forest import Forest
from .tree import Tree
from .tree_utils import generate_random_tree
from .exceptions import (
    ForestError,
    ForestryError,
    InvalidIndexError,
    NoCurrentForestError,
)
from .logging_config import get_logger

__all__ = ['ForestrySession', 'SessionAction', 'MENU_PROMPT']

MENU_PROMPT = "(P)rint, (A)dd, (C)ut, (G)row, (R)eap, (S)ave, (L)oad, (N)ext, e(X)it : "


class SessionAction(str, Enum):
    """What the interactive loop should do after a command."""
    CONTINUE = "continue"
    NEXT = "next"
    EXIT = "exit"


class ForestrySession:
    """Holds the current forest and runs menu commands against it.

    Attributes:
        current_forest: The forest commands operate on, or None
        console: Console used for all output
        directory: Directory forests are saved to and loaded from. None means
            the configured storage directory.
    """

    def __init__(self, console: Optional[Console] = None,
                 stream: Optional[TextIO] = None,
                 rng: Optional[random.Random] = None,
                 directory: Optional[Path] = None):
        """Initialize a session with no current forest.

        Args:
            console: Output console. Defaults to a new rich Console.
            stream: Text stream to read answers from. Defaults to the console's
                interactive input.
            rng: Random source for added trees.
            directory: Storage directory override.
        """
        self.current_forest: Optional[Forest] = None
        self.console = console if console is not None else Console()
        self.stream = stream
        self.rng = rng if rng is not None else random.Random()
        self.directory = directory
        self.logger = get_logger(__name__)

        self._commands: Dict[str, Callable[[], SessionAction]] = {
            'P': self._print_command,
            'A': self._add_command,
            'C': self._cut_command,
            'G': self._grow_command,
            'R': self._reap_command,
            'S': self._save_command,
            'L': self._load_command,
            'N': lambda: SessionAction.NEXT,
            'X': lambda: SessionAction.EXIT,
        }

    # =========================================================================
    # Forest operations
    # =========================================================================

    def require_forest(self, operation: str) -> Forest:
        """Return the current forest.

        Raises:
            NoCurrentForestError: If no forest is loaded
        """
        if self.current_forest is None:
            raise NoCurrentForestError(operation)
        return self.current_forest

    def load(self, name: str) -> Forest:
        """Load a forest and make it current.

        The current forest is replaced only if the load succeeds; on any
        error it is left exactly as it was and the error propagates.
        """
        forest = Forest.load(name, self.directory)
        self.current_forest = forest
        return forest

    def add_random_tree(self) -> Tree:
        """Add a randomly generated tree to the current forest."""
        forest = self.require_forest("add")
        tree = generate_random_tree(self.rng)
        forest.add_tree(tree)
        return tree

    def cut(self, index: int) -> None:
        """Cut down the tree at ``index`` in the current forest.

        Raises:
            InvalidIndexError: If ``index`` is outside the forest
        """
        forest = self.require_forest("cut")
        if not 0 <= index < len(forest):
            raise InvalidIndexError(index, len(forest))
        if not forest.cut_tree(index):
            raise ForestError(f"Failed to cut down tree at index {index}.")

    def grow(self, years: int = 1) -> None:
        self.require_forest("grow").grow(years)

    def reap(self, height_threshold: float) -> List[Tree]:
        return self.require_forest("reap").reap(height_threshold)

    def save(self) -> Path:
        return self.require_forest("save").save(self.directory)

    # =========================================================================
    # Input handling
    # =========================================================================

    def _ask(self, prompt: str) -> str:
        """Read one line of input.

        Raises:
            EOFError: When input is exhausted
        """
        if self.stream is None:
            return self.console.input(prompt)
        self.console.print(prompt, end="", markup=False, highlight=False)
        line = self.stream.readline()
        if not line:
            raise EOFError
        return line.rstrip("\r\n")

    def _ask_int(self, prompt: str) -> int:
        """Ask until the answer parses as an integer."""
        while True:
            answer = self._ask(prompt).strip()
            try:
                return int(answer)
            except ValueError:
                self.console.print("Invalid input. Enter an integer.")

    def _ask_float(self, prompt: str) -> float:
        """Ask until the answer parses as a number."""
        while True:
            answer = self._ask(prompt).strip()
            try:
                return float(answer)
            except ValueError:
                self.console.print("Invalid input. Enter a number.")

    # =========================================================================
    # Menu commands
    # =========================================================================

    def _print_command(self) -> SessionAction:
        forest = self.require_forest("print")
        self.console.print(f"Forest name: [bold]{escape(forest.name)}[/bold]")
        for line in forest.print_lines():
            self.console.print(line, markup=False, highlight=False)
        metrics = forest.get_metrics()
        self.console.print(
            f"There are {metrics['tree_count']} trees, "
            f"with an average height of {metrics['mean_height']:.2f} ft"
        )
        if metrics['tree_count']:
            self.console.print(self._summary_table(metrics))
        return SessionAction.CONTINUE

    @staticmethod
    def _summary_table(metrics: Dict[str, Any]) -> Table:
        table = Table(title="Forest Summary", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Height range (ft)",
                      f"{metrics['min_height']:.2f} - {metrics['max_height']:.2f}")
        table.add_row("Mean growth rate (ft/yr)", f"{metrics['mean_growth_rate']:.2f}")
        table.add_row("Mean age (yr)", f"{metrics['mean_age']:.1f}")
        for species, count in metrics['species_counts'].items():
            if count:
                table.add_row(species, str(count))
        return table

    def _add_command(self) -> SessionAction:
        self.add_random_tree()
        self.console.print("New random tree added successfully!")
        return SessionAction.CONTINUE

    def _cut_command(self) -> SessionAction:
        self.require_forest("cut")
        index = self._ask_int("Index of tree to cut down? ")
        self.cut(index)
        self.console.print(f"Tree at index {index} cut down successfully!")
        return SessionAction.CONTINUE

    def _grow_command(self) -> SessionAction:
        self.grow()
        self.console.print("Forest grew one year.")
        return SessionAction.CONTINUE

    def _reap_command(self) -> SessionAction:
        self.require_forest("reap")
        threshold = self._ask_float("Enter the height threshold for reaping: ")
        removed = self.reap(threshold)
        self.console.print(f"Forest reaped successfully! {len(removed)} tree(s) removed.")
        return SessionAction.CONTINUE

    def _save_command(self) -> SessionAction:
        path = self.save()
        self.console.print(f"Forest saved to {escape(str(path))}")
        return SessionAction.CONTINUE

    def _load_command(self) -> SessionAction:
        name = self._ask("Enter the name of the forest to load: ").strip()
        try:
            self.load(name)
        except ForestryError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
            self.console.print("Old forest retained.")
            return SessionAction.CONTINUE
        self.console.print("Forest loaded successfully!")
        return SessionAction.CONTINUE

    def execute(self, choice: str) -> SessionAction:
        """Run one menu command.

        Errors raised by forest operations are reported on the console and
        leave the session state as it was.

        Args:
            choice: Menu letter (case-insensitive)

        Returns:
            The action the interactive loop should take next
        """
        command = self._commands.get(choice.strip().upper())
        if command is None:
            self.console.print("Invalid menu option, try again")
            return SessionAction.CONTINUE

        try:
            return command()
        except ForestryError as e:
            self.logger.debug(f"Command {choice!r} failed: {e}")
            self.console.print(f"[red]{escape(str(e))}[/red]")
            return SessionAction.CONTINUE

    def run_interactive(self) -> SessionAction:
        """Run the menu loop until the user asks for the next forest or exits.

        Returns:
            SessionAction.NEXT or SessionAction.EXIT. Exhausted input counts
            as EXIT.
        """
        while True:
            try:
                choice = self._ask(MENU_PROMPT)
                action = self.execute(choice)
            except EOFError:
                self.console.print()
                return SessionAction.EXIT
            if action is not SessionAction.CONTINUE:
                return action

    def run(self, forest_names: List[str]) -> None:
        """Load each named forest in turn and run an interactive loop on it.

        Forests that fail to load are reported and skipped.
        """
        for name in forest_names:
            self.console.print(f"Initializing from {escape(name)}")
            try:
                self.load(name)
            except ForestryError as e:
                self.console.print(f"[red]{escape(str(e))}[/red]")
                continue

            action = self.run_interactive()
            self.current_forest = None
            if action is SessionAction.EXIT:
                break
