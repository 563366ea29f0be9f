"""
Tests for the interactive session: the current-forest slot, command dispatch
and the scripted menu loop.
"""
import pytest

from pyforestry.exceptions import (
    ForestNotFoundError,
    ForestParseError,
    InvalidIndexError,
    NoCurrentForestError,
)
from pyforestry.forest import Forest
from pyforestry.session import SessionAction
from pyforestry.species import TreeSpecies
from pyforestry.tree import Tree


@pytest.fixture
def saved_north(north_forest, tmp_path):
    north_forest.save(tmp_path)
    return north_forest


@pytest.fixture
def saved_mixed(mixed_forest, tmp_path):
    mixed_forest.save(tmp_path)
    return mixed_forest


class TestCurrentForestSlot:
    """Loading replaces the current forest only on success."""

    def test_starts_empty(self, make_session):
        session, _ = make_session()
        assert session.current_forest is None

    def test_require_forest_without_forest(self, make_session):
        session, _ = make_session()
        with pytest.raises(NoCurrentForestError, match="grow"):
            session.require_forest("grow")

    def test_load_sets_current(self, make_session, saved_north):
        session, _ = make_session()
        forest = session.load("north")
        assert session.current_forest is forest
        assert forest.trees == saved_north.trees

    def test_failed_load_keeps_current(self, make_session, saved_north):
        session, _ = make_session()
        session.load("north")
        current = session.current_forest
        with pytest.raises(ForestNotFoundError):
            session.load("nowhere")
        assert session.current_forest is current

    def test_failed_parse_keeps_current(self, make_session, saved_north, tmp_path):
        (tmp_path / "broken.db").write_text("trees: nope\n")
        session, _ = make_session()
        session.load("north")
        current = session.current_forest
        with pytest.raises(ForestParseError):
            session.load("broken")
        assert session.current_forest is current

    def test_failed_load_with_no_forest(self, make_session):
        session, _ = make_session()
        with pytest.raises(ForestNotFoundError):
            session.load("nowhere")
        assert session.current_forest is None


class TestSessionOperations:
    """Session-level wrappers around forest operations."""

    def test_cut_valid(self, make_session, mixed_forest):
        session, _ = make_session()
        session.current_forest = mixed_forest
        session.cut(0)
        assert len(mixed_forest) == 4

    @pytest.mark.parametrize("index", [-1, 5])
    def test_cut_invalid(self, make_session, mixed_forest, index):
        session, _ = make_session()
        session.current_forest = mixed_forest
        with pytest.raises(InvalidIndexError) as exc_info:
            session.cut(index)
        assert exc_info.value.size == 5
        assert len(mixed_forest) == 5

    def test_cut_on_empty_forest(self, make_session, empty_forest):
        session, _ = make_session()
        session.current_forest = empty_forest
        with pytest.raises(InvalidIndexError, match="empty"):
            session.cut(0)

    def test_add_random_tree(self, make_session, empty_forest):
        session, _ = make_session()
        session.current_forest = empty_forest
        tree = session.add_random_tree()
        assert empty_forest.trees == [tree]
        assert 0.0 <= tree.height < 100.0

    def test_grow_and_reap(self, make_session, north_forest):
        session, _ = make_session()
        session.current_forest = north_forest
        session.grow()
        assert north_forest[0].height == 52.0
        removed = session.reap(51.0)
        assert len(removed) == 1
        assert len(north_forest) == 0

    def test_save(self, make_session, north_forest, tmp_path):
        session, _ = make_session()
        session.current_forest = north_forest
        assert session.save() == tmp_path / "north.db"

    @pytest.mark.parametrize("method, args", [
        ("add_random_tree", ()),
        ("cut", (0,)),
        ("grow", ()),
        ("reap", (1.0,)),
        ("save", ()),
    ])
    def test_operations_need_a_forest(self, make_session, method, args):
        session, _ = make_session()
        with pytest.raises(NoCurrentForestError):
            getattr(session, method)(*args)


class TestMenuCommands:
    """Single-letter commands run through execute()."""

    def test_print(self, make_session, mixed_forest):
        session, output = make_session()
        session.current_forest = mixed_forest
        assert session.execute("P") is SessionAction.CONTINUE
        text = output.getvalue()
        assert "Forest name: mixed" in text
        for line in mixed_forest.print_lines():
            assert line in text
        assert "There are 5 trees" in text

    def test_print_summary_table(self, make_session, mixed_forest):
        session, output = make_session()
        session.current_forest = mixed_forest
        session.execute("P")
        text = output.getvalue()
        assert "Forest Summary" in text
        assert "7.25 - 88.00" in text
        assert "Mean age (yr)" in text
        assert "SPRUCE" in text
        assert "OAK" not in text

    def test_print_empty_forest_has_no_table(self, make_session, empty_forest):
        session, output = make_session()
        session.current_forest = empty_forest
        session.execute("P")
        text = output.getvalue()
        assert "There are 0 trees" in text
        assert "Forest Summary" not in text

    def test_commands_are_case_insensitive(self, make_session, north_forest):
        session, _ = make_session()
        session.current_forest = north_forest
        session.execute("g")
        session.execute(" G ")
        assert north_forest[0].height == 54.0

    def test_add(self, make_session, north_forest):
        session, output = make_session()
        session.current_forest = north_forest
        session.execute("A")
        assert len(north_forest) == 2
        assert "New random tree added successfully!" in output.getvalue()

    def test_cut(self, make_session, mixed_forest):
        session, output = make_session("1\n")
        session.current_forest = mixed_forest
        session.execute("C")
        assert len(mixed_forest) == 4
        assert "Tree at index 1 cut down successfully!" in output.getvalue()

    def test_cut_reasks_until_integer(self, make_session, mixed_forest):
        session, output = make_session("abc\n2.5\n3\n")
        session.current_forest = mixed_forest
        session.execute("C")
        assert output.getvalue().count("Invalid input. Enter an integer.") == 2
        assert len(mixed_forest) == 4

    def test_cut_out_of_range_reports(self, make_session, mixed_forest):
        session, output = make_session("9\n")
        session.current_forest = mixed_forest
        assert session.execute("C") is SessionAction.CONTINUE
        assert "Invalid tree index 9" in output.getvalue()
        assert len(mixed_forest) == 5

    def test_reap(self, make_session, mixed_forest):
        session, output = make_session("oops\n40\n")
        session.current_forest = mixed_forest
        session.execute("R")
        assert "Invalid input. Enter a number." in output.getvalue()
        assert "1 tree(s) removed" in output.getvalue()
        assert len(mixed_forest) == 4

    def test_save(self, make_session, north_forest, tmp_path):
        session, output = make_session()
        session.current_forest = north_forest
        session.execute("S")
        assert (tmp_path / "north.db").exists()
        assert "Forest saved" in output.getvalue()

    def test_save_failure_is_reported(self, make_session, north_forest, tmp_path):
        session, output = make_session()
        session.directory = tmp_path / "missing"
        session.current_forest = north_forest
        assert session.execute("S") is SessionAction.CONTINUE
        assert "Failed to write forest file" in output.getvalue()

    def test_load_replaces_forest(self, make_session, saved_mixed, north_forest):
        session, output = make_session("mixed\n")
        session.current_forest = north_forest
        session.execute("L")
        assert session.current_forest.name == "mixed"
        assert "Forest loaded successfully!" in output.getvalue()

    def test_load_failure_retains_forest(self, make_session, north_forest):
        session, output = make_session("nowhere\n")
        session.current_forest = north_forest
        session.execute("L")
        assert session.current_forest is north_forest
        text = output.getvalue()
        assert "Forest file not found" in text
        assert "Old forest retained." in text

    def test_next_and_exit(self, make_session):
        session, _ = make_session()
        assert session.execute("N") is SessionAction.NEXT
        assert session.execute("x") is SessionAction.EXIT

    def test_invalid_option(self, make_session, north_forest):
        session, output = make_session()
        session.current_forest = north_forest
        assert session.execute("Q") is SessionAction.CONTINUE
        assert "Invalid menu option, try again" in output.getvalue()

    def test_command_without_forest_is_reported(self, make_session):
        session, output = make_session()
        assert session.execute("P") is SessionAction.CONTINUE
        assert "without a current forest" in output.getvalue()


class TestInteractiveLoop:
    """The menu loop driven by scripted input."""

    def test_loop_until_exit(self, make_session, north_forest):
        session, output = make_session("G\nP\nX\nP\n")
        session.current_forest = north_forest
        assert session.run_interactive() is SessionAction.EXIT
        text = output.getvalue()
        assert text.count("(P)rint, (A)dd, (C)ut") == 3
        assert "52.00" in text

    def test_loop_until_next(self, make_session, north_forest):
        session, _ = make_session("n\n")
        session.current_forest = north_forest
        assert session.run_interactive() is SessionAction.NEXT

    def test_end_of_input_exits(self, make_session, north_forest):
        session, _ = make_session("G\n")
        session.current_forest = north_forest
        assert session.run_interactive() is SessionAction.EXIT
        assert north_forest[0].height == 52.0

    def test_end_of_input_inside_prompt_exits(self, make_session, north_forest):
        session, _ = make_session("C\n")
        session.current_forest = north_forest
        assert session.run_interactive() is SessionAction.EXIT
        assert len(north_forest) == 1

    def test_north_scenario(self, make_session, saved_north, tmp_path):
        """Grow, add, cut, reap and save "north", then reload it."""
        session, _ = make_session("G\nA\nC\n0\nR\n-1\nS\nX\n")
        session.load("north")
        session.run_interactive()
        assert len(session.current_forest) == 0
        assert Forest.load("north", tmp_path).trees == []


class TestStartup:
    """run() walks the forests named on the command line."""

    def test_each_forest_in_turn(self, make_session, saved_north, saved_mixed):
        session, output = make_session("P\nN\nP\nN\n")
        session.run(["north", "mixed"])
        text = output.getvalue()
        assert "Initializing from north" in text
        assert "Initializing from mixed" in text
        assert "Forest name: north" in text
        assert "Forest name: mixed" in text
        assert session.current_forest is None

    def test_exit_stops_remaining_forests(self, make_session, saved_north, saved_mixed):
        session, output = make_session("X\n")
        session.run(["north", "mixed"])
        assert "Initializing from mixed" not in output.getvalue()

    def test_unloadable_forest_is_skipped(self, make_session, saved_mixed):
        session, output = make_session("P\nX\n")
        session.run(["nowhere", "mixed"])
        text = output.getvalue()
        assert "Forest file not found" in text
        assert "Forest name: mixed" in text

    def test_no_forests(self, make_session):
        session, output = make_session()
        session.run([])
        assert output.getvalue() == ""

    def test_changes_are_lost_without_save(self, make_session, tmp_path):
        Forest("west", [Tree(TreeSpecies.OAK, 2000, 5.0, 1.0)]).save(tmp_path)
        session, _ = make_session("G\nN\n")
        session.run(["west"])
        assert Forest.load("west", tmp_path)[0].height == 5.0
