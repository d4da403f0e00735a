import logging
import unittest

from crossfill.core.constants import Direction, PropagationMode, TraceEventKind
from crossfill.core.exceptions import SolverError
from crossfill.core.models import Variable
from crossfill.data.dictionary import WordDictionary
from crossfill.engine.domains import DomainStore
from crossfill.engine.grid import CrosswordGrid
from crossfill.engine.solver import CrosswordSolver, SolverConfig, solve
from crossfill.engine.trace import ListTraceSink, LoggingTraceSink
from crossfill.engine.validator import AssignmentValidator


T_SHAPE = ["???", ".?.", ".?."]
ACROSS = Variable(0, 0, Direction.ACROSS, 3)
DOWN = Variable(0, 1, Direction.DOWN, 3)

FULL_3X3 = ["???", "???", "???"]
# Rows ABC/DEF/GHI read down as ADG/BEH/CFI.
SQUARE_WORDS = ["ABC", "DEF", "GHI", "ADG", "BEH", "CFI", "ABD", "XYZ", "GEC"]

ALL_MODES = list(PropagationMode)


class SolveScenarioTests(unittest.TestCase):
    def test_single_slot(self) -> None:
        grid = CrosswordGrid.from_strings(["???"])
        for mode in ALL_MODES:
            with self.subTest(mode=mode):
                result = solve(grid, ["CAT", "DOG"], SolverConfig(propagation=mode))
                self.assertIsNotNone(result)
                assert result is not None
                self.assertIn(result[Variable(0, 0, Direction.ACROSS, 3)], {"CAT", "DOG"})

    def test_crossing_words_agree(self) -> None:
        grid = CrosswordGrid.from_strings(T_SHAPE)
        for mode in ALL_MODES:
            with self.subTest(mode=mode):
                result = solve(grid, ["cat", "arm"], SolverConfig(propagation=mode))
                self.assertEqual(result, {ACROSS: "CAT", DOWN: "ARM"})

    def test_crossing_without_shared_letter_has_no_solution(self) -> None:
        grid = CrosswordGrid.from_strings(T_SHAPE)
        for mode in ALL_MODES:
            with self.subTest(mode=mode):
                self.assertIsNone(solve(grid, ["CAT", "DOG"], SolverConfig(propagation=mode)))

    def test_middle_cross(self) -> None:
        grid = CrosswordGrid.from_strings([".?.", "???", ".?."])
        result = solve(grid, ["CAT", "BAD", "DOG"])
        self.assertIsNotNone(result)
        assert result is not None
        self.assertEqual(sorted(result.values()), ["BAD", "CAT"])
        self.assertIsNone(solve(grid, ["CAT", "DOG"]))

    def test_words_are_used_once(self) -> None:
        grid = CrosswordGrid.from_strings(["???", "...", "???"])
        self.assertIsNone(solve(grid, ["CAT"]))
        result = solve(grid, ["CAT", "DOG"])
        assert result is not None
        self.assertEqual(sorted(result.values()), ["CAT", "DOG"])

    def test_not_enough_distinct_words(self) -> None:
        grid = CrosswordGrid.from_strings(FULL_3X3)
        for mode in ALL_MODES:
            with self.subTest(mode=mode):
                self.assertIsNone(
                    solve(grid, ["ABC", "DEF", "GHI"], SolverConfig(propagation=mode))
                )

    def test_word_square(self) -> None:
        grid = CrosswordGrid.from_strings(FULL_3X3)
        validator = AssignmentValidator(grid, WordDictionary.from_words(SQUARE_WORDS))
        for mode in ALL_MODES:
            with self.subTest(mode=mode):
                result = solve(grid, SQUARE_WORDS, SolverConfig(propagation=mode))
                self.assertIsNotNone(result)
                assert result is not None
                self.assertTrue(validator.validate(result).ok)

    def test_repeated_solves_stay_valid(self) -> None:
        grid = CrosswordGrid.from_strings(FULL_3X3)
        solver = CrosswordSolver(grid, SQUARE_WORDS)
        validator = AssignmentValidator(grid)
        first = solver.solve()
        second = solver.solve()
        assert first.assignment is not None and second.assignment is not None
        self.assertTrue(validator.validate(first.assignment).ok)
        self.assertTrue(validator.validate(second.assignment).ok)

    def test_missing_length_means_no_solution(self) -> None:
        grid = CrosswordGrid.from_strings(["????"])
        result = CrosswordSolver(grid, ["CAT"]).solve()
        self.assertFalse(result.solved)
        self.assertEqual(result.stats.assignments_tried, 0)

    def test_grid_without_variables(self) -> None:
        grid = CrosswordGrid.from_strings(["?.?"])
        self.assertEqual(solve(grid, ["CAT"]), {})

    def test_accepts_word_dictionary(self) -> None:
        grid = CrosswordGrid.from_strings(T_SHAPE)
        dictionary = WordDictionary.from_words(["cat", "arm", "CAT"])
        self.assertEqual(solve(grid, dictionary), {ACROSS: "CAT", DOWN: "ARM"})


class HeuristicTests(unittest.TestCase):
    def test_mrv_prefers_smallest_domain(self) -> None:
        grid = CrosswordGrid.from_strings(["???.", "....", "????"])
        solver = CrosswordSolver(grid, ["AAA", "BBB", "CCCC"])
        self.assertEqual(solver.select_unassigned_variable({}), Variable(2, 0, Direction.ACROSS, 4))

    def test_degree_breaks_ties(self) -> None:
        grid = CrosswordGrid.from_strings(["???", ".?.", "???"])
        solver = CrosswordSolver(grid, ["ABC", "DEF"])
        self.assertEqual(solver.select_unassigned_variable({}), Variable(0, 1, Direction.DOWN, 3))

    def test_grid_order_breaks_remaining_ties(self) -> None:
        grid = CrosswordGrid.from_strings(["???", "...", "???"])
        solver = CrosswordSolver(grid, ["ABC", "DEF"])
        self.assertEqual(solver.select_unassigned_variable({}), grid.variables[0])
        self.assertEqual(
            solver.select_unassigned_variable({grid.variables[0]: "ABC"}), grid.variables[1]
        )

    def test_lcv_orders_least_constraining_first(self) -> None:
        grid = CrosswordGrid.from_strings(T_SHAPE)
        solver = CrosswordSolver(grid, [])
        solver.domains = DomainStore.from_domains(
            {ACROSS: ["DOG", "CAT"], DOWN: ["ARM", "AXE", "OAK"]}
        )
        # CAT rules out OAK only; DOG rules out ARM and AXE.
        self.assertEqual(solver.order_domain_values(ACROSS, {}), ["CAT", "DOG"])

    def test_lcv_ignores_assigned_neighbors(self) -> None:
        grid = CrosswordGrid.from_strings(T_SHAPE)
        solver = CrosswordSolver(grid, [])
        solver.domains = DomainStore.from_domains(
            {ACROSS: ["DOG", "CAT"], DOWN: ["ARM", "AXE", "OAK"]}
        )
        self.assertEqual(solver.order_domain_values(ACROSS, {DOWN: "ARM"}), ["CAT", "DOG"])

    def test_consistency_rules(self) -> None:
        grid = CrosswordGrid.from_strings(T_SHAPE)
        solver = CrosswordSolver(grid, [])
        self.assertTrue(solver.consistent(ACROSS, "CAT", {DOWN: "ARM"}))
        self.assertFalse(solver.consistent(ACROSS, "CATS", {}))
        self.assertFalse(solver.consistent(ACROSS, "DOG", {DOWN: "ARM"}))
        self.assertFalse(solver.consistent(ACROSS, "ARM", {DOWN: "ARM"}))


class BacktrackStateTests(unittest.TestCase):
    def test_failed_search_restores_domains(self) -> None:
        grid = CrosswordGrid.from_strings(FULL_3X3)
        words = ["ABC", "DEF", "GHI", "ADG", "BEH"]
        solver = CrosswordSolver(grid, words)
        before = solver.domains.snapshot()
        self.assertIsNone(solver.backtrack({}))
        self.assertEqual(solver.domains.snapshot(), before)

    def test_failed_solve_leaves_initial_domains(self) -> None:
        grid = CrosswordGrid.from_strings(T_SHAPE)
        solver = CrosswordSolver(grid, ["CAT", "DOG"])
        result = solver.solve()
        self.assertFalse(result.solved)
        self.assertGreater(result.stats.backtracks, 0)
        self.assertEqual(
            solver.domains.snapshot(), DomainStore(grid.variables, ["CAT", "DOG"]).snapshot()
        )

    def test_partial_assignment_is_not_modified(self) -> None:
        grid = CrosswordGrid.from_strings(FULL_3X3)
        solver = CrosswordSolver(grid, ["ABC", "DEF", "GHI"])
        assignment: dict = {}
        solver.backtrack(assignment)
        self.assertEqual(assignment, {})

    def test_assignment_limit(self) -> None:
        grid = CrosswordGrid.from_strings(FULL_3X3)
        solver = CrosswordSolver(grid, ["ABC", "DEF", "GHI"], SolverConfig(max_assignments=1))
        result = solver.solve()
        self.assertTrue(result.limit_reached)
        self.assertIsNone(result.assignment)


class TraceTests(unittest.TestCase):
    def test_events_follow_the_search(self) -> None:
        grid = CrosswordGrid.from_strings(T_SHAPE)
        trace = ListTraceSink()
        result = CrosswordSolver(grid, ["CAT", "ARM", "DOG"], trace=trace).solve()
        self.assertTrue(result.solved)
        self.assertEqual(trace.events[0].kind, TraceEventKind.TRY)
        self.assertEqual(trace.events[0].depth, 0)
        assigned = [(e.variable, e.word) for e in trace.events if e.kind == TraceEventKind.ASSIGN]
        self.assertIn((ACROSS, "CAT"), assigned)
        self.assertIn((DOWN, "ARM"), assigned)
        self.assertEqual(result.stats.assignments_tried, trace.count(TraceEventKind.TRY))

    def test_dead_ends_are_reported(self) -> None:
        grid = CrosswordGrid.from_strings(T_SHAPE)
        trace = ListTraceSink()
        CrosswordSolver(grid, ["CAT", "DOG"], trace=trace).solve()
        self.assertGreater(trace.count(TraceEventKind.PRUNED), 0)
        self.assertEqual(trace.count(TraceEventKind.ASSIGN), 0)
        self.assertTrue(any("Backtracking on variable" in line for line in trace.lines()))
        self.assertTrue(trace.lines()[0].startswith("Trying to assign word"))


class LoggingTraceSinkTests(unittest.TestCase):
    def test_events_are_logged_with_depth_indent(self) -> None:
        grid = CrosswordGrid.from_strings(T_SHAPE)
        logger = logging.getLogger("crossfill.tests.trace")
        sink = LoggingTraceSink(logger)
        with self.assertLogs(logger, level="DEBUG") as logs:
            result = CrosswordSolver(grid, ["CAT", "ARM", "DOG"], trace=sink).solve()
        self.assertTrue(result.solved)
        prefix = "DEBUG:crossfill.tests.trace:"
        self.assertEqual(
            logs.output,
            [
                prefix + "Trying to assign word 'CAT' to variable '0-0-across-3'",
                prefix + "Assigned word 'CAT' to variable '0-0-across-3'",
                prefix + "  Trying to assign word 'ARM' to variable '0-1-down-3'",
                prefix + "  Assigned word 'ARM' to variable '0-1-down-3'",
            ],
        )

    def test_respects_configured_level(self) -> None:
        grid = CrosswordGrid.from_strings(["???"])
        logger = logging.getLogger("crossfill.tests.trace.info")
        sink = LoggingTraceSink(logger, level=logging.INFO)
        with self.assertLogs(logger, level="INFO") as logs:
            CrosswordSolver(grid, ["CAT"], trace=sink).solve()
        self.assertTrue(all(line.startswith("INFO:") for line in logs.output))
        self.assertEqual(len(logs.output), 2)


class SolverConfigTests(unittest.TestCase):
    def test_accepts_string_values(self) -> None:
        config = SolverConfig(propagation="ac3", backend="backtracking")
        self.assertEqual(config.propagation, PropagationMode.AC3)

    def test_rejects_unknown_values(self) -> None:
        with self.assertRaises(SolverError):
            SolverConfig(propagation="magic")
        with self.assertRaises(SolverError):
            SolverConfig(max_assignments=0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
