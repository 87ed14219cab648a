import unittest

from cpsim.domain.task import Estimate, Task
from cpsim.utils.graph import (
    InvalidProjectGraphError,
    build_dependency_graph,
    calculate_floats,
    find_all_paths,
    find_critical_path,
    round_half_up,
)


def make_tasks(*specs):
    """Build a task dict from (id, days, dependencies) tuples."""
    return {
        task_id: Task(task_id, estimate=Estimate(days, days, days), dependencies=deps)
        for task_id, days, deps in specs
    }


class DependencyGraphTestCase(unittest.TestCase):
    def test_edges_run_from_dependency_to_dependent(self):
        tasks = make_tasks(("a", 1, []), ("b", 2, ["a"]))
        graph = build_dependency_graph(tasks)
        self.assertTrue(graph.has_edge("a", "b"))
        self.assertEqual(graph.nodes["b"]["estimate"], 2)

    def test_cycle_is_rejected(self):
        tasks = make_tasks(("a", 1, ["c"]), ("b", 1, ["a"]), ("c", 1, ["b"]))
        with self.assertRaises(InvalidProjectGraphError):
            build_dependency_graph(tasks)

    def test_self_dependency_is_rejected(self):
        with self.assertRaises(InvalidProjectGraphError):
            build_dependency_graph(make_tasks(("a", 1, ["a"])))

    def test_unknown_dependency_is_rejected(self):
        with self.assertRaises(InvalidProjectGraphError) as ctx:
            build_dependency_graph(make_tasks(("a", 1, ["ghost"])))
        self.assertIn("ghost", str(ctx.exception))

    def test_invalid_graph_error_is_a_value_error(self):
        self.assertTrue(issubclass(InvalidProjectGraphError, ValueError))


class FloatTestCase(unittest.TestCase):
    def test_diamond(self):
        tasks = make_tasks(
            ("a", 2, []),
            ("b", 3, []),
            ("c", 3, ["a", "b"]),
        )
        self.assertEqual(calculate_floats(tasks), {"a": 1, "b": 0, "c": 0})

    def test_chain_has_no_float(self):
        tasks = make_tasks(("a", 1, []), ("b", 2, ["a"]), ("c", 3, ["b"]))
        self.assertEqual(calculate_floats(tasks), {"a": 0, "b": 0, "c": 0})

    def test_independent_tasks(self):
        tasks = make_tasks(("short", 1, []), ("long", 5, []))
        self.assertEqual(calculate_floats(tasks), {"short": 4, "long": 0})

    def test_floats_are_non_negative_with_a_critical_task(self):
        tasks = make_tasks(
            ("a", 1.5, []),
            ("b", 2.25, ["a"]),
            ("c", 0.75, ["a"]),
            ("d", 4, []),
            ("e", 1, ["b", "c", "d"]),
            ("f", 0.5, ["c"]),
        )
        floats = calculate_floats(tasks)
        self.assertEqual(set(floats), set(tasks))
        self.assertTrue(all(value >= 0 for value in floats.values()))
        self.assertIn(0, floats.values())

    def test_rounding_half_up(self):
        # a has 0.5 days of float
        tasks = make_tasks(("a", 0.5, []), ("b", 1, []))
        self.assertEqual(calculate_floats(tasks)["a"], 1)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(-1e-12), 0)

    def test_empty(self):
        self.assertEqual(calculate_floats({}), {})

    def test_cycle_is_fatal(self):
        with self.assertRaises(InvalidProjectGraphError):
            calculate_floats(make_tasks(("a", 1, ["b"]), ("b", 1, ["a"])))


class CriticalPathTestCase(unittest.TestCase):
    def test_all_paths(self):
        tasks = make_tasks(
            ("a", 1, []),
            ("b", 1, ["a"]),
            ("c", 1, ["a"]),
            ("d", 1, ["b", "c"]),
            ("e", 1, []),
        )
        paths = find_all_paths(build_dependency_graph(tasks))
        self.assertEqual(paths, [["a", "b", "d"], ["a", "c", "d"], ["e"]])

    def test_longest_branch_wins(self):
        tasks = make_tasks(
            ("a", 2, []),
            ("b", 3, []),
            ("c", 3, ["a", "b"]),
        )
        self.assertEqual(find_critical_path(tasks), ["b", "c"])

    def test_first_path_wins_a_tie(self):
        tasks = make_tasks(("a", 2, []), ("b", 2, []))
        self.assertEqual(find_critical_path(tasks), ["a"])

    def test_zero_estimates_give_empty_path(self):
        tasks = make_tasks(("a", 0, []), ("b", 0, ["a"]))
        self.assertEqual(find_critical_path(tasks), [])

    def test_empty(self):
        self.assertEqual(find_critical_path({}), [])

    def test_deep_chain_does_not_recurse(self):
        specs = [("t0", 1, [])] + [(f"t{i}", 1, [f"t{i - 1}"]) for i in range(1, 3000)]
        path = find_critical_path(make_tasks(*specs))
        self.assertEqual(len(path), 3000)
        self.assertEqual(path[0], "t0")
        self.assertEqual(path[-1], "t2999")


if __name__ == "__main__":
    unittest.main()
