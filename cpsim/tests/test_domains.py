import unittest
from datetime import date

from cpsim.domain.checkpoint import Checkpoint, CheckpointGraph, TaskExecution
from cpsim.domain.person import Availability, Person, PersonError
from cpsim.domain.project import Project
from cpsim.domain.task import Estimate, Task, TaskError


class EstimateTestCase(unittest.TestCase):
    def test_pert_formula(self):
        self.assertEqual(Estimate(5, 5, 5).pert, 5)
        self.assertAlmostEqual(Estimate(1, 7, 4).pert, 4.0)
        self.assertAlmostEqual(Estimate(1, 2, 1.5).pert, 1.5)
        self.assertEqual(Estimate().pert, 0)

    def test_pert_is_monotonic(self):
        base = Estimate(2, 6, 3).pert
        self.assertGreater(Estimate(3, 6, 3).pert, base)
        self.assertGreater(Estimate(2, 7, 3).pert, base)
        self.assertGreater(Estimate(2, 6, 4).pert, base)
        self.assertEqual(Estimate(2, 6, 3).pert, base)

    def test_negative_values_rejected(self):
        with self.assertRaises(TaskError):
            Estimate(-1, 2, 1)
        with self.assertRaises(TaskError):
            Estimate(1, 2, "three")


class TaskTestCase(unittest.TestCase):
    def test_defaults(self):
        task = Task("t1")
        self.assertEqual(task.status, "not-started")
        self.assertEqual(task.owners, [])
        self.assertEqual(task.dependencies, [])
        self.assertEqual(task.pert_estimate, 0)
        self.assertFalse(task.is_complete())

    def test_validation(self):
        with self.assertRaises(TaskError):
            Task("")
        with self.assertRaises(TaskError):
            Task(None)
        with self.assertRaises(TaskError):
            Task("t1", status="done")
        with self.assertRaises(TaskError):
            Task("t1", owners="alice")
        with self.assertRaises(TaskError):
            Task("t1", dependencies="t0")
        with self.assertRaises(TaskError):
            Task("t1", estimate=5)

    def test_status_transitions(self):
        task = Task("t1", estimate=Estimate(1, 1, 1))
        task.status = "in-progress"
        self.assertEqual(task.status, "in-progress")
        task.status = "complete"
        self.assertTrue(task.is_complete())

    def test_lists_are_copied(self):
        owners = ["alice"]
        task = Task("t1", owners=owners)
        owners.append("bob")
        self.assertEqual(task.owners, ["alice"])


class PersonTestCase(unittest.TestCase):
    def test_hours_on_uses_first_matching_window(self):
        person = (
            Person("alice")
            .add_availability(date(2025, 1, 1), date(2025, 1, 31), 4)
            .add_availability(date(2025, 1, 1), date(2025, 12, 31), 8)
        )
        self.assertEqual(person.hours_on(date(2025, 1, 15)), 4)
        self.assertEqual(person.hours_on(date(2025, 2, 1)), 8)

    def test_window_bounds_are_inclusive(self):
        person = Person("bob").add_availability(date(2025, 3, 1), date(2025, 3, 10), 6)
        self.assertEqual(person.hours_on(date(2025, 3, 1)), 6)
        self.assertEqual(person.hours_on(date(2025, 3, 10)), 6)
        self.assertEqual(person.hours_on(date(2025, 2, 28)), 0)
        self.assertEqual(person.hours_on(date(2025, 3, 11)), 0)

    def test_no_availability(self):
        self.assertEqual(Person("carol").hours_on(date(2025, 1, 1)), 0)

    def test_invalid_windows(self):
        with self.assertRaises(PersonError):
            Availability(date(2025, 2, 1), date(2025, 1, 1), 8)
        with self.assertRaises(PersonError):
            Availability(date(2025, 1, 1), date(2025, 2, 1), -1)
        with self.assertRaises(PersonError):
            Availability("2025-01-01", date(2025, 2, 1), 8)
        with self.assertRaises(PersonError):
            Person("")


class ProjectTestCase(unittest.TestCase):
    def test_add_people_and_tasks(self):
        project = Project(date(2025, 1, 1))
        project.add_person(Person("alice")).add_task(Task("t1")).add_task(Task("t2"))
        self.assertEqual(project.person_ids, ["alice"])
        self.assertEqual(project.task_ids, ["t1", "t2"])

    def test_start_date_required(self):
        with self.assertRaises(ValueError):
            Project("2025-01-01")


class CheckpointGraphTestCase(unittest.TestCase):
    def setUp(self):
        start = Checkpoint(0, date(2025, 1, 1))
        done = Checkpoint(1, date(2025, 1, 3), ["t1"])
        waited = Checkpoint(2, date(2025, 1, 3), ["t1"])

        work = TaskExecution(
            0, 1, start.day, done.day, task_id="t1", person_id="alice", estimate=2, slack=0
        )
        person_wait = TaskExecution(0, 2, start.day, done.day, person_id="bob")
        dependency_wait = TaskExecution(1, 2, done.day, done.day)

        start.outgoing.extend([work, person_wait])
        done.incoming.append(work)
        done.outgoing.append(dependency_wait)
        waited.incoming.extend([person_wait, dependency_wait])

        self.work = work
        self.person_wait = person_wait
        self.dependency_wait = dependency_wait
        self.graph = CheckpointGraph([start, done, waited])

    def test_execution_kinds(self):
        self.assertEqual(self.work.kind, "task")
        self.assertEqual(self.person_wait.kind, "person-wait")
        self.assertEqual(self.dependency_wait.kind, "dependency-wait")

    def test_queries(self):
        self.assertEqual(len(self.graph), 3)
        self.assertEqual(len(self.graph.executions), 3)
        self.assertEqual(self.graph.task_executions(), [self.work])
        self.assertEqual(self.graph.completion_days(), {"t1": date(2025, 1, 3)})
        self.assertEqual(self.graph.final_day, date(2025, 1, 3))
        self.assertIs(self.graph.get_checkpoint(2).incoming[1], self.dependency_wait)
        with self.assertRaises(KeyError):
            self.graph.get_checkpoint(42)

    def test_to_dict(self):
        data = self.graph.to_dict()
        self.assertEqual(data["checkpoints"][0]["day"], "2025-01-01")
        self.assertEqual(
            data["checkpoints"][1]["incoming"][0],
            {
                "from": 0,
                "to": 1,
                "startDay": "2025-01-01",
                "endDay": "2025-01-03",
                "taskId": "t1",
                "personId": "alice",
                "estimate": 2,
                "float": 0,
            },
        )
        self.assertNotIn("personId", data["checkpoints"][1]["outgoing"][0])


if __name__ == "__main__":
    unittest.main()
