import logging

from cpsim.domain.checkpoint import Checkpoint, CheckpointGraph, TaskExecution
from cpsim.services.optimizer import optimize_checkpoints
from cpsim.utils.days import CalendarError, next_work_day
from cpsim.utils.graph import calculate_floats

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 1000
MAX_DAY_LOOKUPS = 100
MAX_WAIT_STEPS = 100
HOURS_PER_DAY = 8


class SimulationError(RuntimeError):
    """Exception raised when a simulation cannot schedule every task."""

    def __init__(self, message, unscheduled_tasks=None, iterations=0):
        super().__init__(message)
        self.unscheduled_tasks = list(unscheduled_tasks or [])
        self.iterations = iterations


class SimulationState:
    """Mutable bookkeeping for a single simulation run."""

    def __init__(self, project, floats):
        self.checkpoints = [Checkpoint(0, project.start_date)]
        self.person_checkpoints = {
            person_id: self.checkpoints[0] for person_id in project.people
        }
        self.task_checkpoints = {task_id: [] for task_id in project.tasks}
        self.incomplete_tasks = list(project.tasks)
        self.floats = floats

    def new_checkpoint(self, day, completed_tasks):
        checkpoint = Checkpoint(len(self.checkpoints), day, completed_tasks)
        self.checkpoints.append(checkpoint)
        return checkpoint

    def record_completions(self, checkpoint):
        for task_id in checkpoint.completed_tasks:
            self.task_checkpoints[task_id].append(checkpoint)

    def sorted_incomplete_tasks(self):
        return sorted(self.incomplete_tasks, key=lambda task_id: self.floats[task_id])


class ProjectSimulation:
    """
    Greedy resource-constrained simulation of a project.

    Tasks are taken lowest float first and handed to whichever free
    owner would finish them earliest. When nothing can start, the owner
    of the most urgent ready task waits for its dependencies, producing a
    new checkpoint. Floats are calculated once up front and are not
    re-evaluated as tasks complete, so this approximates keeping the
    critical path on time rather than levelling resources exactly.
    """

    def __init__(
        self,
        project,
        work_day_classifier,
        max_iterations=MAX_ITERATIONS,
        max_day_lookups=MAX_DAY_LOOKUPS,
        hours_per_day=HOURS_PER_DAY,
    ):
        self.project = project
        self.work_day_classifier = work_day_classifier
        self.max_iterations = max_iterations
        self.max_day_lookups = max_day_lookups
        self.hours_per_day = hours_per_day
        self.person_ids = list(project.people)
        self.task_ids = list(project.tasks)

    def run(self, optimize=True):
        """
        Simulate the project.

        Args:
            optimize: Remove redundant wait checkpoints from the result

        Returns:
            CheckpointGraph: Checkpoint 0 is the project start date

        Raises:
            InvalidProjectGraphError: If the dependencies are not a DAG
            SimulationError: If some task can never be scheduled
        """
        floats = calculate_floats(self.project.tasks)
        state = SimulationState(self.project, floats)

        iterations = 0
        while state.incomplete_tasks:
            if iterations >= self.max_iterations:
                raise SimulationError(
                    f"Simulation did not finish within {self.max_iterations} iterations; "
                    f"unscheduled tasks: {', '.join(state.incomplete_tasks)}",
                    state.incomplete_tasks,
                    iterations,
                )
            iterations += 1

            sorted_tasks = state.sorted_incomplete_tasks()
            if self.advance_next_task(sorted_tasks, state):
                continue
            if not self.wait_for_dependencies(sorted_tasks, state):
                raise SimulationError(
                    "No task can be advanced and no owner can wait for a dependency; "
                    f"unscheduled tasks: {', '.join(state.incomplete_tasks)}",
                    state.incomplete_tasks,
                    iterations,
                )

        logger.info(
            "Simulated %d tasks in %d iterations, %d checkpoints",
            len(self.task_ids),
            iterations,
            len(state.checkpoints),
        )
        graph = CheckpointGraph(state.checkpoints)
        if optimize:
            return optimize_checkpoints(graph)
        return graph

    def advance_next_task(self, sorted_tasks, state):
        """Start and finish the most urgent task that has a free owner."""
        for task_id in sorted_tasks:
            task = self.project.tasks[task_id]
            for checkpoint in state.checkpoints:
                if not checkpoint.has_completed_all(task.dependencies):
                    continue

                free_people = [
                    person_id
                    for person_id in self.person_ids
                    if state.person_checkpoints[person_id] is checkpoint
                ]
                outcome = self.simulate_task(task_id, checkpoint.day, free_people)
                if outcome is None:
                    continue

                person_id, end_day = outcome
                new_checkpoint = state.new_checkpoint(
                    end_day, checkpoint.completed_tasks + [task_id]
                )
                execution = TaskExecution(
                    checkpoint.id,
                    new_checkpoint.id,
                    checkpoint.day,
                    end_day,
                    task_id=task_id,
                    person_id=person_id,
                    estimate=task.pert_estimate,
                    slack=state.floats[task_id],
                )
                new_checkpoint.incoming.append(execution)
                checkpoint.outgoing.append(execution)
                state.person_checkpoints[person_id] = new_checkpoint
                state.record_completions(new_checkpoint)
                state.incomplete_tasks.remove(task_id)

                logger.debug(
                    "%s works %s from %s to %s (checkpoint %d -> %d)",
                    person_id,
                    task_id,
                    checkpoint.day,
                    end_day,
                    checkpoint.id,
                    new_checkpoint.id,
                )
                return True
        return False

    def wait_for_dependencies(self, sorted_tasks, state):
        """
        Move the earliest-available owner of the most urgent ready task
        forward until every dependency of that task is known complete.
        """
        for task_id in sorted_tasks:
            task = self.project.tasks[task_id]
            if not all(state.task_checkpoints[dep_id] for dep_id in task.dependencies):
                continue

            owners = [owner for owner in task.owners if owner in state.person_checkpoints]
            if not owners:
                continue
            owner = min(owners, key=lambda person_id: state.person_checkpoints[person_id].day)
            origin = state.person_checkpoints[owner]

            new_checkpoint = state.new_checkpoint(origin.day, origin.completed_tasks)
            wait = TaskExecution(
                origin.id, new_checkpoint.id, origin.day, origin.day, person_id=owner
            )
            new_checkpoint.incoming.append(wait)
            origin.outgoing.append(wait)
            state.person_checkpoints[owner] = new_checkpoint

            steps = 0
            missing = self._missing_dependencies(task, new_checkpoint)
            while missing:
                if steps >= MAX_WAIT_STEPS:
                    raise SimulationError(
                        f"Could not gather dependencies of {task_id}: {', '.join(missing)}",
                        state.incomplete_tasks,
                    )
                steps += 1

                source = state.task_checkpoints[missing[0]][0]
                earliest_day, latest_day = sorted((new_checkpoint.day, source.day))
                dependency_wait = TaskExecution(
                    source.id, new_checkpoint.id, earliest_day, latest_day
                )
                new_checkpoint.day = latest_day
                new_checkpoint.incoming.append(dependency_wait)
                new_checkpoint.completed_tasks.extend(
                    completed
                    for completed in source.completed_tasks
                    if completed not in new_checkpoint.completed_tasks
                )
                source.outgoing.append(dependency_wait)
                missing = self._missing_dependencies(task, new_checkpoint)

            wait.end_day = new_checkpoint.day
            state.record_completions(new_checkpoint)

            logger.debug(
                "%s waits for dependencies of %s until %s (checkpoint %d -> %d)",
                owner,
                task_id,
                new_checkpoint.day,
                origin.id,
                new_checkpoint.id,
            )
            return True
        return False

    @staticmethod
    def _missing_dependencies(task, checkpoint):
        return [dep_id for dep_id in task.dependencies if not checkpoint.has_completed(dep_id)]

    def simulate_task(self, task_id, start_day, free_people):
        """
        Pick the free owner who would finish the task soonest.

        Owners are tried in declaration order, so the first one wins a
        tie on finish day.

        Returns:
            tuple: (person_id, end_day), or None if no free owner can finish
        """
        best = None
        for owner in self.project.tasks[task_id].owners:
            if owner not in free_people:
                continue
            finish_day = self.calculate_finish_date(task_id, owner, start_day)
            if finish_day is not None and (best is None or finish_day < best[1]):
                best = (owner, finish_day)
        return best

    def calculate_finish_date(self, task_id, person_id, start_day):
        """
        Burn up a task's PERT estimate against a person's availability.

        Each working day contributes hours available / hours per day of
        effort. The returned day is the first working day after the last
        day of effort, i.e. the earliest day a successor could start.

        Returns:
            date: The finish day, or None if the estimate is not reached
                within the lookup limit
        """
        estimate = self.project.tasks[task_id].pert_estimate
        person = self.project.people[person_id]

        end_day = start_day
        burn_up = 0.0
        lookups = 0
        while burn_up < estimate and lookups < self.max_day_lookups:
            if self.work_day_classifier(end_day):
                burn_up += person.hours_on(end_day) / self.hours_per_day
            try:
                end_day = next_work_day(end_day, self.work_day_classifier)
            except CalendarError as e:
                raise SimulationError(
                    f"Cannot schedule {task_id} for {person_id}: {e}", [task_id]
                ) from e
            lookups += 1

        if burn_up >= estimate:
            return end_day
        return None


def simulate(project, work_day_classifier, optimize=True):
    """Run a resource-constrained simulation and return its checkpoint graph."""
    return ProjectSimulation(project, work_day_classifier).run(optimize=optimize)
