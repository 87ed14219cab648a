class TaskExecution:
    """
    An edge in the checkpoint graph.

    Three kinds exist, told apart by which optional fields are set:
    a task execution has a task and a person, a person-wait edge has only
    a person, and a dependency-wait edge has neither.
    """

    def __init__(
        self,
        from_id,
        to_id,
        start_day,
        end_day,
        task_id=None,
        person_id=None,
        estimate=None,
        slack=None,
    ):
        self.from_id = from_id
        self.to_id = to_id
        self.start_day = start_day
        self.end_day = end_day
        self.task_id = task_id
        self.person_id = person_id
        self.estimate = estimate
        self.slack = slack

    @property
    def is_task(self):
        return self.task_id is not None

    @property
    def is_person_wait(self):
        return self.task_id is None and self.person_id is not None

    @property
    def is_dependency_wait(self):
        return self.task_id is None and self.person_id is None

    @property
    def kind(self):
        if self.is_task:
            return "task"
        if self.is_person_wait:
            return "person-wait"
        return "dependency-wait"

    def to_dict(self):
        data = {
            "from": self.from_id,
            "to": self.to_id,
            "startDay": self.start_day.isoformat(),
            "endDay": self.end_day.isoformat(),
        }
        if self.task_id is not None:
            data["taskId"] = self.task_id
        if self.person_id is not None:
            data["personId"] = self.person_id
        if self.estimate is not None:
            data["estimate"] = self.estimate
        if self.slack is not None:
            data["float"] = self.slack
        return data

    def __repr__(self):
        return f"TaskExecution({self.to_dict()!r})"


class Checkpoint:
    """
    A simulated point in time at which a set of tasks is known to be
    complete. Executions end at a checkpoint (incoming) or start from it
    (outgoing).
    """

    def __init__(self, id, day, completed_tasks=None):
        self.id = id
        self.day = day
        self.completed_tasks = list(completed_tasks) if completed_tasks else []
        self.incoming = []
        self.outgoing = []

    def has_completed(self, task_id):
        return task_id in self.completed_tasks

    def has_completed_all(self, task_ids):
        return all(task_id in self.completed_tasks for task_id in task_ids)

    def to_dict(self):
        return {
            "id": self.id,
            "day": self.day.isoformat(),
            "completedTasks": list(self.completed_tasks),
            "incoming": [execution.to_dict() for execution in self.incoming],
            "outgoing": [execution.to_dict() for execution in self.outgoing],
        }

    def __repr__(self):
        return (
            f"Checkpoint(id={self.id}, day={self.day.isoformat()}, "
            f"completed={self.completed_tasks!r})"
        )


class CheckpointGraph:
    """Time-ordered graph of checkpoints produced by a project simulation."""

    def __init__(self, checkpoints=None):
        self.checkpoints = list(checkpoints) if checkpoints else []

    def __len__(self):
        return len(self.checkpoints)

    def __iter__(self):
        return iter(self.checkpoints)

    def get_checkpoint(self, checkpoint_id):
        for checkpoint in self.checkpoints:
            if checkpoint.id == checkpoint_id:
                return checkpoint
        raise KeyError(f"Checkpoint {checkpoint_id} not found")

    @property
    def executions(self):
        """All edges of the graph, each listed once."""
        result = []
        for checkpoint in self.checkpoints:
            result.extend(checkpoint.outgoing)
        return result

    def task_executions(self):
        """Task execution edges, ordered by end day then task id."""
        return sorted(
            (execution for execution in self.executions if execution.is_task),
            key=lambda execution: (execution.end_day, execution.task_id),
        )

    def completion_days(self):
        """Map each completed task id to the day its execution ended."""
        return {
            execution.task_id: execution.end_day
            for execution in self.task_executions()
        }

    @property
    def final_day(self):
        if not self.checkpoints:
            return None
        return max(checkpoint.day for checkpoint in self.checkpoints)

    def to_dict(self):
        return {"checkpoints": [checkpoint.to_dict() for checkpoint in self.checkpoints]}
