from enum import Enum
from typing import List, Optional


class TaskStatus(Enum):
    """
    Enum representing the possible status values of a task.
    """

    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"


class TaskError(Exception):
    """Exception raised for errors in the Task class."""

    pass


class Estimate:
    """
    A three-point effort estimate in days.

    The PERT estimate weights the expected value four times as heavily as
    the extremes. It is measured in days of effort, not calendar days.
    """

    def __init__(self, min: float = 0, max: float = 0, expected: float = 0):
        for label, value in (("min", min), ("max", max), ("expected", expected)):
            if not isinstance(value, (int, float)) or value < 0:
                raise TaskError(f"Estimate {label} must be a non-negative number")
        self.min = float(min)
        self.max = float(max)
        self.expected = float(expected)

    @property
    def pert(self) -> float:
        """Calculate an overall estimate using the PERT formula."""
        return (self.min + self.max + 4 * self.expected) / 6

    def __eq__(self, other):
        if not isinstance(other, Estimate):
            return NotImplemented
        return (self.min, self.max, self.expected) == (
            other.min,
            other.max,
            other.expected,
        )

    def __repr__(self):
        return f"Estimate(min={self.min}, max={self.max}, expected={self.expected})"


class Task:
    """
    Represents a task in a project's work breakdown structure.

    Owners are alternatives: any one of them may perform the task, but
    only one does. All dependencies must be complete before the task
    can start.
    """

    def __init__(
        self,
        id: str,
        summary: str = "",
        estimate: Optional[Estimate] = None,
        status: str = "not-started",
        owners: Optional[List[str]] = None,
        dependencies: Optional[List[str]] = None,
        description: str = "",
    ):
        """
        Initialize a new Task.

        Args:
            id: Unique identifier for the task within its project
            summary: Short description of the task
            estimate: Effort estimate, defaults to zero days
            status: One of "not-started", "in-progress" or "complete"
            owners: Person ids, any one of whom may perform the task
            dependencies: Task ids that must complete before this task starts
            description: Full task description

        Raises:
            TaskError: If any input validation fails
        """
        if not id or not isinstance(id, str):
            raise TaskError("Task ID must be a non-empty string")
        self.id = id

        self.summary = summary or ""
        self.description = description or ""

        if estimate is None:
            estimate = Estimate()
        elif not isinstance(estimate, Estimate):
            raise TaskError("Estimate must be an Estimate instance")
        self.estimate = estimate

        self._status = TaskStatus.NOT_STARTED
        self.status = status

        if owners is not None and not isinstance(owners, (list, tuple)):
            raise TaskError("Owners must be a list")
        self.owners = list(owners) if owners else []

        if dependencies is not None and not isinstance(dependencies, (list, tuple)):
            raise TaskError("Dependencies must be a list")
        self.dependencies = list(dependencies) if dependencies else []

    @property
    def status(self) -> str:
        """Get the current status of the task."""
        return self._status.value

    @status.setter
    def status(self, value: str):
        """Set the status of the task."""
        try:
            self._status = TaskStatus(value)
        except ValueError:
            valid_statuses = [s.value for s in TaskStatus]
            raise TaskError(f"Invalid status: {value}. Must be one of {valid_statuses}")

    @property
    def pert_estimate(self) -> float:
        return self.estimate.pert

    def is_complete(self) -> bool:
        return self._status is TaskStatus.COMPLETE

    def __repr__(self):
        return f"Task(id={self.id!r}, status={self.status!r}, estimate={self.pert_estimate:.2f})"
