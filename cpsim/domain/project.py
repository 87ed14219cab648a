from datetime import date
from enum import Enum


class ProjectStatus(Enum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"


class Project:
    """
    Immutable-by-convention input to the scheduler: a start date, the
    people who may work on it and the tasks that make it up.
    """

    def __init__(self, start_date, people=None, tasks=None):
        if not isinstance(start_date, date):
            raise ValueError("Project start date must be a date")
        self.start_date = start_date
        self.people = dict(people) if people else {}
        self.tasks = dict(tasks) if tasks else {}

    def add_person(self, person):
        """Add a person to the project"""
        self.people[person.id] = person
        return self

    def add_task(self, task):
        """Add a task to the project"""
        self.tasks[task.id] = task
        return self

    @property
    def person_ids(self):
        return list(self.people.keys())

    @property
    def task_ids(self):
        return list(self.tasks.keys())


class ProjectSummary:
    """Summary metrics derived by the project analyzer."""

    def __init__(
        self,
        status,
        total_estimated_days,
        estimated_completion_date,
        completion_percentage,
    ):
        self.status = status
        self.total_estimated_days = total_estimated_days
        self.estimated_completion_date = estimated_completion_date
        self.completion_percentage = completion_percentage

    def to_dict(self):
        return {
            "status": self.status,
            "totalEstimatedDays": self.total_estimated_days,
            "estimatedCompletionDate": self.estimated_completion_date.isoformat(),
            "completionPercentage": self.completion_percentage,
        }

    def __eq__(self, other):
        if not isinstance(other, ProjectSummary):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"ProjectSummary({self.to_dict()!r})"
