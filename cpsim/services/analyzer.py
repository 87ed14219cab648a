import logging
import math

from cpsim.domain.project import ProjectStatus, ProjectSummary
from cpsim.domain.task import TaskStatus
from cpsim.services.calendar import classify_all_weekdays
from cpsim.utils.days import add_work_days
from cpsim.utils.graph import find_critical_path, round_half_up

logger = logging.getLogger(__name__)


def calculate_total_estimate(task_ids, tasks):
    """Sum the PERT estimates of the given tasks, ignoring unknown ids."""
    return sum(tasks[task_id].pert_estimate for task_id in task_ids if task_id in tasks)


class ProjectAnalyzer:
    """Derives summary metrics for a project."""

    def __init__(self, work_day_classifier=classify_all_weekdays):
        self.work_day_classifier = work_day_classifier

    def analyze_project(self, project, simulation=None):
        """
        Analyze a project and generate a summary report.

        Args:
            project: The Project to analyze
            simulation: Optional CheckpointGraph from a simulation of the
                same project. When given, its last checkpoint day is used
                as the estimated completion date.

        Returns:
            ProjectSummary
        """
        status = self.calculate_project_status(project.tasks)
        critical_path = find_critical_path(project.tasks)
        total_estimated_days = calculate_total_estimate(critical_path, project.tasks)

        if simulation is not None and len(simulation) > 0:
            estimated_completion_date = simulation.final_day
        else:
            estimated_completion_date = self.calculate_completion_date(
                project.start_date, total_estimated_days
            )

        completion_percentage = self.calculate_completion_percentage(project.tasks)

        logger.debug(
            "Critical path %s totals %.2f days", " -> ".join(critical_path), total_estimated_days
        )
        return ProjectSummary(
            status=status,
            total_estimated_days=total_estimated_days,
            estimated_completion_date=estimated_completion_date,
            completion_percentage=completion_percentage,
        )

    @staticmethod
    def calculate_project_status(tasks):
        statuses = [task.status for task in tasks.values()]

        if not statuses:
            return ProjectStatus.NOT_STARTED.value
        if all(status == TaskStatus.NOT_STARTED.value for status in statuses):
            return ProjectStatus.NOT_STARTED.value
        if all(status == TaskStatus.COMPLETE.value for status in statuses):
            return ProjectStatus.COMPLETE.value
        return ProjectStatus.IN_PROGRESS.value

    def calculate_completion_date(self, start_date, estimated_days):
        """
        Advance the start date by the estimate, rounded up, in working days.

        Raises:
            CalendarError: If the classifier never yields a working day
        """
        return add_work_days(start_date, math.ceil(estimated_days), self.work_day_classifier)

    @staticmethod
    def calculate_completion_percentage(tasks):
        """Effort-weighted share of complete tasks, as a whole percentage."""
        if not tasks:
            return 0

        total_estimate = calculate_total_estimate(tasks.keys(), tasks)
        if total_estimate == 0:
            return 0

        completed_estimate = calculate_total_estimate(
            [task_id for task_id, task in tasks.items() if task.is_complete()], tasks
        )
        return round_half_up(completed_estimate / total_estimate * 100)


def analyze_project(project, simulation=None, work_day_classifier=classify_all_weekdays):
    """Summarize a project, optionally using a simulated checkpoint graph."""
    return ProjectAnalyzer(work_day_classifier).analyze_project(project, simulation)
