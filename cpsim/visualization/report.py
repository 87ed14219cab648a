from cpsim.utils.days import format_day

STATUS_LABELS = {
    "not-started": "Not started",
    "in-progress": "In progress",
    "complete": "Complete",
}


def format_project_status(status):
    return STATUS_LABELS.get(status, status)


def print_project_summary(summary, title="Project"):
    """Print a project summary report."""
    heading = f"Project Summary: {title}"
    print(heading)
    print("=" * len(heading))
    print()

    print(f"Status: {format_project_status(summary.status)}")
    print(f"Total Estimated Days: {summary.total_estimated_days:.1f}")
    print(f"Estimated Completion: {format_day(summary.estimated_completion_date)}")
    print(f"Completion Progress: {summary.completion_percentage}%")


def print_simulation_report(graph):
    """Print one line per task execution, in completion order."""
    print("\nSimulated Schedule:")
    executions = graph.task_executions()
    if not executions:
        print("  (no tasks)")
        return

    for execution in executions:
        critical = " [critical]" if execution.slack == 0 else ""
        print(
            f"  {execution.task_id}: {execution.person_id} "
            f"{format_day(execution.start_day)} -> {format_day(execution.end_day)} "
            f"({execution.estimate:.1f} days, float {execution.slack}){critical}"
        )
    print(f"Simulated Completion: {format_day(graph.final_day)}")
