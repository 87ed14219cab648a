from datetime import date

from cpsim.domain.person import Person
from cpsim.domain.project import Project
from cpsim.domain.task import Estimate, Task
from cpsim.services.analyzer import analyze_project
from cpsim.services.calendar import classify_all_weekdays
from cpsim.services.simulation import simulate
from cpsim.visualization.report import print_project_summary, print_simulation_report


def create_sample_project():
    start_date = date(2025, 4, 1)
    end_of_year = date(2025, 12, 31)

    # Define people
    red = Person("red").add_availability(start_date, end_of_year, 8)
    green = Person("green").add_availability(start_date, end_of_year, 8)
    blue = (
        Person("blue")
        .add_availability(start_date, date(2025, 4, 30), 4)
        .add_availability(date(2025, 5, 1), end_of_year, 8)
    )

    # Create tasks
    tasks = [
        Task("design", "Design", Estimate(3, 8, 5), owners=["red"]),
        Task(
            "backend",
            "Backend",
            Estimate(5, 12, 8),
            owners=["green", "red"],
            dependencies=["design"],
        ),
        Task(
            "frontend",
            "Frontend",
            Estimate(4, 9, 6),
            owners=["blue", "red"],
            dependencies=["design"],
        ),
        Task("docs", "Documentation", Estimate(1, 4, 2), owners=["blue"]),
        Task(
            "release",
            "Release",
            Estimate(1, 2, 1),
            owners=["red"],
            dependencies=["backend", "frontend", "docs"],
        ),
    ]

    project = Project(start_date)
    for person in (red, green, blue):
        project.add_person(person)
    for task in tasks:
        project.add_task(task)
    return project


def run_sample_project():
    project = create_sample_project()
    simulation = simulate(project, classify_all_weekdays)
    summary = analyze_project(project, simulation, classify_all_weekdays)

    print_project_summary(summary, "Sample Project")
    print_simulation_report(simulation)
    return project, simulation, summary


if __name__ == "__main__":
    run_sample_project()
