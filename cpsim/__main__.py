"""
Critical Path Simulator
=======================

Command line entry point: summarize and simulate a project file.
"""

import argparse
import logging
import sys

from cpsim.io.project_reader import ProjectFileError, ProjectFileReader
from cpsim.services.analyzer import analyze_project
from cpsim.services.calendar import WORK_DAY_CLASSIFIERS, get_work_day_classifier
from cpsim.services.simulation import SimulationError, simulate
from cpsim.utils.days import CalendarError
from cpsim.utils.graph import InvalidProjectGraphError
from cpsim.visualization.report import print_project_summary, print_simulation_report

logger = logging.getLogger("cpsim")


def build_parser():
    parser = argparse.ArgumentParser(
        description="Resource-constrained project scheduling and critical path analysis"
    )
    parser.add_argument("project_file", nargs="?", help="Markdown project definition")
    parser.add_argument(
        "--workdays",
        default="weekdays",
        help=f"Work-day calendar ({', '.join(WORK_DAY_CLASSIFIERS)})",
    )
    parser.add_argument(
        "--diagram", type=str, default=None, help="Save a checkpoint diagram to this file"
    )
    parser.add_argument(
        "--no-simulation",
        action="store_true",
        help="Only analyze the critical path, without simulating resources",
    )
    parser.add_argument(
        "--example", action="store_true", help="Run the example project"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.example:
        from cpsim.examples.simple_project import run_sample_project

        run_sample_project()
        return 0

    if not args.project_file:
        parser.print_help()
        return 1

    work_day_classifier = get_work_day_classifier(args.workdays)
    try:
        project = ProjectFileReader().read_project(args.project_file)
        simulation = None
        if not args.no_simulation:
            simulation = simulate(project, work_day_classifier)
        summary = analyze_project(project, simulation, work_day_classifier)
    except (ProjectFileError, InvalidProjectGraphError, SimulationError, CalendarError) as e:
        logger.error("%s", e)
        return 1

    print_project_summary(summary, args.project_file)
    if simulation is not None:
        print_simulation_report(simulation)
        if args.diagram:
            from cpsim.visualization.network import create_checkpoint_diagram

            create_checkpoint_diagram(simulation, filename=args.diagram, show=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
