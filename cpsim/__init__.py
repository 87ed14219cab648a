"""
Critical Path Simulator
=======================

Resource-constrained project scheduling and critical-path analysis.

Available entry points:
- calculate_floats: CPM float per task
- simulate: greedy resource-constrained simulation into a checkpoint graph
- optimize_checkpoints: remove redundant wait checkpoints
- analyze_project: status, critical-path estimate, completion date and progress
"""

from cpsim.services.analyzer import ProjectAnalyzer, analyze_project
from cpsim.services.calendar import get_work_day_classifier
from cpsim.services.optimizer import optimize_checkpoints
from cpsim.services.simulation import ProjectSimulation, SimulationError, simulate
from cpsim.utils.graph import InvalidProjectGraphError, calculate_floats

__all__ = [
    "ProjectAnalyzer",
    "analyze_project",
    "get_work_day_classifier",
    "optimize_checkpoints",
    "ProjectSimulation",
    "SimulationError",
    "simulate",
    "InvalidProjectGraphError",
    "calculate_floats",
]
