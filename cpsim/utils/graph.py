import math

import networkx as nx


class InvalidProjectGraphError(ValueError):
    """Exception raised when task dependencies do not form a valid DAG."""

    pass


def build_dependency_graph(tasks):
    """
    Build a directed graph representing task dependencies.

    Edges run from a dependency to the task that depends on it. Nodes
    and successor lists keep task declaration order.

    Raises:
        InvalidProjectGraphError: If a dependency names a missing task or
            the dependencies contain a cycle
    """
    G = nx.DiGraph()

    for task_id, task in tasks.items():
        G.add_node(task_id, task=task, estimate=task.pert_estimate)

    for task_id, task in tasks.items():
        for dep_id in task.dependencies:
            if dep_id not in tasks:
                raise InvalidProjectGraphError(
                    f"Task {task_id} depends on unknown task {dep_id}"
                )
            G.add_edge(dep_id, task_id)

    if not nx.is_directed_acyclic_graph(G):
        cycle = [edge[0] for edge in nx.find_cycle(G)]
        raise InvalidProjectGraphError(
            f"Task dependencies contain a cycle: {' -> '.join(cycle)}"
        )

    return G


def forward_pass(graph):
    """Calculate early start and early finish offsets, in days of effort."""
    timings = {}
    for task_id in nx.topological_sort(graph):
        duration = graph.nodes[task_id]["estimate"]
        early_start = max(
            (timings[dep_id]["early_finish"] for dep_id in graph.predecessors(task_id)),
            default=0,
        )
        timings[task_id] = {
            "duration": duration,
            "early_start": early_start,
            "early_finish": early_start + duration,
        }
    return timings


def backward_pass(graph, timings):
    """Calculate late start and late finish offsets from a forward pass."""
    project_duration = max(
        (timing["early_finish"] for timing in timings.values()), default=0
    )

    for task_id in reversed(list(nx.topological_sort(graph))):
        timing = timings[task_id]
        timing["late_finish"] = min(
            (timings[succ_id]["late_start"] for succ_id in graph.successors(task_id)),
            default=project_duration,
        )
        timing["late_start"] = timing["late_finish"] - timing["duration"]

    return timings


def round_half_up(value):
    return int(math.floor(value + 0.5))


def calculate_floats(tasks):
    """
    Calculate the schedule float of every task.

    Args:
        tasks: Mapping of task id to Task

    Returns:
        dict: Float in whole days per task id; zero marks the critical path
    """
    graph = build_dependency_graph(tasks)
    timings = backward_pass(graph, forward_pass(graph))
    return {
        task_id: round_half_up(timings[task_id]["late_start"] - timings[task_id]["early_start"])
        for task_id in tasks
    }


def find_all_paths(graph):
    """
    Enumerate every path from a task without dependencies to a task that
    nothing depends on, depth first in declaration order.
    """
    paths = []
    roots = [node for node in graph.nodes() if graph.in_degree(node) == 0]
    for root in roots:
        stack = [[root]]
        while stack:
            path = stack.pop()
            successors = list(graph.successors(path[-1]))
            if not successors:
                paths.append(path)
                continue
            for succ_id in reversed(successors):
                stack.append(path + [succ_id])
    return paths


def path_estimate(graph, path):
    return sum(graph.nodes[task_id]["estimate"] for task_id in path)


def find_critical_path(tasks):
    """
    Find the dependency path with the largest summed PERT estimate.

    Enumerates all root-to-leaf paths, which is fine for the small task
    graphs this is used on. The first path found wins a tie. A project
    whose estimates are all zero has an empty critical path.
    """
    graph = build_dependency_graph(tasks)
    critical_path = []
    max_estimate = 0
    for path in find_all_paths(graph):
        estimate = path_estimate(graph, path)
        if estimate > max_estimate:
            max_estimate = estimate
            critical_path = path
    return critical_path
