import logging

import matplotlib.pyplot as plt
import networkx as nx
from matplotlib.lines import Line2D
from matplotlib.patches import Patch

logger = logging.getLogger(__name__)


def build_checkpoint_network(graph):
    """
    Convert a CheckpointGraph into a networkx DiGraph.

    Nodes are checkpoint ids carrying the checkpoint. Executions sharing
    the same endpoints are collected on one edge.
    """
    G = nx.DiGraph()
    for checkpoint in graph.checkpoints:
        G.add_node(checkpoint.id, checkpoint=checkpoint, day=checkpoint.day)
    for checkpoint in graph.checkpoints:
        for execution in checkpoint.outgoing:
            if G.has_edge(execution.from_id, execution.to_id):
                G.edges[execution.from_id, execution.to_id]["executions"].append(execution)
            else:
                G.add_edge(execution.from_id, execution.to_id, executions=[execution])
    return G


def timeline_layout(G, start_day):
    """Place checkpoints left to right by day, spreading same-day nodes vertically."""
    pos = {}
    rows = {}
    for node in sorted(G.nodes()):
        day = G.nodes[node]["day"]
        x = (day - start_day).days
        row = rows.get(x, 0)
        rows[x] = row + 1
        pos[node] = (x, -row)
    return pos


def create_checkpoint_diagram(graph, filename=None, show=True, layout="timeline"):
    """
    Visualize a simulated checkpoint graph.

    Task executions are solid, red when they have zero float; person
    waits and dependency waits are dashed grey.

    Args:
        graph: The CheckpointGraph to draw
        filename: Optional filename to save the diagram
        show: Whether to display the diagram (default: True)
        layout: 'timeline', 'spring', 'circular' or 'shell'

    Returns:
        The matplotlib figure
    """
    G = build_checkpoint_network(graph)

    fig = plt.figure(figsize=(12, 8))

    if not graph.checkpoints:
        plt.title("Project Checkpoint Diagram (empty)", fontsize=14)
        plt.axis("off")
        return _finish(fig, filename, show)

    start_day = min(checkpoint.day for checkpoint in graph.checkpoints)
    if layout == "timeline":
        pos = timeline_layout(G, start_day)
    elif layout == "circular":
        pos = nx.circular_layout(G)
    elif layout == "shell":
        pos = nx.shell_layout(G)
    else:
        pos = nx.spring_layout(G, seed=42)

    final_ids = {
        checkpoint.id for checkpoint in graph.checkpoints if not checkpoint.outgoing
    }
    node_colors = [
        "lightgreen" if node == 0 else "gold" if node in final_ids else "skyblue"
        for node in G.nodes()
    ]
    nx.draw_networkx_nodes(
        G, pos, node_color=node_colors, node_size=600, edgecolors="black"
    )
    nx.draw_networkx_labels(
        G,
        pos,
        labels={
            node: f"{node}\n{data['day'].strftime('%m-%d')}"
            for node, data in G.nodes(data=True)
        },
        font_size=7,
    )

    task_edges, critical_edges, wait_edges = [], [], []
    edge_labels = {}
    for u, v, data in G.edges(data=True):
        tasks = [execution for execution in data["executions"] if execution.is_task]
        if not tasks:
            wait_edges.append((u, v))
        elif any(execution.slack == 0 for execution in tasks):
            critical_edges.append((u, v))
        else:
            task_edges.append((u, v))
        if tasks:
            edge_labels[(u, v)] = ", ".join(
                f"{execution.task_id} ({execution.person_id})" for execution in tasks
            )

    for edgelist, color, width, style in (
        (task_edges, "black", 1.5, "solid"),
        (critical_edges, "red", 2.5, "solid"),
        (wait_edges, "gray", 1.0, "dashed"),
    ):
        if edgelist:
            nx.draw_networkx_edges(
                G,
                pos,
                edgelist=edgelist,
                edge_color=color,
                width=width,
                style=style,
                arrowsize=15,
                arrowstyle="-|>",
                connectionstyle="arc3,rad=0.1",
                node_size=600,
            )

    bbox_props = dict(boxstyle="round,pad=0.3", fc="white", ec="gray", alpha=0.8)
    for (u, v), label in edge_labels.items():
        x = (pos[u][0] + pos[v][0]) / 2
        y = (pos[u][1] + pos[v][1]) / 2
        plt.text(x, y, label, horizontalalignment="center", bbox=bbox_props, fontsize=8)

    legend_elements = [
        Patch(facecolor="lightgreen", edgecolor="black", label="Project Start"),
        Patch(facecolor="gold", edgecolor="black", label="Final Checkpoint"),
        Patch(facecolor="skyblue", edgecolor="black", label="Checkpoint"),
        Line2D([0], [0], color="red", lw=2.5, label="Critical Task"),
        Line2D([0], [0], color="black", lw=1.5, label="Task"),
        Line2D([0], [0], color="gray", lw=1, linestyle="--", label="Wait"),
    ]
    plt.legend(handles=legend_elements, loc="best", fontsize=10)

    plt.title("Project Checkpoint Diagram", fontsize=14)
    plt.axis("off")
    plt.tight_layout()

    return _finish(fig, filename, show)


def _finish(fig, filename, show):
    if filename:
        fig.savefig(filename, dpi=300, bbox_inches="tight")
        logger.info("Checkpoint diagram saved to %s", filename)
    if show:
        plt.show()
    return fig
