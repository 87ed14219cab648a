import copy
import logging

from cpsim.domain.checkpoint import CheckpointGraph

logger = logging.getLogger(__name__)


def is_redundant_wait(checkpoint):
    """
    A checkpoint is redundant when it only let one idle person catch up:
    it has a single outgoing person-wait edge, and that same person
    already arrives on an incoming edge.

    A task completed into the checkpoint would end at the successor
    instead, so the splice is refused unless the successor falls on the
    same day.
    """
    if len(checkpoint.outgoing) != 1 or not checkpoint.outgoing[0].is_person_wait:
        return False
    wait = checkpoint.outgoing[0]
    if wait.end_day != checkpoint.day and any(
        execution.is_task for execution in checkpoint.incoming
    ):
        return False
    return any(execution.person_id == wait.person_id for execution in checkpoint.incoming)


def optimize_checkpoints(graph):
    """
    Splice redundant wait checkpoints out of a simulated graph.

    Every edge flowing into a removed checkpoint is re-pointed at its
    single successor. The input graph is left untouched.

    Args:
        graph: A CheckpointGraph as produced by the simulation

    Returns:
        CheckpointGraph: A new graph with the same task completion days
    """
    optimized = copy.deepcopy(graph)
    checkpoints_by_id = {checkpoint.id: checkpoint for checkpoint in optimized.checkpoints}
    removed = set()

    # Successors always have higher ids, so a target is never visited
    # before the checkpoint that feeds it.
    for checkpoint in optimized.checkpoints:
        if not is_redundant_wait(checkpoint):
            continue

        wait = checkpoint.outgoing[0]
        target = checkpoints_by_id[wait.to_id]
        target.incoming.remove(wait)
        for execution in checkpoint.incoming:
            execution.to_id = target.id
            execution.end_day = target.day
            target.incoming.append(execution)

        checkpoint.incoming = []
        checkpoint.outgoing = []
        removed.add(checkpoint.id)

    logger.debug("Removed %d redundant checkpoints: %s", len(removed), sorted(removed))
    return CheckpointGraph(
        [checkpoint for checkpoint in optimized.checkpoints if checkpoint.id not in removed]
    )
