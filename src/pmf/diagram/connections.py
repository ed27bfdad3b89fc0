"""Connection inference between stages and status nodes."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..core.models import EdgeKind, GraphEdge, Stage, StatusNode, WorkflowData
from ..utils.logging import get_logger

logger = get_logger(__name__)


def match_status_for_stage(
    data: WorkflowData, index: int, explicit: Dict[str, StatusNode]
) -> Optional[StatusNode]:
    """Status node emitted by the stage at `index`.

    An explicit `connected_to_stage` link wins; otherwise the status node at the
    same index is used. Index pairing can mis-pair when the two lists differ in
    length or order.
    """
    stage = data.stages[index]
    if stage.id in explicit:
        return explicit[stage.id]
    if index < len(data.status_nodes):
        return data.status_nodes[index]
    return None


def _explicit_links(data: WorkflowData) -> Dict[str, StatusNode]:
    stage_ids = set(data.stage_ids)
    links: Dict[str, StatusNode] = {}
    for status in data.status_nodes:
        target = status.connected_to_stage
        # first declaration wins; dangling links count as no link
        if target and target in stage_ids and target not in links:
            links[target] = status
    return links


def infer_connections(data: WorkflowData) -> List[GraphEdge]:
    """Derive the canonical edge set of a workflow.

    Stage→status edges come first in stage order, followed by status→next-stage
    sequencing edges in status order. Edge ids are derived from their endpoints,
    so repeated calls return identical lists.
    """
    edges: List[GraphEdge] = []
    seen: Dict[str, GraphEdge] = {}

    def emit(source: str, target: str, kind: EdgeKind) -> None:
        edge = GraphEdge.between(source, target, kind)
        existing = seen.get(edge.id)
        if existing is None:
            seen[edge.id] = edge
            edges.append(edge)
        elif (existing.source, existing.target) != (source, target):
            logger.warning(
                "Dropping inferred edge whose id collides with another edge",
                extra={
                    "edge_id": edge.id,
                    "kept": f"{existing.source}->{existing.target}",
                    "dropped": f"{source}->{target}",
                },
            )

    explicit = _explicit_links(data)
    for index, stage in enumerate(data.stages):
        status = match_status_for_stage(data, index, explicit)
        if status is not None:
            emit(stage.id, status.id, EdgeKind.STAGE_STATUS)

    for index, status in enumerate(data.status_nodes):
        next_stage: Optional[Stage] = data.stages[index + 1] if index + 1 < len(data.stages) else None
        if next_stage is not None:
            emit(status.id, next_stage.id, EdgeKind.STATUS_STAGE)

    return edges
