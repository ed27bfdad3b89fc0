"""Diagram assembly.

Combines the layout with presentation state and reconciles inferred edges with
edges that already exist on the canvas (typically drawn by the user).
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..core.models import DiagramGraph, GraphEdge, LayoutConfig, PositionedNode, WorkflowData
from ..state.selection import ViewState
from ..utils.logging import get_logger
from .connections import infer_connections
from .layout import compute_layout

logger = get_logger(__name__)


def merge_edges(inferred: List[GraphEdge], existing: Iterable[GraphEdge]) -> List[GraphEdge]:
    """Inferred edges followed by every existing edge whose id they do not claim."""
    inferred_ids = {edge.id for edge in inferred}
    kept = [edge for edge in existing if edge.id not in inferred_ids]
    return [*inferred, *kept]


def assemble(
    data: WorkflowData,
    config: LayoutConfig,
    expanded: bool,
    existing_edges: Optional[Iterable[GraphEdge]] = None,
    previous_workflow_id: Optional[str] = None,
) -> DiagramGraph:
    """Lay out a workflow and merge its inferred edges with existing ones.

    Args:
        data: Workflow to render.
        config: Layout geometry.
        expanded: Whether entity chips are shown.
        existing_edges: Edges currently on the canvas.
        previous_workflow_id: Workflow the existing edges belong to. When given
            and different from `data.workflow.id`, existing edges are dropped.

    Returns:
        DiagramGraph with positioned nodes and merged edges.
    """
    existing = list(existing_edges or [])
    if previous_workflow_id is not None and previous_workflow_id != data.workflow.id:
        if existing:
            logger.debug(
                "Dropping edges from previous workflow",
                extra={"previous_workflow_id": previous_workflow_id, "dropped": len(existing)},
            )
        existing = []

    nodes = compute_layout(data, config, expanded)
    inferred = infer_connections(data)
    edges = merge_edges(inferred, existing)

    logger.debug(
        "Assembled diagram",
        extra={
            "workflow_id": data.workflow.id,
            "nodes": len(nodes),
            "inferred_edges": len(inferred),
            "kept_edges": len(edges) - len(inferred),
        },
    )
    return DiagramGraph(workflow_id=data.workflow.id, nodes=nodes, edges=edges)


def assemble_view(data: WorkflowData, config: LayoutConfig, state: ViewState) -> DiagramGraph:
    """Assemble a diagram from an explicit view state."""
    graph = assemble(
        data,
        config,
        state.expanded,
        state.custom_edges,
        previous_workflow_id=state.edges_workflow_id,
    )
    customizations = state.selection.customizations
    return graph.model_copy(
        update={
            "nodes": _mark_selected(graph.nodes, state.selected_node_id),
            "show_legend": customizations.show_legend,
            "show_mini_map": customizations.show_mini_map,
        }
    )


def _mark_selected(nodes: List[PositionedNode], node_id: Optional[str]) -> List[PositionedNode]:
    if node_id is None:
        return nodes
    return [
        node.model_copy(update={"selected": True}) if node.id == node_id else node
        for node in nodes
    ]
