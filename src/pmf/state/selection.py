"""Externally owned view state.

The diagram engine never keeps UI state of its own. Selection, the view
toggles, and user-drawn edges live in a frozen `ViewState` that callers pass
into assembly and replace through the transition functions below.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from ..core.models import EdgeKind, GraphEdge, PMFModel

SelectionType = Literal["workflow", "entity"]


class ViewCustomizations(PMFModel):
    expand_all_entities: bool = True
    show_legend: bool = True
    show_mini_map: bool = True


class SelectionState(PMFModel):
    selected_type: Optional[SelectionType] = None
    selected_id: Optional[str] = None
    customizations: ViewCustomizations = Field(default_factory=ViewCustomizations)

    @property
    def has_selection(self) -> bool:
        return self.selected_type is not None and self.selected_id is not None


class ViewState(PMFModel):
    """Everything a recompute needs besides the workflow data and geometry.

    `edges_workflow_id` records which workflow `custom_edges` were drawn on, so
    edges never leak into a different workflow.
    """
    selection: SelectionState = Field(default_factory=SelectionState)
    custom_edges: List[GraphEdge] = Field(default_factory=list)
    edges_workflow_id: Optional[str] = None
    selected_node_id: Optional[str] = None

    @property
    def expanded(self) -> bool:
        return self.selection.customizations.expand_all_entities

    @property
    def workflow_id(self) -> Optional[str]:
        if self.selection.selected_type == "workflow":
            return self.selection.selected_id
        return None


def default_view_state(*, expand_entities: bool = True) -> ViewState:
    return ViewState(
        selection=SelectionState(
            customizations=ViewCustomizations(expand_all_entities=expand_entities)
        )
    )


# -----------------------------------------------------------------------------
# Transitions
# -----------------------------------------------------------------------------


def update_selection(state: ViewState, selected_type: SelectionType, selected_id: str) -> ViewState:
    """Select a workflow or entity. Switching workflows drops custom edges."""
    selection = state.selection.model_copy(
        update={"selected_type": selected_type, "selected_id": selected_id}
    )
    update: dict = {"selection": selection}
    if selection.selected_id != state.selection.selected_id or selected_type != state.selection.selected_type:
        update.update(custom_edges=[], edges_workflow_id=None, selected_node_id=None)
    return state.model_copy(update=update)


def update_customizations(state: ViewState, **changes: bool) -> ViewState:
    unknown = set(changes) - set(ViewCustomizations.model_fields)
    if unknown:
        raise ValueError(f"Unknown view customizations: {sorted(unknown)}")
    customizations = state.selection.customizations.model_copy(update=changes)
    selection = state.selection.model_copy(update={"customizations": customizations})
    return state.model_copy(update={"selection": selection})


def clear_selection(*, expand_entities: bool = True) -> ViewState:
    return default_view_state(expand_entities=expand_entities)


def toggle_entities(state: ViewState) -> ViewState:
    return update_customizations(state, expand_all_entities=not state.expanded)


def select_node(state: ViewState, node_id: Optional[str]) -> ViewState:
    return state.model_copy(update={"selected_node_id": node_id})


def add_custom_edge(state: ViewState, source: str, target: str) -> ViewState:
    """Record a user-drawn edge on the currently selected workflow."""
    edge = GraphEdge.between(source, target, EdgeKind.CUSTOM)
    edges = [existing for existing in state.custom_edges if existing.id != edge.id]
    edges.append(edge)
    return state.model_copy(
        update={"custom_edges": edges, "edges_workflow_id": state.workflow_id}
    )


def remove_custom_edge(state: ViewState, edge_id: str) -> ViewState:
    edges = [edge for edge in state.custom_edges if edge.id != edge_id]
    return state.model_copy(update={"custom_edges": edges})
