"""View state owned by callers of the diagram engine."""

from .selection import (
    SelectionState,
    ViewCustomizations,
    ViewState,
    add_custom_edge,
    clear_selection,
    default_view_state,
    remove_custom_edge,
    select_node,
    toggle_entities,
    update_customizations,
    update_selection,
)

__all__ = [
    "SelectionState",
    "ViewCustomizations",
    "ViewState",
    "add_custom_edge",
    "clear_selection",
    "default_view_state",
    "remove_custom_edge",
    "select_node",
    "toggle_entities",
    "update_customizations",
    "update_selection",
]
