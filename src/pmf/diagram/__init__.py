"""Diagram layout, connection inference and assembly."""

from .layout import compute_layout, compute_stage_spacing
from .connections import infer_connections
from .assembler import assemble, assemble_view, merge_edges
from .commands import Command, CommandRegistry, CommandResult, default_registry

__all__ = [
    "compute_layout",
    "compute_stage_spacing",
    "infer_connections",
    "assemble",
    "assemble_view",
    "merge_edges",
    "Command",
    "CommandRegistry",
    "CommandResult",
    "default_registry",
]
