"""Workflow diagram models for PMF.

This module defines the data contract shared by the diagram engine:
- Workflow description: WorkflowDefinition, Stage, StatusNode, Entity, WorkflowData
- Geometry: LayoutConfig
- Engine output: PositionedNode, GraphEdge, DiagramGraph

All models are frozen. A WorkflowData is replaced wholesale when the selection
changes, and node/edge sets are regenerated on every recompute.

Fields serialize with camelCase names (`model_dump(by_alias=True)`) and accept
either camelCase or snake_case on input.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

CONTAINER_NODE_ID = "workflow-container"
ENTITY_GROUP_NODE_ID = "entities-group"
RESERVED_NODE_IDS = {CONTAINER_NODE_ID, ENTITY_GROUP_NODE_ID}


class PMFModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# -----------------------------------------------------------------------------
# Enums
# -----------------------------------------------------------------------------


class NodeKind(str, Enum):
    """Kinds of positioned nodes emitted by the layout."""
    CONTAINER = "container"
    STAGE = "stage"
    STATUS = "status"
    ENTITY_GROUP = "entityGroup"
    ENTITY = "entity"


class EdgeKind(str, Enum):
    """Kinds of edges in an assembled diagram."""
    STAGE_STATUS = "stage-status"
    STATUS_STAGE = "status-stage"
    CUSTOM = "custom"


# -----------------------------------------------------------------------------
# Workflow description
# -----------------------------------------------------------------------------


class WorkflowDefinition(PMFModel):
    """Identity of the overall workflow."""
    id: str = Field(min_length=1)
    title: str
    description: str = ""


class Stage(PMFModel):
    """One step of the workflow. List order is temporal order."""
    id: str = Field(min_length=1)
    title: str
    description: str = ""
    color: Optional[str] = None


class StatusNode(PMFModel):
    """Marker emitted by a stage.

    `connected_to_stage` is an optional explicit link to a stage id. When absent
    (or dangling) the status node pairs with the stage at the same index.
    """
    id: str = Field(min_length=1)
    label: str
    color: Optional[str] = None
    connected_to_stage: Optional[str] = None
    connected_to_entities: List[str] = Field(default_factory=list)


class Entity(PMFModel):
    """Data object affected by the workflow."""
    id: str = Field(min_length=1)
    title: str
    color: Optional[str] = None


class WorkflowData(PMFModel):
    """Aggregate root handed to the diagram engine."""
    workflow: WorkflowDefinition
    stages: List[Stage]
    status_nodes: List[StatusNode]
    entities: List[Entity]

    # -------------------------------------------------------------------------
    # Convenience accessors
    # -------------------------------------------------------------------------

    @property
    def stage_ids(self) -> List[str]:
        return [stage.id for stage in self.stages]

    @property
    def entity_ids(self) -> List[str]:
        return [entity.id for entity in self.entities]

    def entities_for_status(self, status_id: str) -> List[Entity]:
        """Entities a status node links to, ignoring ids that do not exist."""
        for status in self.status_nodes:
            if status.id == status_id:
                wanted = set(status.connected_to_entities)
                return [entity for entity in self.entities if entity.id in wanted]
        return []

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "WorkflowData":
        seen: set[str] = set()
        for item in [*self.stages, *self.status_nodes, *self.entities]:
            if item.id in RESERVED_NODE_IDS:
                raise ValueError(f"Id is reserved for diagram nodes: {item.id}")
            if item.id in seen:
                raise ValueError(f"Duplicate id in workflow data: {item.id}")
            seen.add(item.id)
        return self


# -----------------------------------------------------------------------------
# Layout configuration
# -----------------------------------------------------------------------------


class LayoutConfig(PMFModel):
    """Geometry parameters for the diagram layout."""
    container_width: float = Field(default=800, gt=0)
    container_height: float = Field(default=600, gt=0)
    stage_width: float = Field(default=220, gt=0)
    stage_height: float = Field(default=100, gt=0)
    circle_size: float = Field(default=60, gt=0)
    padding: float = Field(default=30, ge=0)
    vertical_spacing: float = Field(default=40, ge=0)

    # Entity group
    group_header_height: float = Field(default=32, gt=0)
    entity_width: float = Field(default=192, gt=0)
    entity_height: float = Field(default=36, gt=0)
    entity_gap: float = Field(default=16, ge=0)

    @property
    def available_width(self) -> float:
        return self.container_width - 2 * self.padding


# -----------------------------------------------------------------------------
# Engine output
# -----------------------------------------------------------------------------


class PositionedNode(PMFModel):
    """A laid-out node.

    Coordinates of a node with `parent_id` are relative to the parent's origin.
    """
    id: str
    kind: NodeKind
    x: float
    y: float
    width: Optional[float] = None
    height: Optional[float] = None
    parent_id: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)
    selected: bool = False


class GraphEdge(PMFModel):
    """Connector between two nodes."""
    id: str
    source: str
    target: str
    kind: EdgeKind = EdgeKind.CUSTOM

    @classmethod
    def between(cls, source: str, target: str, kind: EdgeKind = EdgeKind.CUSTOM) -> "GraphEdge":
        """Create an edge whose id is derived from its endpoints."""
        return cls(id=edge_id(source, target), source=source, target=target, kind=kind)


def edge_id(source: str, target: str) -> str:
    return f"{source}-to-{target}"


class DiagramGraph(PMFModel):
    """Renderable diagram: positioned nodes plus merged edges."""
    workflow_id: Optional[str] = None
    nodes: List[PositionedNode] = Field(default_factory=list)
    edges: List[GraphEdge] = Field(default_factory=list)
    show_legend: bool = True
    show_mini_map: bool = True

    def get_node(self, node_id: str) -> Optional[PositionedNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def nodes_of_kind(self, kind: NodeKind) -> List[PositionedNode]:
        return [node for node in self.nodes if node.kind == kind]
