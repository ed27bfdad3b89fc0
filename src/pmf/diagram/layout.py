"""Diagram layout for linear workflows.

The layout is a fixed three-row template inside a single container:

    container (0, 0)
    ├── stage cards         row y = padding
    ├── status circles      centered under the stage slot with the same index
    └── entities group      below the status row; entity chips wrap inside it

Every coordinate is derived from the WorkflowData, the LayoutConfig and the
expansion flag alone.
"""

from __future__ import annotations

from typing import List, Tuple

from ..core.models import (
    CONTAINER_NODE_ID,
    ENTITY_GROUP_NODE_ID,
    LayoutConfig,
    NodeKind,
    PositionedNode,
    WorkflowData,
)
from ..utils.logging import get_logger

logger = get_logger(__name__)

MIN_STAGE_SPACING = 20.0


def compute_stage_spacing(stage_count: int, config: LayoutConfig) -> float:
    """Horizontal gap between consecutive stage cards."""
    if stage_count <= 1:
        return 0.0
    total_stage_width = stage_count * config.stage_width
    spacing = (config.available_width - total_stage_width) / (stage_count - 1)
    return max(spacing, MIN_STAGE_SPACING)


def stage_x(index: int, spacing: float, config: LayoutConfig) -> float:
    return config.padding + index * (config.stage_width + spacing)


def stage_row_y(config: LayoutConfig) -> float:
    return config.padding


def status_row_y(config: LayoutConfig) -> float:
    return stage_row_y(config) + config.stage_height + config.vertical_spacing


def entity_group_y(config: LayoutConfig) -> float:
    return status_row_y(config) + config.circle_size + config.vertical_spacing


def entity_columns(config: LayoutConfig) -> int:
    """How many entity chips fit side by side in the group."""
    usable = config.available_width - 2 * config.entity_gap
    columns = int((usable + config.entity_gap) // (config.entity_width + config.entity_gap))
    return max(columns, 1)


def compute_layout(data: WorkflowData, config: LayoutConfig, expanded: bool) -> List[PositionedNode]:
    """Position every structural element of a workflow diagram.

    Args:
        data: Workflow to lay out.
        config: Geometry parameters.
        expanded: Whether the entity group shows its entity chips.

    Returns:
        Container first, then stages, status nodes, the entity group and (when
        expanded) the entity chips.
    """
    nodes: List[PositionedNode] = [
        PositionedNode(
            id=CONTAINER_NODE_ID,
            kind=NodeKind.CONTAINER,
            x=0,
            y=0,
            width=config.container_width,
            height=config.container_height,
            data={"title": data.workflow.title, "description": data.workflow.description},
        )
    ]

    if not data.stages:
        return nodes

    spacing = compute_stage_spacing(len(data.stages), config)
    row_y = stage_row_y(config)

    for index, stage in enumerate(data.stages):
        nodes.append(
            PositionedNode(
                id=stage.id,
                kind=NodeKind.STAGE,
                x=stage_x(index, spacing, config),
                y=row_y,
                width=config.stage_width,
                height=config.stage_height,
                parent_id=CONTAINER_NODE_ID,
                data={
                    "title": stage.title,
                    "description": stage.description,
                    "color": stage.color,
                },
            )
        )

    right_edge = stage_x(len(data.stages) - 1, spacing, config) + config.stage_width
    if right_edge > config.container_width - config.padding:
        logger.warning(
            "Stage row is wider than the container",
            extra={
                "workflow_id": data.workflow.id,
                "stage_count": len(data.stages),
                "row_right_edge": right_edge,
                "container_width": config.container_width,
            },
        )

    circle_y = status_row_y(config)
    for index, status in enumerate(data.status_nodes):
        center_x = stage_x(index, spacing, config) + config.stage_width / 2
        nodes.append(
            PositionedNode(
                id=status.id,
                kind=NodeKind.STATUS,
                x=center_x - config.circle_size / 2,
                y=circle_y,
                width=config.circle_size,
                height=config.circle_size,
                parent_id=CONTAINER_NODE_ID,
                data={"label": status.label, "color": status.color},
            )
        )

    nodes.extend(_layout_entity_group(data, config, expanded))
    return nodes


def _layout_entity_group(
    data: WorkflowData, config: LayoutConfig, expanded: bool
) -> List[PositionedNode]:
    group_y = entity_group_y(config)
    max_height = max(config.container_height - group_y - config.padding, config.group_header_height)
    if group_y + config.group_header_height > config.container_height:
        logger.warning(
            "Entity group does not fit in the container",
            extra={
                "workflow_id": data.workflow.id,
                "group_bottom": group_y + config.group_header_height,
                "container_height": config.container_height,
            },
        )

    chips: List[PositionedNode] = []
    height = config.group_header_height
    hidden = 0
    if expanded and data.entities:
        slots, height = _entity_slots(len(data.entities), config, max_height)
        for entity, (x, y) in zip(data.entities, slots):
            chips.append(
                PositionedNode(
                    id=entity.id,
                    kind=NodeKind.ENTITY,
                    x=x,
                    y=y,
                    width=config.entity_width,
                    height=config.entity_height,
                    parent_id=ENTITY_GROUP_NODE_ID,
                    data={"title": entity.title, "color": entity.color},
                )
            )
        hidden = len(data.entities) - len(slots)
        if hidden:
            logger.warning(
                "Entity chips do not fit in the container",
                extra={"workflow_id": data.workflow.id, "hidden_count": hidden},
            )

    group = PositionedNode(
        id=ENTITY_GROUP_NODE_ID,
        kind=NodeKind.ENTITY_GROUP,
        x=config.padding,
        y=group_y,
        width=config.available_width,
        height=height,
        parent_id=CONTAINER_NODE_ID,
        data={
            "title": "Modified Data Entities",
            "expanded": expanded,
            "entityCount": len(data.entities),
            "hiddenCount": hidden,
        },
    )
    return [group, *chips]


def _entity_slots(
    count: int, config: LayoutConfig, max_height: float
) -> Tuple[List[Tuple[float, float]], float]:
    """Wrap `count` chips into rows, dropping rows that exceed `max_height`.

    Returns chip origins relative to the group and the resulting group height.
    """
    columns = entity_columns(config)
    row_pitch = config.entity_height + config.entity_gap
    slots: List[Tuple[float, float]] = []
    height = config.group_header_height
    for index in range(count):
        row, column = divmod(index, columns)
        y = config.group_header_height + row * row_pitch
        if y + config.entity_height > max_height:
            break
        x = config.entity_gap + column * (config.entity_width + config.entity_gap)
        slots.append((x, y))
        height = max(height, min(y + config.entity_height + config.entity_gap, max_height))
    return slots, height
