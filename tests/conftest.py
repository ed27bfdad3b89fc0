"""Shared test fixtures for diagram engine tests."""

from typing import Any, Dict, List, Optional

import pytest

from pmf.core.models import LayoutConfig, WorkflowData


def make_workflow_dict(
    stage_ids: List[str],
    status_ids: Optional[List[str]] = None,
    entity_ids: Optional[List[str]] = None,
    workflow_id: str = "wf-1",
    links: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """Build a raw workflow payload.

    `links` maps status id -> stage id for explicit `connectedToStage` links.
    """
    links = links or {}
    status_nodes = []
    for status_id in status_ids or []:
        node: Dict[str, Any] = {"id": status_id, "label": status_id}
        if status_id in links:
            node["connectedToStage"] = links[status_id]
        status_nodes.append(node)
    return {
        "workflow": {"id": workflow_id, "title": f"Workflow {workflow_id}", "description": ""},
        "stages": [{"id": stage_id, "title": stage_id.upper()} for stage_id in stage_ids],
        "statusNodes": status_nodes,
        "entities": [{"id": entity_id, "title": entity_id.title()} for entity_id in entity_ids or []],
    }


def make_workflow(*args, **kwargs) -> WorkflowData:
    return WorkflowData.model_validate(make_workflow_dict(*args, **kwargs))


@pytest.fixture
def layout_config() -> LayoutConfig:
    """Three 220-wide cards in 760 - 2*30 = 700 leave exactly 20px between them."""
    return LayoutConfig(container_width=760, container_height=600, padding=30, stage_width=220)


@pytest.fixture
def three_stage_workflow() -> WorkflowData:
    return make_workflow(
        ["a", "b", "c"],
        ["s1", "s2", "s3"],
        ["loan", "price", "position"],
    )
