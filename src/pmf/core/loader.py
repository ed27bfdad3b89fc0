"""Validation of raw workflow payloads.

Providers hand over plain mappings (parsed JSON, catalog literals). Before any
layout is attempted the payload must carry the four top-level fields with the
right shape; anything else fails fast with `WorkflowValidationError`.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Tuple

from pydantic import ValidationError

from ..utils.logging import get_logger
from .exceptions import WorkflowValidationError
from .models import WorkflowData

logger = get_logger(__name__)

# field name -> accepted keys (camelCase first)
REQUIRED_FIELDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("workflow", ("workflow",)),
    ("stages", ("stages",)),
    ("statusNodes", ("statusNodes", "status_nodes")),
    ("entities", ("entities",)),
)


def _lookup(raw: Mapping[str, Any], keys: Tuple[str, ...]) -> Tuple[bool, Any]:
    for key in keys:
        if key in raw:
            return True, raw[key]
    return False, None


def check_required_fields(raw: Any) -> None:
    """Raise if the payload is missing a required field or has the wrong shape."""
    if not isinstance(raw, Mapping):
        raise WorkflowValidationError(
            "Workflow data must be a mapping",
            context={"type": type(raw).__name__},
        )

    missing: List[str] = []
    malformed: List[str] = []
    for name, keys in REQUIRED_FIELDS:
        found, value = _lookup(raw, keys)
        if not found or value is None:
            missing.append(name)
            continue
        if name == "workflow":
            if not isinstance(value, Mapping):
                malformed.append(name)
        elif not isinstance(value, (list, tuple)):
            malformed.append(name)

    if missing or malformed:
        raise WorkflowValidationError(
            "Invalid workflow data format",
            context={"missing": missing, "malformed": malformed},
        )


def load_workflow_data(raw: Any) -> WorkflowData:
    """Validate a raw payload and build a WorkflowData.

    Raises:
        WorkflowValidationError: if required fields are absent, not list-shaped,
            or any nested item fails model validation.
    """
    if isinstance(raw, WorkflowData):
        return raw

    check_required_fields(raw)
    try:
        data = WorkflowData.model_validate(raw)
    except ValidationError as exc:
        raise WorkflowValidationError(
            "Invalid workflow data format",
            context={
                "errors": [
                    {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
                    for err in exc.errors()
                ]
            },
        ) from exc

    dangling = find_dangling_references(data)
    if dangling:
        logger.warning(
            "Ignoring dangling references in workflow data",
            extra={"workflow_id": data.workflow.id, "dangling": dangling},
        )
    return data


def find_dangling_references(data: WorkflowData) -> List[str]:
    """List status-node links that point at ids absent from the workflow."""
    stage_ids = set(data.stage_ids)
    entity_ids = set(data.entity_ids)
    dangling: List[str] = []
    for status in data.status_nodes:
        if status.connected_to_stage and status.connected_to_stage not in stage_ids:
            dangling.append(f"{status.id}.connectedToStage={status.connected_to_stage}")
        for entity_id in status.connected_to_entities:
            if entity_id not in entity_ids:
                dangling.append(f"{status.id}.connectedToEntities={entity_id}")
    return dangling
