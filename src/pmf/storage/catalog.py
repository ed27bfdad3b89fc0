"""Workflow catalogs.

This module provides the data providers that feed the diagram engine:
- InMemoryWorkflowCatalog: workflows held in memory (seeded with samples)
- JsonWorkflowCatalog: workflows loaded from a JSON file

Providers only ever hand out fully validated WorkflowData values.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Literal, Mapping, Optional, Protocol, Union, runtime_checkable

from ..core.exceptions import ConfigurationError, WorkflowNotFoundError, WorkflowValidationError
from ..core.loader import load_workflow_data
from ..core.models import PMFModel, WorkflowData
from ..utils.logging import get_logger

logger = get_logger(__name__)


class WorkflowOption(PMFModel):
    """Selectable entry shown by selection screens."""
    id: str
    title: str
    description: str = ""
    category: Literal["workflow", "entity"] = "workflow"


@runtime_checkable
class WorkflowProvider(Protocol):
    def get(self, workflow_id: str) -> Optional[WorkflowData]:
        ...

    def list_options(self) -> List[WorkflowOption]:
        ...


# -----------------------------------------------------------------------------
# In-memory catalog
# -----------------------------------------------------------------------------


class InMemoryWorkflowCatalog:
    """Workflow catalog backed by a dict keyed by catalog id.

    Usage:
        catalog = InMemoryWorkflowCatalog.with_samples()
        data = catalog.require("hypo-loan-position")
    """

    def __init__(self, workflows: Optional[Mapping[str, Any]] = None):
        self._workflows: Dict[str, WorkflowData] = {}
        for workflow_id, raw in (workflows or {}).items():
            self.add(workflow_id, raw)

    @classmethod
    def with_samples(cls) -> "InMemoryWorkflowCatalog":
        return cls(SAMPLE_WORKFLOWS)

    def add(self, workflow_id: str, raw: Union[WorkflowData, Mapping[str, Any]]) -> WorkflowData:
        data = load_workflow_data(raw)
        self._workflows[workflow_id] = data
        return data

    def get(self, workflow_id: str) -> Optional[WorkflowData]:
        return self._workflows.get(workflow_id)

    def require(self, workflow_id: str) -> WorkflowData:
        data = self.get(workflow_id)
        if data is None:
            raise WorkflowNotFoundError(
                f"No workflow found with id: {workflow_id}",
                context={"available": sorted(self._workflows)},
            )
        return data

    def exists(self, workflow_id: str) -> bool:
        return workflow_id in self._workflows

    def list_options(self) -> List[WorkflowOption]:
        return [
            WorkflowOption(
                id=workflow_id,
                title=data.workflow.title,
                description=data.workflow.description,
            )
            for workflow_id, data in self._workflows.items()
        ]

    def list_entity_options(self) -> List[WorkflowOption]:
        # Entity-centric views are not offered yet.
        return []


# -----------------------------------------------------------------------------
# JSON file catalog
# -----------------------------------------------------------------------------


class JsonWorkflowCatalog(InMemoryWorkflowCatalog):
    """Catalog loaded from a JSON object of `{catalog_id: workflow_data}`."""

    def __init__(self, workflows: Mapping[str, Any], source: Optional[Path] = None):
        self.source = source
        super().__init__(workflows)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "JsonWorkflowCatalog":
        path = Path(path)
        try:
            payload = json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise ConfigurationError(
                "Catalog file could not be read",
                context={"path": str(path), "error": str(exc)},
            ) from exc
        except json.JSONDecodeError as exc:
            raise WorkflowValidationError(
                "Catalog file is not valid JSON",
                context={"path": str(path), "error": str(exc)},
            ) from exc
        if not isinstance(payload, dict):
            raise WorkflowValidationError(
                "Catalog file must contain a JSON object",
                context={"path": str(path)},
            )
        catalog = cls(payload, source=path)
        logger.info("Loaded workflow catalog", extra={"path": str(path), "count": len(payload)})
        return catalog


# -----------------------------------------------------------------------------
# Sample workflows
# -----------------------------------------------------------------------------


SAMPLE_WORKFLOWS: Dict[str, Dict[str, Any]] = {
    "hypo-loan-position": {
        "workflow": {
            "id": "hypo-loan-position",
            "title": "Hypo Loan Position",
            "description": "Staging and enrichment of hypothetical loan positions.",
        },
        "stages": [
            {
                "id": "stage-1",
                "title": "Stage",
                "description": "FLUME stages commitment data in PMF database",
            },
            {
                "id": "enrich-1",
                "title": "Enrich",
                "description": "PMF enriches hypo loan positions.",
            },
        ],
        "statusNodes": [
            {"id": "status-1", "label": "staged", "connectedToStage": "stage-1"},
            {
                "id": "status-2",
                "label": "position created",
                "connectedToStage": "enrich-1",
                "connectedToEntities": ["hypo-loan-position", "loan-commitment"],
            },
        ],
        "entities": [
            {"id": "hypo-loan-position", "title": "Hypo Loan Position", "color": "#f0e68c"},
            {"id": "loan-commitment", "title": "Loan Commitment", "color": "#f0e68c"},
            {"id": "hypo-loan-base-price", "title": "Hypo Loan Base Price", "color": "#f0e68c"},
        ],
    },
    "loan-commitment": {
        "workflow": {
            "id": "loan-commitment",
            "title": "Loan Commitment",
            "description": "Intake, validation and publication of loan commitments.",
        },
        "stages": [
            {"id": "receive", "title": "Receive", "description": "Commitment file arrives from origination."},
            {"id": "validate", "title": "Validate", "description": "PMF checks pricing and eligibility."},
            {"id": "publish", "title": "Publish", "description": "Commitment is published to downstream systems."},
        ],
        "statusNodes": [
            {"id": "received", "label": "received"},
            {"id": "validated", "label": "validated", "connectedToEntities": ["loan-commitment"]},
            {"id": "published", "label": "published"},
        ],
        "entities": [
            {"id": "loan-commitment", "title": "Loan Commitment"},
            {"id": "commitment-price", "title": "Commitment Price"},
        ],
    },
}
