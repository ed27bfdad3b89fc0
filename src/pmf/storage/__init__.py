"""Workflow data providers."""

from .catalog import InMemoryWorkflowCatalog, JsonWorkflowCatalog, WorkflowOption, WorkflowProvider

__all__ = ["InMemoryWorkflowCatalog", "JsonWorkflowCatalog", "WorkflowOption", "WorkflowProvider"]
