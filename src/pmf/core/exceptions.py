"""Custom exception hierarchy for PMF."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class PMFException(Exception):
    """Base exception type for all PMF errors."""

    message: str
    context: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        if not self.context:
            return self.message
        return f"{self.message} | context={self.context}"


class ConfigurationError(PMFException):
    """Raised when configuration is missing or invalid."""


class WorkflowValidationError(PMFException):
    """Raised when workflow data is missing required fields or is malformed."""


class WorkflowNotFoundError(PMFException):
    """Raised when a workflow is not found in the catalog."""


class UnknownCommandError(PMFException):
    """Raised when no command is registered for a node event."""
