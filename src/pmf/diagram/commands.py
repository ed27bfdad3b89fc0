"""Event dispatch for diagram nodes.

Nodes carry only an id and a kind. UI events (click, connect, ...) are routed
through a `CommandRegistry` that maps `(node kind, event type)` to a `Command`.
A command never mutates anything: it receives the current `ViewState` and
returns the next one, which the caller feeds into the next assembly.

Built-in bindings (see `default_registry`):
- entity group  / click   -> toggle entity chips
- stage, status, entity / click -> select (or deselect) the node
- container     / click   -> clear node selection
- stage, status / connect -> record a custom edge to `payload["target"]`
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..core.exceptions import PMFException, UnknownCommandError
from ..core.models import DiagramGraph, NodeKind, PositionedNode
from ..state.selection import ViewState, add_custom_edge, select_node, toggle_entities
from ..utils.logging import get_logger

logger = get_logger(__name__)


# -----------------------------------------------------------------------------
# Command Result
# -----------------------------------------------------------------------------


@dataclass
class CommandResult:
    """Result of dispatching an event. `state` is unchanged on failure."""
    success: bool
    state: ViewState
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"success": self.success}
        if self.error is not None:
            result["error"] = self.error
        return result


# -----------------------------------------------------------------------------
# Command Base Class
# -----------------------------------------------------------------------------


class Command(ABC):
    """Base class for node event commands."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def event_type(self) -> str:
        pass

    @property
    @abstractmethod
    def node_kinds(self) -> Tuple[NodeKind, ...]:
        """Node kinds this command handles."""
        pass

    @abstractmethod
    def execute(
        self, node: PositionedNode, state: ViewState, payload: Mapping[str, Any]
    ) -> ViewState:
        pass


class ToggleEntitiesCommand(Command):
    name = "toggle_entities"
    event_type = "click"
    node_kinds = (NodeKind.ENTITY_GROUP,)

    def execute(self, node, state, payload):
        return toggle_entities(state)


class SelectNodeCommand(Command):
    """Select a node; clicking the selected node again clears the selection."""

    name = "select_node"
    event_type = "click"
    node_kinds = (NodeKind.STAGE, NodeKind.STATUS, NodeKind.ENTITY)

    def execute(self, node, state, payload):
        if state.selected_node_id == node.id:
            return select_node(state, None)
        return select_node(state, node.id)


class ClearSelectionCommand(Command):
    name = "clear_node_selection"
    event_type = "click"
    node_kinds = (NodeKind.CONTAINER,)

    def execute(self, node, state, payload):
        return select_node(state, None)


class ConnectCommand(Command):
    name = "connect"
    event_type = "connect"
    node_kinds = (NodeKind.STAGE, NodeKind.STATUS)

    def execute(self, node, state, payload):
        target = payload.get("target")
        if not target:
            raise ValueError("connect requires a 'target' node id")
        if target == node.id:
            raise ValueError("Connection cannot be a self-loop")
        return add_custom_edge(state, node.id, str(target))


# -----------------------------------------------------------------------------
# Command Registry
# -----------------------------------------------------------------------------


class CommandRegistry:
    """Dispatch table from (node kind, event type) to command."""

    def __init__(self):
        self._commands: Dict[Tuple[NodeKind, str], Command] = {}

    def register(self, command: Command) -> None:
        for kind in command.node_kinds:
            self._commands[(kind, command.event_type)] = command

    def get(self, kind: NodeKind, event_type: str) -> Optional[Command]:
        return self._commands.get((kind, event_type))

    def require(self, kind: NodeKind, event_type: str) -> Command:
        command = self.get(kind, event_type)
        if command is None:
            raise UnknownCommandError(
                "No command registered for node event",
                context={"kind": kind.value, "event_type": event_type},
            )
        return command

    def list_commands(self) -> List[Command]:
        unique: Dict[str, Command] = {}
        for command in self._commands.values():
            unique.setdefault(command.name, command)
        return list(unique.values())

    def dispatch(
        self,
        node: PositionedNode,
        event_type: str,
        state: ViewState,
        payload: Optional[Mapping[str, Any]] = None,
    ) -> CommandResult:
        """Run the command bound to this node event."""
        try:
            command = self.require(node.kind, event_type)
            new_state = command.execute(node, state, payload or {})
        except (PMFException, ValueError) as exc:
            logger.info(
                "Node event rejected",
                extra={"node_id": node.id, "event_type": event_type, "error": str(exc)},
            )
            return CommandResult(success=False, state=state, error=str(exc))
        return CommandResult(success=True, state=new_state)

    def dispatch_to(
        self,
        graph: DiagramGraph,
        node_id: str,
        event_type: str,
        state: ViewState,
        payload: Optional[Mapping[str, Any]] = None,
    ) -> CommandResult:
        """Dispatch an event addressed by node id within an assembled graph."""
        node = graph.get_node(node_id)
        if node is None:
            return CommandResult(success=False, state=state, error=f"Unknown node: {node_id}")
        return self.dispatch(node, event_type, state, payload)


def default_registry() -> CommandRegistry:
    registry = CommandRegistry()
    registry.register(ToggleEntitiesCommand())
    registry.register(SelectNodeCommand())
    registry.register(ClearSelectionCommand())
    registry.register(ConnectCommand())
    return registry
