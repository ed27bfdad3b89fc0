"""PMF - workflow diagram layout and connection engine."""

from typing import TYPE_CHECKING

__all__ = ["Settings", "assemble", "assemble_view"]

if TYPE_CHECKING:
    from .config.settings import Settings
    from .diagram.assembler import assemble, assemble_view


def __getattr__(name: str):
    if name == "Settings":
        from .config.settings import Settings

        return Settings
    if name in {"assemble", "assemble_view"}:
        from .diagram import assembler

        return getattr(assembler, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
