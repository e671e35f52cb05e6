"""Tool registry used by the public functions and the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .interfaces import AssemblyContext, BaseTool


@dataclass(frozen=True)
class ToolSpec:
    name: str
    tool_class: type[BaseTool]
    summary: str = ""


class ToolRegistry:
    """Maps tool names to :class:`BaseTool` subclasses."""

    def __init__(self) -> None:
        self._specs: Dict[str, ToolSpec] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    def register(self, name: str, tool_class: type[BaseTool], summary: Optional[str] = None) -> ToolSpec:
        if name in self._specs:
            raise ValueError(f"Tool '{name}' is already registered")
        if summary is None:
            doc = (tool_class.__doc__ or "").strip()
            summary = doc.splitlines()[0] if doc else ""
        spec = ToolSpec(name=name, tool_class=tool_class, summary=summary)
        self._specs[name] = spec
        return spec

    def create(self, name: str, context: AssemblyContext) -> BaseTool:
        spec = self._specs.get(name)
        if spec is None:
            available = ", ".join(self.names()) or "none"
            raise KeyError(f"Tool '{name}' is not registered (available: {available})")
        return spec.tool_class(context)

    def names(self) -> List[str]:
        return sorted(self._specs)

    def get(self, name: str) -> type[BaseTool] | None:
        spec = self._specs.get(name)
        return spec.tool_class if spec else None

    def specs(self) -> List[ToolSpec]:
        return [self._specs[name] for name in self.names()]


registry = ToolRegistry()


def register_tool(name: str, summary: Optional[str] = None):
    """Class decorator adding a tool to the shared :data:`registry`."""

    def decorator(cls: type[BaseTool]) -> type[BaseTool]:
        registry.register(name, cls, summary)
        return cls

    return decorator


__all__ = [
    "AssemblyContext",
    "BaseTool",
    "ToolRegistry",
    "ToolSpec",
    "register_tool",
    "registry",
]
