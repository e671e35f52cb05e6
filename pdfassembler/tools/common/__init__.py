"""Shared plumbing for PDF Assembler tools."""

from __future__ import annotations

from .interfaces import AssemblyContext, BaseTool
from .pipeline import ToolRegistry, ToolSpec, register_tool, registry

__all__ = ["AssemblyContext", "BaseTool", "ToolRegistry", "ToolSpec", "register_tool", "registry"]
