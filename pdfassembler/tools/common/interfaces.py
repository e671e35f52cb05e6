"""Core interfaces and context objects shared by PDF Assembler tools."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from ...config import AssemblerSettings, get_settings
from ...core.document import DEFAULT_NAME, Document
from ...exceptions import DocumentValidationError
from ...merge.merger import load_documents


@dataclass
class AssemblyContext:
    """Holds shared execution state for a tool invocation."""

    sources: List[bytes] = field(default_factory=list)
    names: List[str] = field(default_factory=list)
    config: dict[str, Any] = field(default_factory=dict)
    settings: Optional[AssemblerSettings] = None
    logger: Optional[logging.Logger] = None
    documents: Optional[List[Document]] = None

    def __post_init__(self) -> None:
        self.sources = list(self.sources)
        self.names = [str(name) for name in self.names]
        if self.settings is None:
            self.settings = get_settings()

    def name_for(self, index: int) -> str:
        if index < len(self.names) and self.names[index]:
            return self.names[index]
        return DEFAULT_NAME if len(self.sources) == 1 else f"document-{index + 1}.pdf"

    def ensure_documents(self) -> List[Document]:
        if self.documents is None:
            names = [self.name_for(index) for index in range(len(self.sources))]
            self.documents = load_documents(self.sources, names)
        return self.documents

    def ensure_document(self) -> Document:
        if len(self.sources) != 1:
            raise DocumentValidationError(
                f"Tool requires exactly one source document, got {len(self.sources)}"
            )
        return self.ensure_documents()[0]


class BaseTool:
    """Base class for all pluggable PDF Assembler tools."""

    name: str

    def __init__(self, context: AssemblyContext) -> None:
        self.context = context

    def run(self) -> Any:  # pragma: no cover - to be implemented by subclasses
        raise NotImplementedError


