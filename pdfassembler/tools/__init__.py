"""Namespace for pluggable PDF Assembler tools."""

from __future__ import annotations

from .common.pipeline import registry


def load_builtin_plugins() -> None:
    from . import extract  # noqa: F401  # register extract and split tools
    from . import merge  # noqa: F401
    from . import thumbnails  # noqa: F401
    from . import watermark  # noqa: F401
    from . import images  # noqa: F401


__all__ = ["registry", "load_builtin_plugins"]
