"""Application layer - use cases and orchestration."""

from .commands import BuildCaissonCommand
from .dtos import CaissonOutput
from .line_items import ExternalLineItem, to_line_items

__all__ = [
    "BuildCaissonCommand",
    "CaissonOutput",
    "ExternalLineItem",
    "to_line_items",
]
