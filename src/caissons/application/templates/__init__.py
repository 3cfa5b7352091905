"""Caisson templates and preset configurations.

This package provides bundled template configurations for common caissons
and a TemplateManager class for listing, customizing and writing them.
"""

from caissons.application.templates.manager import (
    TemplateManager,
    TemplateNotFoundError,
    TemplateRejectedError,
    describe_cabinet,
)

__all__ = [
    "TemplateManager",
    "TemplateNotFoundError",
    "TemplateRejectedError",
    "describe_cabinet",
]
