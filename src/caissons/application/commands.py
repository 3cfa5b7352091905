"""Application commands (use cases) for caisson generation."""

from __future__ import annotations

import logging

from caissons.domain.services import (
    compute_drillings,
    decompose,
    generate_documents,
)
from caissons.domain.value_objects import CabinetConfig

from .dtos import CaissonOutput
from .line_items import to_line_items

logger = logging.getLogger(__name__)


class BuildCaissonCommand:
    """Run the full pipeline: decomposition, drilling, geometry and line items.

    Control flows one way. Line items branch off the decomposition result;
    geometry is generated from the drilling plan.
    """

    def __init__(self, expand_line_items: bool = False) -> None:
        self.expand_line_items = expand_line_items

    def execute(self, config: CabinetConfig, project_name: str | None = None) -> CaissonOutput:
        """Build a caisson.

        Args:
            config: Cabinet configuration.
            project_name: Base name for output files. Defaults to the
                configuration name.

        Returns:
            CaissonOutput with every product and finding.
        """
        result = decompose(config)
        plan = compute_drillings(result.panels, config)
        documents, withheld = generate_documents(result, plan)
        line_items = to_line_items(result, expand=self.expand_line_items)

        output = CaissonOutput(
            result=result,
            plan=plan,
            documents=documents,
            withheld=withheld,
            line_items=line_items,
            project_name=project_name or config.name,
        )
        logger.debug(
            f"Built '{output.project_name}': {len(documents)} documents, "
            f"{len(withheld)} withheld, {output.error_count} errors"
        )
        return output
