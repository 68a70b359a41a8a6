# =============================================================================
# core/services/template_path_resolver.py - Template Search Path
# =============================================================================
# Computes the ordered list of directories handed to the Jinja2 loader.
# First match wins, so order matters:
#
#   1. every directory below the template root, sorted by path
#   2. the template root itself
#   3. the fixtures template directory (test environment only)
# =============================================================================

import logging
from pathlib import Path

from app.exceptions import ResourceNotFoundError
from core.models.environment import Environment

logger = logging.getLogger(__name__)


class TemplateSearchPathResolver:
    """
    Builds the template search path for an environment.

    The path is computed on every call; nothing is cached between calls.
    """

    def __init__(self, template_root: str | Path, fixtures_root: str | Path):
        self.template_root = Path(template_root)
        self.fixtures_root = Path(fixtures_root)

    def resolve(self, environment: Environment) -> list[str]:
        """
        Return the search path for the given environment.

        Raises:
            ResourceNotFoundError: If the template root does not exist
        """
        if not self.template_root.is_dir():
            raise ResourceNotFoundError(
                f"Template directory not found: {self.template_root}",
                path=str(self.template_root),
            )

        root = self.template_root.resolve()
        directories = sorted(str(path.resolve()) for path in root.rglob("*") if path.is_dir())
        directories.append(str(root))

        if environment is Environment.TEST:
            directories.append(str(self.fixtures_root.resolve()))

        logger.debug(f"Template search path ({environment.value}): {directories}")
        return directories
