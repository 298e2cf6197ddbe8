"""Template manager for rendering package documentation with Jinja2.

Templates live in the package's templates/ directory. HTML templates
are autoescaped; doc text reaches them through ``Doc.html()``, which
is already escaped markup.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from pkgdoc.model import Package

logger = logging.getLogger(__name__)

_DEFAULT_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

FORMATS = {"text": "package.txt.j2", "html": "package.html.j2"}


class TemplateManager:
    """Loads and renders the package documentation templates."""

    def __init__(self, templates_dir: Optional[str] = None) -> None:
        """Initialize the template manager.

        Args:
            templates_dir: Path to the templates directory. Uses the
                bundled templates/ directory if not specified.
        """
        self._templates_path = (
            Path(templates_dir) if templates_dir else _DEFAULT_TEMPLATES_DIR
        )

        if not self._templates_path.exists():
            logger.warning("Templates directory not found: %s", self._templates_path)

        self._env = Environment(
            loader=FileSystemLoader(str(self._templates_path)),
            autoescape=select_autoescape(enabled_extensions=("html.j2",)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        logger.debug("Template manager initialized with: %s", self._templates_path)

    def render_package(self, package: Package, output_format: str = "text") -> str:
        """Render a package model.

        Args:
            package: The package to render.
            output_format: One of the keys of ``FORMATS``.

        Returns:
            The rendered document.

        Raises:
            ValueError: If the format is unknown.
        """
        if output_format not in FORMATS:
            raise ValueError(f"unknown output format: {output_format!r}")
        return self._render(FORMATS[output_format], package=package)

    def _render(self, template_name: str, **kwargs: Any) -> str:
        template = self._env.get_template(template_name)
        rendered = template.render(**kwargs)
        logger.debug("Rendered template %s (%d chars)", template_name, len(rendered))
        return rendered
