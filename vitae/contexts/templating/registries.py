"""
Templating Registries

Template catalog (OmegaConf) and Jinja2 template loading/caching for LaTeX
generation.
"""

import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound
from omegaconf import OmegaConf

from vitae.contexts.templating.exceptions import UnknownTemplateError

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("VITAE_TEMPLATES_PATH", Path(__file__).parent / "templates"))
CATALOG_FILENAME = "catalog.yaml"
TEMPLATE_FILENAME = "template.tex.jinja"


class TemplateCatalog:
    """
    Catalog of visual templates, loaded from {templates_path}/catalog.yaml.

    Each entry has a display name, description and the style values the
    LaTeX template reads (accent color, font package, sans-serif flag).
    """

    def __init__(self, templates_path: Optional[Path] = None):
        self.templates_path = Path(templates_path or TEMPLATES_PATH)
        catalog = OmegaConf.load(self.templates_path / CATALOG_FILENAME)
        self._entries: Dict[str, Dict[str, Any]] = OmegaConf.to_container(
            catalog.templates, resolve=True
        )
        self.default_id: str = catalog.get("default", next(iter(self._entries)))

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._entries

    def ids(self) -> List[str]:
        return list(self._entries)

    def get(self, template_id: str) -> Dict[str, Any]:
        """
        Catalog entry for a template id.

        Raises:
            UnknownTemplateError: If template_id is not in the catalog
        """
        if template_id not in self._entries:
            raise UnknownTemplateError(template_id, self.ids())
        return dict(self._entries[template_id])


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for LaTeX generation.

    Templates are stored in {templates_path}/{template_id}/template.tex.jinja
    and use custom delimiters to avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>

    Every <<< var >>> output passes through the finalize callable, so text
    values are LaTeX-escaped without templates having to ask for it.
    """

    def __init__(
        self,
        templates_path: Optional[Path] = None,
        finalize: Optional[Callable[[Any], Any]] = None,
    ):
        """
        Initialize the template registry.

        Args:
            templates_path: Base path for template directories. Defaults to
                           VITAE_TEMPLATES_PATH from environment
            finalize: Applied to every variable expression before output
        """
        self.templates_path = Path(templates_path or TEMPLATES_PATH)
        self.catalog = TemplateCatalog(self.templates_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            # Custom delimiters to avoid LaTeX brace conflicts
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            # Preserve whitespace (important for LaTeX)
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            finalize=finalize,
        )

    def get_template(self, template_id: str) -> Template:
        """
        Get a template by id, loading and caching it if necessary.

        Args:
            template_id: Catalog id (e.g., 'professional')

        Returns:
            Jinja2 Template object

        Raises:
            UnknownTemplateError: If template_id is not in the catalog
            TemplateNotFound: If the catalog lists it but the file is missing
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if template_id in self._cache:
            return self._cache[template_id]

        if template_id not in self.catalog:
            raise UnknownTemplateError(template_id, self.catalog.ids())

        template_path = f"{template_id}/{TEMPLATE_FILENAME}"
        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template file missing for '{template_id}' at {self.templates_path / template_path}"
            ) from e

        self._cache[template_id] = template
        return template

    def get_template_path(self, template_id: str) -> Path:
        return self.templates_path / template_id / TEMPLATE_FILENAME

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, template_id: str) -> bool:
        return template_id in self._cache
