"""
Template catalog: registry of the segment templates available to a run.

The catalog keeps registration order, which is also the pool order handed to
the generator, so the same catalog and seed reproduce the same layout.
"""

from __future__ import annotations
from typing import Dict, Iterator, List, Optional

from ..segments import ConfigurationError, SegmentTemplate, SegmentType


class TemplateCatalog:
    """Registry mapping names to segment templates."""

    def __init__(self):
        self._templates: Dict[str, SegmentTemplate] = {}

    def register(self, template: SegmentTemplate):
        """
        Register a template in the catalog.

        Raises:
            ConfigurationError: If a template with the same name (case-insensitive)
                is already registered
        """
        if self.get_template(template.name) is not None:
            raise ConfigurationError("Template already registered", template.name)
        self._templates[template.name] = template

    def register_all(self, templates):
        for template in templates:
            self.register(template)

    def get_template(self, name: str) -> Optional[SegmentTemplate]:
        """Get a template by name (case-insensitive)."""
        template = self._templates.get(name)
        if template is not None:
            return template
        lowered = name.lower()
        for key, candidate in self._templates.items():
            if key.lower() == lowered:
                return candidate
        return None

    def list_templates(self, segment_type: Optional[SegmentType] = None) -> List[str]:
        """
        List all template names, optionally filtered by segment type.

        Args:
            segment_type: Optional type filter

        Returns:
            Sorted list of template names
        """
        if segment_type is None:
            return sorted(self._templates.keys())
        return sorted(
            name for name, template in self._templates.items()
            if template.segment_type == segment_type
        )

    def list_types(self) -> List[SegmentType]:
        """Get all segment types present, in declaration order."""
        present = {t.segment_type for t in self._templates.values()}
        return [t for t in SegmentType if t in present]

    def hub_templates(self) -> List[SegmentTemplate]:
        return [t for t in self._templates.values() if t.is_hub]

    def templates(self) -> List[SegmentTemplate]:
        """All templates in registration order."""
        return list(self._templates.values())

    def copy(self) -> 'TemplateCatalog':
        """Independent catalog holding the same (immutable) templates."""
        clone = TemplateCatalog()
        clone._templates = dict(self._templates)
        return clone

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, name: str) -> bool:
        return self.get_template(name) is not None

    def __iter__(self) -> Iterator[SegmentTemplate]:
        return iter(list(self._templates.values()))


def default_catalog() -> TemplateCatalog:
    """Create a new catalog holding the built-in templates."""
    from .builtin import register_builtin_templates
    catalog = TemplateCatalog()
    register_builtin_templates(catalog)
    return catalog
