"""
Built-in segment templates.

A small handcrafted set: one hub, connective corridors and stairs, and
feature rooms holding the four vaults and their keys.
"""

from .hub import HUB_TEMPLATE
from .corridors import CORRIDOR_TEMPLATES
from .rooms import ROOM_TEMPLATES

BUILTIN_TEMPLATES = [HUB_TEMPLATE] + CORRIDOR_TEMPLATES + ROOM_TEMPLATES


def register_builtin_templates(catalog):
    """Register all built-in templates with the catalog."""
    for template in BUILTIN_TEMPLATES:
        catalog.register(template)


__all__ = [
    'HUB_TEMPLATE',
    'CORRIDOR_TEMPLATES',
    'ROOM_TEMPLATES',
    'BUILTIN_TEMPLATES',
    'register_builtin_templates',
]
