"""
Segment template catalog and metadata loading.
"""

from .catalog import TemplateCatalog, default_catalog
from .template_storage import (
    TemplateLoadReport,
    load_template_file,
    load_templates_from_dir,
    save_template,
    template_from_dict,
    template_to_dict,
)

__all__ = [
    'TemplateCatalog',
    'default_catalog',
    'TemplateLoadReport',
    'load_template_file',
    'load_templates_from_dir',
    'save_template',
    'template_from_dict',
    'template_to_dict',
]
