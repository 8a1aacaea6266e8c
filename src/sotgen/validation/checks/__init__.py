"""
Validation check modules.

- template_checks: entry point sanity and hub availability
- blueprint_checks: overlap, distance, seams, uniqueness, depth, features
"""

from .template_checks import check_entry_points, validate_templates
from .blueprint_checks import (
    check_distances,
    check_features,
    check_overlaps,
    check_structure,
    validate_blueprint,
)

__all__ = [
    'check_entry_points',
    'validate_templates',
    'check_distances',
    'check_features',
    'check_overlaps',
    'check_structure',
    'validate_blueprint',
]
