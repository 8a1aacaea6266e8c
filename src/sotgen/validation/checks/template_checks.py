"""
Template validation checks.

Checks a template pool before generation:
- Duplicate entry point directions (TMPL-002)
- Templates without entry points (TMPL-003)
- Hub availability (TMPL-004, TMPL-005)
"""

from collections import Counter
from typing import Sequence

from ...generators.segments import SegmentTemplate
from ..core import ValidationResult, ValidationStage
from ..rules import TMPL_002, TMPL_003, TMPL_004, TMPL_005


def check_entry_points(template: SegmentTemplate) -> ValidationResult:
    """Check one template's entry points (TMPL-002, TMPL-003)."""
    result = ValidationResult(stage=ValidationStage.TEMPLATE_LOAD)
    if not template.entry_points:
        result.add_issue(TMPL_003.issue(segment=template.name))
        return result

    counts = Counter(e.direction for e in template.entry_points)
    for direction, count in counts.items():
        if count > 1:
            result.add_issue(TMPL_002.issue(
                segment=template.name, entry_point=str(direction),
                count=count, direction=direction,
            ))
    return result


def validate_templates(templates: Sequence[SegmentTemplate]) -> ValidationResult:
    """
    Validate a template pool.

    Args:
        templates: Templates in pool order

    Returns:
        ValidationResult; fails only when no hub is available
    """
    result = ValidationResult(stage=ValidationStage.TEMPLATE_LOAD)
    for template in templates:
        result.merge(check_entry_points(template))

    hubs = [t for t in templates if t.is_hub]
    if not hubs:
        result.add_issue(TMPL_004.issue())
    elif len(hubs) > 1:
        result.add_issue(TMPL_005.issue(segment=hubs[0].name, count=len(hubs), name=hubs[0].name))
    return result
