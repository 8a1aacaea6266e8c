"""
Validation rule definitions.

Each rule has:
- Code: Unique identifier (e.g., "BP-001")
- Severity: FAIL, WARN, or INFO
- Rule reference: Short name of the property being checked
- Message template: Human-readable description
- Remediation: Suggested fix

Rules are organized by category:
- TMPL: Segment template metadata
- BP: Finished blueprints
"""

from dataclasses import dataclass
from typing import Optional

from .core import Severity, ValidationIssue


@dataclass(frozen=True)
class ValidationRule:
    """Definition of a validation rule.

    Attributes:
        code: Unique rule code (e.g., "BP-001")
        severity: Default severity for this rule
        rule_reference: Name of the property the rule protects
        message_template: Template for error message (use {placeholders})
        remediation_template: Template for suggested fix
    """
    code: str
    severity: Severity
    rule_reference: str
    message_template: str
    remediation_template: Optional[str] = None

    def format_message(self, **kwargs) -> str:
        return self.message_template.format(**kwargs)

    def format_remediation(self, **kwargs) -> Optional[str]:
        if self.remediation_template:
            return self.remediation_template.format(**kwargs)
        return None

    def issue(self, segment: Optional[str] = None, entry_point: Optional[str] = None,
              file_path: Optional[str] = None, **kwargs) -> ValidationIssue:
        """Build a ValidationIssue for this rule."""
        return ValidationIssue(
            severity=self.severity,
            code=self.code,
            message=self.format_message(**kwargs),
            rule_reference=self.rule_reference,
            remediation=self.format_remediation(**kwargs),
            segment=segment,
            entry_point=entry_point,
            file_path=file_path,
        )


# =============================================================================
# TEMPLATE RULES (TMPL)
# =============================================================================

TMPL_001 = ValidationRule(
    code="TMPL-001",
    severity=Severity.FAIL,
    rule_reference="Template metadata must be complete and consistent",
    message_template="Template rejected: {reason}",
    remediation_template="Fix the template metadata file and reload",
)

TMPL_002 = ValidationRule(
    code="TMPL-002",
    severity=Severity.WARN,
    rule_reference="At most one entry point per direction",
    message_template="{count} entry points face {direction}; only the first is used for matching",
    remediation_template="Remove or re-face the extra {direction} entry points",
)

TMPL_003 = ValidationRule(
    code="TMPL-003",
    severity=Severity.WARN,
    rule_reference="Templates need entry points to connect",
    message_template="Template has no entry points and can never be placed",
)

TMPL_004 = ValidationRule(
    code="TMPL-004",
    severity=Severity.FAIL,
    rule_reference="Exactly one hub is used per run",
    message_template="No hub template available",
    remediation_template="Mark one template with isHub=true",
)

TMPL_005 = ValidationRule(
    code="TMPL-005",
    severity=Severity.INFO,
    rule_reference="Exactly one hub is used per run",
    message_template="{count} hub templates found; only '{name}' is used",
)

# =============================================================================
# BLUEPRINT RULES (BP)
# =============================================================================

BP_001 = ValidationRule(
    code="BP-001",
    severity=Severity.FAIL,
    rule_reference="No two placed segments overlap",
    message_template="Segments '{a}' and '{b}' overlap",
)

BP_002 = ValidationRule(
    code="BP-002",
    severity=Severity.FAIL,
    rule_reference="Every segment lies within max distance of the hub",
    message_template="Origin {origin} is {distance:.1f} blocks from the hub (max {max_distance})",
)

BP_003 = ValidationRule(
    code="BP-003",
    severity=Severity.FAIL,
    rule_reference="Connected segments meet one block apart at their entry points",
    message_template="Seam with parent #{parent} is not adjacent",
)

BP_004 = ValidationRule(
    code="BP-004",
    severity=Severity.FAIL,
    rule_reference="Each template is placed at most once",
    message_template="Template placed {count} times",
)

BP_005 = ValidationRule(
    code="BP-005",
    severity=Severity.FAIL,
    rule_reference="Depth is parent depth + 1, hub depth 0",
    message_template="Depth {depth} does not follow parent depth {parent_depth}",
)

BP_006 = ValidationRule(
    code="BP-006",
    severity=Severity.FAIL,
    rule_reference="Required vaults are present",
    message_template="Required {color} vault was not placed",
    remediation_template="Retry with another seed or add a template holding a {color} vault",
)

BP_007 = ValidationRule(
    code="BP-007",
    severity=Severity.FAIL,
    rule_reference="Required keys are present",
    message_template="Required {color} key was not placed",
    remediation_template="Retry with another seed or add a template holding a {color} key",
)

BP_008 = ValidationRule(
    code="BP-008",
    severity=Severity.WARN,
    rule_reference="Generation should grow beyond the hub",
    message_template="Only the hub was placed",
    remediation_template="Retry with another seed",
)

BP_009 = ValidationRule(
    code="BP-009",
    severity=Severity.WARN,
    rule_reference="Generation should reach the requested size",
    message_template="Only {count} segments placed beyond the hub (minimum {minimum})",
    remediation_template="Retry with another seed or raise max distance",
)
