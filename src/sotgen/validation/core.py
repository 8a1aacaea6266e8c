"""
Core data structures for the validation system.

Defines the fundamental types used throughout the validation package:
- Severity: Issue severity levels (INFO, WARN, FAIL)
- ValidationStage: Points where validation occurs
- ValidationIssue: Individual validation finding
- ValidationResult: Collection of issues with pass/fail status
- ValidationError: Exception raised when validation fails
"""

from dataclasses import asdict, dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional


class Severity(Enum):
    """Validation issue severity levels.

    - INFO: Informational, logged but doesn't affect pass/fail
    - WARN: Warning, logged but doesn't reject the result
    - FAIL: Error, the template or blueprint is rejected
    """
    INFO = auto()
    WARN = auto()
    FAIL = auto()

    def __str__(self) -> str:
        return self.name


class ValidationStage(Enum):
    """Points where validation occurs.

    - TEMPLATE_LOAD: When template metadata is read and registered
    - PLACEMENT: While the generator accepts segments
    - BLUEPRINT: On a finished generation result
    - EXPORT: When a blueprint is written out
    """
    TEMPLATE_LOAD = "template_load"
    PLACEMENT = "placement"
    BLUEPRINT = "blueprint"
    EXPORT = "export"

    def __str__(self) -> str:
        return self.value


@dataclass
class ValidationIssue:
    """Represents a single validation finding.

    Attributes:
        severity: Issue severity (INFO, WARN, FAIL)
        code: Rule code (e.g., "BP-001")
        message: Human-readable description
        rule_reference: Short name of the rule
        remediation: Optional suggested fix
        segment: Optional segment or template name
        entry_point: Optional entry point description
        file_path: Optional source file
    """
    severity: Severity
    code: str
    message: str
    rule_reference: str
    remediation: Optional[str] = None
    segment: Optional[str] = None
    entry_point: Optional[str] = None
    file_path: Optional[str] = None

    def format(self) -> str:
        """One-line display form.

        Returns:
            [SEVERITY] CODE segment=S entry=E file=F :: message :: fix=FIX
        """
        context = " ".join(f"{label}={value or '-'}" for label, value in (
            ("segment", self.segment), ("entry", self.entry_point), ("file", self.file_path)))
        return f"[{self.severity}] {self.code} {context} :: {self.message} :: fix={self.remediation or 'N/A'}"

    def to_dict(self) -> Dict[str, Optional[str]]:
        data = asdict(self)
        data['severity'] = str(self.severity)
        return data

    def __str__(self) -> str:
        return self.format()


@dataclass
class ValidationResult:
    """Issues found at one validation stage.

    A result passes while it holds no FAIL issue; warnings and infos are
    reported but never reject a template or blueprint.
    """
    issues: List[ValidationIssue] = field(default_factory=list)
    stage: Optional[ValidationStage] = None

    def _with_severity(self, severity: Severity) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity is severity]

    @property
    def passed(self) -> bool:
        return not self._with_severity(Severity.FAIL)

    @property
    def failed(self) -> bool:
        return not self.passed

    @property
    def errors(self) -> List[ValidationIssue]:
        return self._with_severity(Severity.FAIL)

    @property
    def warnings(self) -> List[ValidationIssue]:
        return self._with_severity(Severity.WARN)

    @property
    def infos(self) -> List[ValidationIssue]:
        return self._with_severity(Severity.INFO)

    def add_issue(self, issue: ValidationIssue) -> None:
        self.issues.append(issue)

    def codes(self) -> List[str]:
        """Rule codes of all issues, in order."""
        return [i.code for i in self.issues]

    def merge(self, other: 'ValidationResult') -> 'ValidationResult':
        """Append another result's issues; returns self."""
        self.issues.extend(other.issues)
        return self

    def report(self) -> str:
        """Multi-line report, FAIL issues first."""
        if not self.issues:
            return "Validation passed: No issues found"

        where = f" ({self.stage})" if self.stage else ""
        lines = [f"Validation {'PASSED' if self.passed else 'FAILED'}{where}: {len(self.issues)} issue(s)"]
        for severity in (Severity.FAIL, Severity.WARN, Severity.INFO):
            group = self._with_severity(severity)
            if group:
                lines.append(f"{severity.name} ({len(group)}):")
                lines.extend(f"  {issue.format()}" for issue in group)
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {
            'passed': self.passed,
            'stage': str(self.stage) if self.stage else None,
            'counts': {str(s): len(self._with_severity(s)) for s in Severity},
            'issues': [issue.to_dict() for issue in self.issues],
        }


class ValidationError(Exception):
    """Raised when a validation result holds FAIL issues.

    Attributes:
        result: The failing ValidationResult
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.report())
