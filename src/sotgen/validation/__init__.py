"""
Validation for segment templates and generated blueprints.

Provides:
- Severity / ValidationIssue / ValidationResult / ValidationError
- Rule table (TMPL-*, BP-*)
- validate_templates() and validate_blueprint()
"""

from .core import Severity, ValidationError, ValidationIssue, ValidationResult, ValidationStage
from .rules import ValidationRule
from .checks import validate_blueprint, validate_templates

__all__ = [
    'Severity',
    'ValidationError',
    'ValidationIssue',
    'ValidationResult',
    'ValidationStage',
    'ValidationRule',
    'validate_blueprint',
    'validate_templates',
]
