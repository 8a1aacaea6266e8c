"""
Error types shared by the segment model.

- ConfigurationError: a template description is inconsistent and cannot be
  used (raised at construction or load time)
- InvariantViolation: a programming error such as deriving coordinates from
  an unbound placement; never caught by the generator
"""

from typing import Optional


class ConfigurationError(ValueError):
    """Raised when a segment template is malformed."""

    def __init__(self, message: str, template_name: Optional[str] = None):
        self.template_name = template_name
        if template_name:
            message = f"{template_name}: {message}"
        super().__init__(message)


class InvariantViolation(RuntimeError):
    """Raised when an internal invariant of the placement engine is broken."""
