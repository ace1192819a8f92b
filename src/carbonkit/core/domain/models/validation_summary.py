#!/usr/bin/env python3
# src/carbonkit/core/domain/models/validation_summary.py

"""
Domain model for the outcome of a structural validation pass.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class ValidationSummary:
    """Hard errors and soft warnings collected by a validation pass."""

    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def merge(self, other: "ValidationSummary") -> "ValidationSummary":
        """Return a summary holding the messages of both summaries in order."""
        return ValidationSummary(
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
        )
