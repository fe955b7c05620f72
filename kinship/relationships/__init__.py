"""
Relationship vocabulary and transitive kinship deduction.

The suggestion sweep lives in kinship.relationships.suggestions and is not
re-exported here: it depends on the graph package, which depends on the
vocabulary.
"""

from __future__ import annotations

from .deduction import Deduction, deduce_relationship
from .rules import DEDUCTION_RULES, RULES_VERSION, DeductionRule, iter_rules
from .vocabulary import (
    DISPLAY_LABELS,
    FAMILY_LABELS,
    FRIEND_LABELS,
    INVERSE_LABELS,
    RelationshipLabel,
    display_label,
    inverse_relationship,
    normalize_relationship,
    validate_relationship,
)

__all__ = [
    "DEDUCTION_RULES",
    "DISPLAY_LABELS",
    "FAMILY_LABELS",
    "FRIEND_LABELS",
    "INVERSE_LABELS",
    "RULES_VERSION",
    "Deduction",
    "DeductionRule",
    "RelationshipLabel",
    "deduce_relationship",
    "display_label",
    "inverse_relationship",
    "iter_rules",
    "normalize_relationship",
    "validate_relationship",
]
