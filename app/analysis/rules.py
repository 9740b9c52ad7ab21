"""Declarative rule tables for the anomaly detector and compliance checker.

Each table maps a Category to an ordered tuple of rules. Order is significant:
anomaly items and missing compliance terms are reported in table order.
The tables are read-only mappings and are never mutated at runtime.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from app.analysis.models import Category


@dataclass(frozen=True)
class KeywordRule:
    """A word-bounded, case-insensitive pattern with a human-readable label."""

    label: str
    pattern: re.Pattern[str]

    @classmethod
    def of(cls, keyword: str, label: str) -> "KeywordRule":
        return cls(label=label, pattern=re.compile(rf"\b{keyword}\b", re.IGNORECASE))

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


RuleTable = Mapping[Category, tuple[KeywordRule, ...]]

ANOMALY_RULES: RuleTable = MappingProxyType(
    {
        Category.FINANCIAL: (
            KeywordRule.of("unauthorized", "Unauthorized Transaction"),
            KeywordRule.of("inconsistent", "Inconsistent Data"),
            KeywordRule.of("overpayment", "Overpayment"),
            KeywordRule.of("underpayment", "Underpayment"),
            KeywordRule.of("mismatched", "Mismatched Figures"),
        ),
        Category.LEGAL: (
            KeywordRule.of("unenforceable", "Unenforceable Clause"),
            KeywordRule.of("contradictory", "Contradictory Terms"),
            KeywordRule.of("void", "Potentially Void Clause"),
            KeywordRule.of("prohibited", "Prohibited Terms"),
            KeywordRule.of("illegal", "Potentially Illegal Terms"),
        ),
    }
)

# Labels double as the reported names of missing terms.
COMPLIANCE_RULES: RuleTable = MappingProxyType(
    {
        Category.FINANCIAL: (
            KeywordRule.of("disclosure", "disclosure"),
            KeywordRule.of("transparency", "transparency"),
            KeywordRule.of("compliance", "compliance"),
            KeywordRule.of(r"rbi\s+guidelines", "rbi guidelines"),
        ),
        Category.LEGAL: (
            KeywordRule.of("consent", "consent"),
            KeywordRule.of("liability", "liability"),
            KeywordRule.of("termination", "termination"),
            KeywordRule.of("confidentiality", "confidentiality"),
        ),
    }
)
