"""Model family rules and policy layer.

This layer handles:
- Per-family request rewrite rules, grouped by normalization revision
- Host-based stop word ceilings
- Prediction and parallel tool call policies
"""

from .models import (
    FamilyRules,
    RevisionPolicy,
    REVISION_POLICIES,
    LEGACY_POLICY,
    CURRENT_POLICY,
    get_family_rules,
    get_revision_policy
)
from .policy import (
    get_max_stop_words,
    supports_prediction,
    should_disable_parallel_tool_calls
)

__all__ = [
    "FamilyRules",
    "RevisionPolicy",
    "REVISION_POLICIES",
    "LEGACY_POLICY",
    "CURRENT_POLICY",
    "get_family_rules",
    "get_revision_policy",
    # Policy helpers
    "get_max_stop_words",
    "supports_prediction",
    "should_disable_parallel_tool_calls"
]
