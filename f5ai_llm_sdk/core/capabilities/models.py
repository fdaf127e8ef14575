"""
Model family rule tables.

Each model family carries its own request-shape rules, grouped per
normalization revision. The normalizer looks the rules up instead of
branching on model names, so the two captured revisions stay separate
tables rather than drifting conditionals.
"""

from typing import Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ...config.model_families import ModelFamily, NormalizationRevision, classify_model


TokenField = Literal["max_tokens", "max_completion_tokens"]


class FamilyRules(BaseModel):
    """Request rewrites applied to one model family."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    token_field: Optional[TokenField] = Field(
        None, description="Field that carries the token budget; None leaves the body alone"
    )
    system_role: Optional[str] = Field(
        None, description="Replacement role for system messages; None keeps them"
    )
    disable_parallel_tool_calls: bool = Field(
        True, description="Force parallel_tool_calls=false when tools are attached"
    )
    parallel_tool_calls_exempt_prefixes: Tuple[str, ...] = Field(
        (), description="Model prefixes exempt from the parallel tool call restriction"
    )
    inject_instructions: bool = Field(
        False, description="Prepend the configured instructions to the first user message"
    )


class RevisionPolicy(BaseModel):
    """Rules shared by every family in one revision plus the per-family table."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    revision: NormalizationRevision
    requires_official_endpoint: bool = Field(
        False, description="Family and tool rules only apply against the official base URL"
    )
    families: Dict[ModelFamily, FamilyRules]
    default_rules: FamilyRules = Field(default_factory=FamilyRules)

    def rules_for(self, family: ModelFamily) -> FamilyRules:
        return self.families.get(family, self.default_rules)


LEGACY_POLICY = RevisionPolicy(
    revision=NormalizationRevision.LEGACY,
    requires_official_endpoint=False,
    families={
        ModelFamily.O_SERIES: FamilyRules(
            token_field="max_completion_tokens",
            system_role="user",
            inject_instructions=True,
        ),
        ModelFamily.GPT: FamilyRules(
            token_field="max_tokens",
            system_role="user",
        ),
    },
)

CURRENT_POLICY = RevisionPolicy(
    revision=NormalizationRevision.CURRENT,
    requires_official_endpoint=True,
    families={
        ModelFamily.O_SERIES: FamilyRules(
            token_field="max_completion_tokens",
            system_role="developer",
            parallel_tool_calls_exempt_prefixes=("o1", "o3", "o4"),
        ),
        ModelFamily.GPT: FamilyRules(
            token_field="max_tokens",
        ),
    },
)

REVISION_POLICIES: Dict[NormalizationRevision, RevisionPolicy] = {
    NormalizationRevision.LEGACY: LEGACY_POLICY,
    NormalizationRevision.CURRENT: CURRENT_POLICY,
}


def get_revision_policy(revision: NormalizationRevision) -> RevisionPolicy:
    """Get the rule table for a revision."""
    return REVISION_POLICIES[NormalizationRevision(revision)]


def get_family_rules(model_id: str, revision: NormalizationRevision) -> FamilyRules:
    """Get the rules for a model under a revision, with fallback to defaults."""
    return get_revision_policy(revision).rules_for(classify_model(model_id))
