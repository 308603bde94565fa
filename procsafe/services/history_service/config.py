"""History Service configuration, keyword groups and rules.

Keyword groups are hard-coded trigger phrases. Matching is plain
case-insensitive substring containment: "seizure" also matches
"seizures", and a phrase embedded in a longer word will match too.
Those false positives/negatives are accepted; this is not clinical NLP.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple

from procsafe.shared.models import IssueCategory, ProcedureId, Severity


@dataclass(frozen=True)
class AnalyzerConfig:
    """Configuration for history analysis behavior."""

    # Version tracking for audit trail
    rules_version: str = "2026.10.19"

    # Include matched keyword group names in analysis logs
    log_matched_groups: bool = True


@dataclass(frozen=True)
class KeywordGroup:
    """Named set of trigger phrases, stored lowercase."""
    name: str
    phrases: FrozenSet[str]

    def __post_init__(self):
        if not self.phrases:
            raise ValueError(f"Keyword group {self.name!r} has no phrases")
        if any(not phrase or phrase != phrase.lower() for phrase in self.phrases):
            raise ValueError(f"Keyword group {self.name!r} phrases must be non-empty lowercase")

    def matches(self, normalized_text: str) -> bool:
        """True if any phrase occurs in already-lowercased text."""
        return any(phrase in normalized_text for phrase in self.phrases)


@dataclass(frozen=True)
class HistoryRule:
    """Emit one issue when its keyword group matches."""
    group: KeywordGroup
    category: IssueCategory
    severity: Severity
    text: str
    tags: Tuple[str, ...] = ()


# ==========================================================================
# KEYWORD GROUPS
# ==========================================================================

ANTICOAGULANTS = KeywordGroup("anticoagulants", frozenset({
    "warfarin",
    "apixaban",
    "rivaroxaban",
    "dabigatran",
    "edoxaban",
    "heparin",
    "enoxaparin",
    # Antiplatelets share the bleeding-risk prompts
    "clopidogrel",
    "ticagrelor",
    "prasugrel",
}))

LATEX_ALLERGY = KeywordGroup("latex_allergy", frozenset({"latex"}))

CHLORHEXIDINE_ALLERGY = KeywordGroup("chlorhexidine_allergy", frozenset({
    "chlorhexidine",
    "chloraprep",
}))

ARM_AVOIDANCE = KeywordGroup("arm_avoidance", frozenset({
    "lymphoedema",
    "lymphedema",
    "mastectomy",
    "av fistula",
    "cellulitis",
}))

LP_NEURO_SIGNS = KeywordGroup("lp_neuro_signs", frozenset({
    "papilloedema",
    "papilledema",
    "focal neurology",
    "seizure",
    "reduced consciousness",
    "brain tumour",
    "brain tumor",
    "mass lesion",
    "raised icp",
    "intracranial pressure",
}))

NG_TRAUMA = KeywordGroup("ng_trauma", frozenset({
    "basal skull fracture",
    "mid-face fracture",
    "midface fracture",
    "facial trauma",
}))

CATHETER_TRAUMA = KeywordGroup("catheter_trauma", frozenset({
    "blood at meatus",
    "pelvic fracture",
    "high-riding prostate",
    "urethral injury",
}))


# ==========================================================================
# RULES
# ==========================================================================

# Apply to every procedure, evaluated first
GENERIC_RULES: Tuple[HistoryRule, ...] = (
    HistoryRule(
        group=ANTICOAGULANTS,
        category=IssueCategory.CONSIDERATION,
        severity=Severity.MEDIUM,
        text="Anticoagulation/antiplatelet use — check INR/platelets; discuss timing/alternatives.",
        tags=("anticoagulation",),
    ),
    HistoryRule(
        group=LATEX_ALLERGY,
        category=IssueCategory.CONSIDERATION,
        severity=Severity.MEDIUM,
        text="Latex allergy — use non-latex equipment.",
        tags=("allergy",),
    ),
    HistoryRule(
        group=CHLORHEXIDINE_ALLERGY,
        category=IssueCategory.CONSIDERATION,
        severity=Severity.MEDIUM,
        text="Chlorhexidine allergy — use povidone-iodine skin prep.",
        tags=("allergy",),
    ),
)

_SITE_SELECTION_RULES: Tuple[HistoryRule, ...] = (
    HistoryRule(
        group=ARM_AVOIDANCE,
        category=IssueCategory.CONSIDERATION,
        severity=Severity.HIGH,
        text="Avoid limb with lymphoedema/AV fistula/previous mastectomy/cellulitis.",
        tags=("site selection",),
    ),
)

# Exactly one entry is applied per analysis
PROCEDURE_RULES: Mapping[ProcedureId, Tuple[HistoryRule, ...]] = MappingProxyType({
    ProcedureId.IV_CANNULATION: _SITE_SELECTION_RULES,
    ProcedureId.VENEPUNCTURE: _SITE_SELECTION_RULES,
    ProcedureId.URINARY_CATHETER: (
        HistoryRule(
            group=CATHETER_TRAUMA,
            category=IssueCategory.CONTRAINDICATION,
            severity=Severity.HIGH,
            text="Suspected urethral injury — do NOT pass catheter; call urology, consider suprapubic.",
            tags=("trauma",),
        ),
    ),
    ProcedureId.NG_TUBE: (
        HistoryRule(
            group=NG_TRAUMA,
            category=IssueCategory.CONTRAINDICATION,
            severity=Severity.HIGH,
            text="Basal skull/mid-face trauma — avoid nasal route; seek senior review.",
            tags=("trauma",),
        ),
    ),
    ProcedureId.LUMBAR_PUNCTURE: (
        HistoryRule(
            group=LP_NEURO_SIGNS,
            category=IssueCategory.CONTRAINDICATION,
            severity=Severity.HIGH,
            text="Signs of raised ICP/focal neurology — image first and discuss with senior.",
            tags=("neuro",),
        ),
        # Separate from the generic anticoagulation consideration; both fire
        HistoryRule(
            group=ANTICOAGULANTS,
            category=IssueCategory.CONTRAINDICATION,
            severity=Severity.HIGH,
            text="Anticoagulated — correct coagulopathy and check counts before LP.",
            tags=("bleeding risk",),
        ),
    ),
})

KEYWORD_GROUPS: Tuple[KeywordGroup, ...] = (
    ANTICOAGULANTS,
    LATEX_ALLERGY,
    CHLORHEXIDINE_ALLERGY,
    ARM_AVOIDANCE,
    LP_NEURO_SIGNS,
    NG_TRAUMA,
    CATHETER_TRAUMA,
)
