"""Procedure and issue domain models.

This file defines the core enums and value objects shared by the
catalog and the history analyzer. Everything here is immutable: catalog
entries live for the whole process, issues are created per analysis.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class ProcedureId(Enum):
    """Supported bedside procedures.

    Declaration order is the catalog's display order.
    """
    IV_CANNULATION = "iv_cannulation"
    VENEPUNCTURE = "venepuncture"
    URINARY_CATHETER = "urinary_catheter"
    NG_TUBE = "ng_tube"
    LUMBAR_PUNCTURE = "lumbar_puncture"


class IssueCategory(Enum):
    """How a safety prompt is grouped for display."""
    CONTRAINDICATION = "contraindication"   # Prevents or strongly modifies the procedure
    CONSIDERATION = "consideration"         # Precaution, does not block
    RED_FLAG = "red-flag"                   # Urgent, shown in the red flags view


class Severity(Enum):
    """Severity of a safety prompt."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class UnknownProcedureError(ValueError):
    """Raised when a free-form identifier is not a supported procedure."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Unknown procedure: {value!r}")


@dataclass(frozen=True)
class Reference:
    """External guideline a catalog entry points to."""
    title: str
    url: str

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title, "url": self.url}


@dataclass(frozen=True)
class ProcedureInfo:
    """Static reference content for one procedure.

    Authored clinical text. Nothing downstream parses these strings,
    they are rendered verbatim.
    """
    id: ProcedureId
    name: str
    summary: str
    contraindications: Tuple[str, ...]
    considerations: Tuple[str, ...]
    equipment: Tuple[str, ...]
    red_flags: Tuple[str, ...] = ()
    references: Tuple[Reference, ...] = ()

    def __post_init__(self):
        if not self.name:
            raise ValueError(f"Procedure name must not be empty for {self.id.value}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id.value,
            "name": self.name,
            "summary": self.summary,
            "contraindications": list(self.contraindications),
            "considerations": list(self.considerations),
            "equipment": list(self.equipment),
            "red_flags": list(self.red_flags),
            "references": [ref.to_dict() for ref in self.references],
        }


@dataclass(frozen=True)
class Issue:
    """A single safety prompt produced by history analysis.

    Two issues with the same (category, text) are the same prompt;
    severity and tags do not take part in that identity.
    """
    category: IssueCategory
    text: str
    severity: Severity
    tags: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if not self.text:
            raise ValueError("Issue text must not be empty")

    @property
    def key(self) -> Tuple[IssueCategory, str]:
        return (self.category, self.text)

    @property
    def is_red_flag(self) -> bool:
        return self.category is IssueCategory.RED_FLAG

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "category": self.category.value,
            "text": self.text,
            "severity": self.severity.value,
            "tags": list(self.tags),
        }
