"""Shared domain models for the procedure safety tool."""
from .procedure import (
    ProcedureId,
    IssueCategory,
    Severity,
    UnknownProcedureError,
    Reference,
    ProcedureInfo,
    Issue,
)

__all__ = [
    "ProcedureId",
    "IssueCategory",
    "Severity",
    "UnknownProcedureError",
    "Reference",
    "ProcedureInfo",
    "Issue",
]
