"""History Service: keyword rules over free-text patient history.

Maps a selected procedure and pasted history to safety prompts
(contraindications, considerations, red flags). Deterministic and
stateless; no NLP, no persistence.

Components:
- analyzer.py: HistoryAnalyzer and the generate/elevate/dedup passes
- config.py: AnalyzerConfig, keyword groups and rule tables
- handler.py: Flask HTTP endpoints (/health, /procedures, /analyze)

Usage:
    # As HTTP service
    POST /analyze {"procedure": "ng_tube", "history": "..."}

    # Direct import
    from procsafe.services.history_service import analyze_history
    issues = analyze_history(history, ProcedureId.NG_TUBE)
"""

from .analyzer import (
    AnalysisResult,
    HistoryAnalyzer,
    analyze_history,
    deduplicate,
    elevate_red_flags,
    split_red_flags,
)
from .config import AnalyzerConfig, HistoryRule, KeywordGroup, KEYWORD_GROUPS

__all__ = [
    "AnalysisResult",
    "HistoryAnalyzer",
    "analyze_history",
    "deduplicate",
    "elevate_red_flags",
    "split_red_flags",
    "AnalyzerConfig",
    "HistoryRule",
    "KeywordGroup",
    "KEYWORD_GROUPS",
]
