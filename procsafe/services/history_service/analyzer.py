"""History analyzer - keyword rules over free-text patient history.

Three passes, kept separate so each invariant can be checked on its own:
- Generate: generic rules, then the selected procedure's rules
- Elevate: every high-severity issue gets a red-flag copy appended
- Dedup: first (category, text) wins, order preserved

Output order is the order rules fired, which is the display order.
"""
import dataclasses
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from procsafe.shared.models import Issue, IssueCategory, ProcedureId, Severity
from procsafe.shared.utils import hash_text_for_audit
from .config import (
    GENERIC_RULES,
    KEYWORD_GROUPS,
    PROCEDURE_RULES,
    AnalyzerConfig,
    HistoryRule,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AnalysisResult:
    """Result of analyzing one history against one procedure.

    Immutable - results cannot be modified after creation.
    """
    procedure: ProcedureId
    issues: Tuple[Issue, ...]
    rules_version: str = ""
    matched_groups: Tuple[str, ...] = ()
    analysis_latency_ms: float = 0.0
    analyzed_at: datetime = field(default_factory=_utcnow)
    # Derived from issues once, at creation
    prompts: Tuple[Issue, ...] = field(init=False)
    red_flags: Tuple[Issue, ...] = field(init=False)

    def __post_init__(self):
        prompts, red_flags = split_red_flags(self.issues)
        object.__setattr__(self, "prompts", tuple(prompts))
        object.__setattr__(self, "red_flags", tuple(red_flags))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "procedure": self.procedure.value,
            "issues": [issue.to_dict() for issue in self.issues],
            "prompts": [issue.to_dict() for issue in self.prompts],
            "red_flags": [issue.to_dict() for issue in self.red_flags],
            "rules_version": self.rules_version,
            "matched_groups": list(self.matched_groups),
            "analysis_latency_ms": round(self.analysis_latency_ms, 3),
            "analyzed_at": self.analyzed_at.isoformat(),
        }


class HistoryAnalyzer:
    """Deterministic rule engine mapping history text to safety prompts.

    Holds only immutable configuration, so a single instance can be
    shared across threads and requests.
    """

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        """Initialize analyzer with configuration.

        Args:
            config: Analyzer behavior configuration

        Raises:
            ValueError: If a procedure has no rule set registered
        """
        self.config = config or AnalyzerConfig()

        missing = [pid.value for pid in ProcedureId if pid not in PROCEDURE_RULES]
        if missing:
            raise ValueError(f"No history rules registered for: {', '.join(missing)}")

        logger.info(
            "HISTORY_ANALYZER_INITIALIZED",
            extra={
                "rules_version": self.config.rules_version,
                "keyword_group_count": len(KEYWORD_GROUPS),
                "generic_rule_count": len(GENERIC_RULES),
                "procedure_count": len(PROCEDURE_RULES),
            }
        )

    def analyze(self, history: Optional[str], procedure: ProcedureId) -> AnalysisResult:
        """Analyze patient history for a procedure.

        Never raises for any history string, including empty.

        Args:
            history: Free-text patient history (None treated as empty)
            procedure: Selected procedure

        Returns:
            AnalysisResult with ordered, deduplicated issues

        Logs:
            - HISTORY_ANALYSIS_STARTED: Before rules run
            - HISTORY_ANALYSIS_RED_FLAGS: If any red flag raised
            - HISTORY_ANALYSIS_COMPLETED: After analysis finishes
        """
        start_time = time.perf_counter()
        history = history or ""

        logger.info(
            "HISTORY_ANALYSIS_STARTED",
            extra={
                "procedure": procedure.value,
                "text_hash": hash_text_for_audit(history),
                "text_length": len(history),
            }
        )

        normalized_text = history.lower()
        rules = GENERIC_RULES + PROCEDURE_RULES[procedure]

        fired = [rule for rule in rules if rule.group.matches(normalized_text)]
        issues = deduplicate(elevate_red_flags(self._to_issues(fired)))
        matched_groups = tuple(dict.fromkeys(rule.group.name for rule in fired))

        latency_ms = (time.perf_counter() - start_time) * 1000

        result = AnalysisResult(
            procedure=procedure,
            issues=tuple(issues),
            rules_version=self.config.rules_version,
            matched_groups=matched_groups,
            analysis_latency_ms=latency_ms,
        )

        log_context = {
            "procedure": procedure.value,
            "issue_count": len(result.issues),
            "rules_version": self.config.rules_version,
            "latency_ms": latency_ms,
        }
        if self.config.log_matched_groups:
            log_context["matched_groups"] = list(matched_groups)

        red_flags = result.red_flags
        if red_flags:
            logger.warning(
                "HISTORY_ANALYSIS_RED_FLAGS",
                extra=dict(log_context, red_flag_count=len(red_flags)),
            )

        logger.info("HISTORY_ANALYSIS_COMPLETED", extra=log_context)

        return result

    def _to_issues(self, rules: Iterable[HistoryRule]) -> List[Issue]:
        return [
            Issue(
                category=rule.category,
                text=rule.text,
                severity=rule.severity,
                tags=rule.tags,
            )
            for rule in rules
        ]


def elevate_red_flags(issues: List[Issue]) -> List[Issue]:
    """Append a red-flag copy of every high-severity issue.

    The original issues are kept in place; copies go at the end in the
    same relative order.
    """
    elevated = [
        dataclasses.replace(issue, category=IssueCategory.RED_FLAG)
        for issue in issues
        if issue.severity is Severity.HIGH
    ]
    return list(issues) + elevated


def deduplicate(issues: Iterable[Issue]) -> List[Issue]:
    """Drop issues whose (category, text) was already seen, keeping order."""
    seen = set()
    unique = []
    for issue in issues:
        if issue.key in seen:
            continue
        seen.add(issue.key)
        unique.append(issue)
    return unique


def split_red_flags(issues: Iterable[Issue]) -> Tuple[List[Issue], List[Issue]]:
    """Partition issues into (prompts, red flags), both in original order."""
    prompts: List[Issue] = []
    red_flags: List[Issue] = []
    for issue in issues:
        (red_flags if issue.is_red_flag else prompts).append(issue)
    return prompts, red_flags


_default_analyzer = HistoryAnalyzer()


def analyze_history(history: Optional[str], procedure: ProcedureId) -> List[Issue]:
    """Analyze history with the default analyzer and return the issue list.

    Same (history, procedure) always gives the same list.
    """
    return list(_default_analyzer.analyze(history, procedure).issues)
