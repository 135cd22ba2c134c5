from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from .action_plan import ActionItem, build_action_plan
from .aspire import compute_aspire_scores
from .banding import score_band
from .components import ComponentResult, aggregate, score_components, weighted_total
from .consistency import ConsistencyChecker, shared_consistency_checker
from .documents import InputDocument, InvalidInput, parse_documents
from .extraction import extract_occurrences
from .feature_flags import get_flags, get_settings
from .meaning_debt import MeaningDebt, estimate_meaning_debt
from .risk_ranker import RiskTerm, rank_risk_terms
from .term_analysis import ConsistencyStats, analyze_terms
from .term_catalog import DEFAULT_CATALOG, TermCatalog
from .trace import TraceLogger, new_trace_context, utc_now_iso

ENGINE_VERSION = "semantic-score-v1.0"
DEFAULT_COMPANY_SIZE = 50


@dataclass
class AnalysisResult:
    overall_score: float
    score_band: str
    components: List[ComponentResult]
    aspire_scores: Dict[str, int]
    total_terms_analyzed: int
    high_risk_terms: List[RiskTerm]
    meaning_debt: MeaningDebt
    action_plan: List[ActionItem]
    documents_analyzed: int
    total_word_count: int
    analysis_timestamp: str
    version: str = ENGINE_VERSION
    meta: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "overall_score": self.overall_score,
            "score_band": self.score_band,
            "components": [c.to_dict() for c in self.components],
            "aspire_scores": dict(self.aspire_scores),
            "total_terms_analyzed": self.total_terms_analyzed,
            "high_risk_terms": [r.to_dict() for r in self.high_risk_terms],
            "meaning_debt": self.meaning_debt.to_dict(),
            "action_plan": [a.to_dict() for a in self.action_plan],
            "documents_analyzed": self.documents_analyzed,
            "total_word_count": self.total_word_count,
            "analysis_timestamp": self.analysis_timestamp,
            "meta": dict(self.meta),
        }


def _validate_company_size(company_size: Any) -> int:
    if isinstance(company_size, bool) or not isinstance(company_size, int) or company_size <= 0:
        raise InvalidInput("'companySize' must be a positive integer")
    return company_size


def run_analysis(
    documents: Sequence[InputDocument],
    company_size: int = DEFAULT_COMPANY_SIZE,
    use_consistency_check: bool = True,
    checker: Optional[ConsistencyChecker] = None,
    catalog: TermCatalog = DEFAULT_CATALOG,
    max_workers: int = 1,
    trace_logger: Optional[TraceLogger] = None,
    clock: Callable[[], str] = utc_now_iso,
) -> AnalysisResult:
    """
    documents → occurrences → term analyses → components → score / ASPIRE / risk / debt / actions.
    The consistency checker is only consulted when use_consistency_check is set.
    """
    docs = parse_documents(documents)
    company_size = _validate_company_size(company_size)

    if trace_logger is None and get_flags()["TRACE_ENABLED"]:
        trace_logger = TraceLogger(get_settings()["TRACE_DIR"])

    active_checker = checker if use_consistency_check else None
    stats = ConsistencyStats()
    trace: Dict[str, Any] = {
        **new_trace_context(),
        "version": ENGINE_VERSION,
        "status": "INIT",
        "documents": len(docs),
        "word_count": sum(d.word_count for d in docs),
        "company_size": company_size,
        "checker": getattr(active_checker, "name", None),
        "errors": [],
    }

    try:
        occurrences = extract_occurrences(docs, catalog)
        term_analyses = analyze_terms(
            occurrences, docs, catalog,
            checker=active_checker, max_workers=max_workers, stats=stats,
        )

        components = score_components(term_analyses, docs, catalog)
        raw_score = weighted_total(components)
        overall = aggregate(components)
        risk_terms = rank_risk_terms(term_analyses)

        result = AnalysisResult(
            overall_score=overall,
            score_band=score_band(raw_score),
            components=components,
            aspire_scores=compute_aspire_scores(term_analyses),
            total_terms_analyzed=len(term_analyses),
            high_risk_terms=risk_terms,
            meaning_debt=estimate_meaning_debt(raw_score, company_size, len(risk_terms)),
            action_plan=build_action_plan(term_analyses, components),
            documents_analyzed=len(docs),
            total_word_count=trace["word_count"],
            analysis_timestamp=clock(),
            meta={
                "consistency_checked": active_checker is not None,
                "consistency_calls": stats.calls,
                "consistency_failures": stats.failures,
            },
        )
    except Exception as e:
        trace["status"] = "ERROR"
        trace["errors"].append(str(e))
        if trace_logger:
            trace_logger.write(trace)
        raise

    trace.update({
        "status": "COMPLETE",
        "terms": result.total_terms_analyzed,
        "overall_score": result.overall_score,
        "score_band": result.score_band,
        "high_risk_terms": len(risk_terms),
        "consistency_calls": stats.calls,
        "consistency_failures": stats.failures,
    })
    if trace_logger:
        trace_logger.write(trace)

    return result


def analyze_payload(
    payload: Mapping[str, Any],
    checker: Optional[ConsistencyChecker] = None,
    trace_logger: Optional[TraceLogger] = None,
) -> AnalysisResult:
    """
    Wire-level entry point:
      {"documents": [...], "companySize": 50, "useConsistencyCheck": true}
    "inputs" / "useAI" are accepted as aliases.
    """
    if not isinstance(payload, Mapping):
        raise InvalidInput("Request body must be a JSON object")

    flags = get_flags()
    settings = get_settings()

    raw_docs = payload.get("documents", payload.get("inputs"))
    documents = parse_documents(raw_docs)

    company_size = payload.get("companySize", settings["DEFAULT_COMPANY_SIZE"])
    use_check = payload.get("useConsistencyCheck", payload.get("useAI", True))
    if not isinstance(use_check, bool):
        raise InvalidInput("'useConsistencyCheck' must be a boolean")

    use_check = use_check and flags["CONSISTENCY_CHECK_ENABLED"]
    if use_check and checker is None:
        checker = shared_consistency_checker(settings)

    return run_analysis(
        documents,
        company_size=company_size,
        use_consistency_check=use_check,
        checker=checker,
        max_workers=settings["CONSISTENCY_WORKERS"],
        trace_logger=trace_logger,
    )
