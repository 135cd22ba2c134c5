from .engine import run_analysis, analyze_payload, AnalysisResult, ENGINE_VERSION
from .documents import InputDocument, InvalidInput, parse_documents
from .term_catalog import DEFAULT_CATALOG, TermCatalog, TermCategory
from .feature_flags import get_flags, get_settings
from .trace import TraceLogger

# Pipeline stages
from .extraction import extract_occurrences
from .definitions import find_definition, detect_definition
from .term_analysis import analyze_terms
from .components import score_components, aggregate, WEIGHTS
from .banding import score_band
from .aspire import compute_aspire_scores
from .risk_ranker import rank_risk_terms
from .meaning_debt import estimate_meaning_debt
from .action_plan import build_action_plan

# Consistency capability
from .consistency import (
    ConsistencyChecker, NullConsistencyChecker, AnthropicConsistencyChecker,
    ConsistencyCheckError, build_consistency_checker, shared_consistency_checker,
)
