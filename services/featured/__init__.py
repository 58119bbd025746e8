from services.featured.config import FeaturedRankingConfig, load_featured_config
from services.featured.eligibility import EligibilityFilter, EligibilityOutcome
from services.featured.merge import ResultMerger
from services.featured.models import EligibleCandidate, RankedPage, ResultEntry, ScoredCandidate
from services.featured.pagination import Paginator
from services.featured.scoring import FairnessScorer
from services.featured.selection import Selector
from services.featured.service import FeaturedRankingService, RankingObservability

__all__ = [
    "EligibilityFilter",
    "EligibilityOutcome",
    "EligibleCandidate",
    "FairnessScorer",
    "FeaturedRankingConfig",
    "FeaturedRankingService",
    "Paginator",
    "RankedPage",
    "RankingObservability",
    "ResultEntry",
    "ResultMerger",
    "ScoredCandidate",
    "Selector",
    "load_featured_config",
]
