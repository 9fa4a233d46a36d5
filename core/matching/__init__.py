"""Matching Module - candidate retrieval, filtering, ranking and pagination."""
from core.matching.models import Candidate, RankedResult, PaginationState
from core.matching.filters import (
    FilterSpec, ProfileFilterSpec, FilterRule, FilterField, Predicate,
    CompiledFilters, PredicateCompiler, RuleKind, Placement,
    candidate_compiler, profile_compiler
)
from core.matching.retriever import CandidateStore, CandidateRetriever
from core.matching.ranker import refine, rank
from core.matching.paginator import paginate
from core.matching.service import CandidateMatchingService, CandidatePage

__all__ = [
    'Candidate', 'RankedResult', 'PaginationState',
    'FilterSpec', 'ProfileFilterSpec', 'FilterRule', 'FilterField', 'Predicate',
    'CompiledFilters', 'PredicateCompiler', 'RuleKind', 'Placement',
    'candidate_compiler', 'profile_compiler',
    'CandidateStore', 'CandidateRetriever',
    'refine', 'rank', 'paginate',
    'CandidateMatchingService', 'CandidatePage',
]
