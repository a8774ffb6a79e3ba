"""
Core comparison engine: pair enumeration, byte sources, and the round-based comparator.

This package contains the whole algorithmic part of cmpfiles:
- count_combinations / CombinationSet: ordered pair table with one verdict per pair
- Source / open_sources: unbuffered binary sources with an exclusive stdin binding
- StreamComparator: lockstep block-by-block comparison of every pair
- CompareSession: owns sources, buffers and verdicts for one run
- Models: MatchState, Pair, WorkingBuffer, CompareParams, CompareReport

All components are pure Python with no presentation dependencies.
"""

from .errors import CompareError, ConfigurationError, ResourceError
from .models import (
    MatchState, Pair, WorkingBuffer, CompareStats, CompareParams, CompareReport,
    PairResult, MatchGroup, DEFAULT_BUFFER_SIZE, STDIN_IDENTITY)
from .combinations import CombinationSet, count_combinations
from .sources import Source, StdinBinding, open_sources
from .comparator import StreamComparator
from .session import CompareSession

__all__ = [
    "CompareError",
    "ConfigurationError",
    "ResourceError",
    "MatchState",
    "Pair",
    "WorkingBuffer",
    "CompareStats",
    "CompareParams",
    "CompareReport",
    "PairResult",
    "MatchGroup",
    "DEFAULT_BUFFER_SIZE",
    "STDIN_IDENTITY",
    "CombinationSet",
    "count_combinations",
    "Source",
    "StdinBinding",
    "open_sources",
    "StreamComparator",
    "CompareSession",
]
