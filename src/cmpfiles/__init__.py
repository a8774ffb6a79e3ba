"""
cmpfiles — compare two or more files byte by byte in a single pass.

Core features:
- Every unordered pair of inputs gets a MATCHED / NOT_MATCHED verdict
- One synchronized read pass over all inputs, bounded memory per input
- One input may be standard input ("stdin")
- xxHash64 fingerprints of fully read inputs
- CLI interface with cmp-style exit status
"""

from importlib.metadata import version as _version, PackageNotFoundError

try:
    __version__ = _version("cmpfiles")
except PackageNotFoundError:
    __version__ = "0.0.0"

# Public API — only what users should import directly
from cmpfiles.commands import CompareCommand
from cmpfiles.core import (
    CompareParams, CompareReport, CompareSession, MatchState, MatchGroup,
    CompareError, ConfigurationError, ResourceError)
from cmpfiles.api import open_sources, build_session, run, pair_at, verdict_at, close
from cmpfiles.services import ReportService
from cmpfiles.utils.convert_utils import ConvertUtils

__all__ = [
    "CompareCommand",
    "CompareParams",
    "CompareReport",
    "CompareSession",
    "MatchState",
    "MatchGroup",
    "CompareError",
    "ConfigurationError",
    "ResourceError",
    "open_sources",
    "build_session",
    "run",
    "pair_at",
    "verdict_at",
    "close",
    "ReportService",
    "ConvertUtils",
    "__version__",
]
