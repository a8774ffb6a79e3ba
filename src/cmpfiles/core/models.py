"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for many-way byte comparison: verdicts, pairs, working buffers,
run statistics and the immutable report handed to the presentation layer.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Callable, NamedTuple
from enum import Enum
import logging

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 16384
STDIN_IDENTITY = "stdin"


# =============================
# Enums
# =============================

class MatchState(Enum):
    """
    Comparison state of a single pair.
    UNKNOWN is the initial state; NOT_MATCHED and MATCHED are terminal.
    """
    UNKNOWN = "unknown"
    NOT_MATCHED = "not-matched"
    MATCHED = "matched"

    @property
    def is_terminal(self) -> bool:
        return self is not MatchState.UNKNOWN

    @property
    def display_name(self) -> str:
        """Human-readable name for report output."""
        mapping = {
            MatchState.UNKNOWN: "Unknown",
            MatchState.NOT_MATCHED: "Not matched",
            MatchState.MATCHED: "Matched",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

class Pair(NamedTuple):
    """Two source indices to compare, always a < b."""
    a: int
    b: int


class WorkingBuffer:
    """
    Fixed-capacity byte buffer owned by one source.
    `count` holds the number of valid bytes from the most recent read.
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError("Buffer capacity must be positive")
        self.capacity = capacity
        self._data: Optional[bytearray] = bytearray(capacity)
        self.count = 0

    @property
    def released(self) -> bool:
        return self._data is None

    @property
    def view(self) -> memoryview:
        """Writable view over the whole buffer."""
        if self._data is None:
            raise ValueError("Buffer has been released")
        return memoryview(self._data)

    @property
    def data(self) -> memoryview:
        """The valid bytes of the most recent read."""
        return self.view[:self.count]

    def same_content(self, other: 'WorkingBuffer') -> bool:
        """Full binary comparison of the valid bytes of both buffers."""
        return self.count == other.count and self.data == other.data

    def release(self) -> None:
        self._data = None
        self.count = 0

    def __repr__(self):
        return f"<WorkingBuffer capacity={self.capacity}, count={self.count}>"


@dataclass
class CompareStats:
    """
    Statistics collected while comparing sources.
    """
    def __init__(self):
        self.total_time: float = 0.0
        self.rounds: int = 0
        self.bytes_read: int = 0
        self.decided_per_round: List[int] = []
        self._listeners: List[Callable[[int, Dict], None]] = []

    def add_listener(self, listener: Callable[[int, Dict], None]):
        """Adds a listener to receive an update after every round."""
        self._listeners.append(listener)

    def update_round(self, bytes_read: int, decided: int, total: int) -> None:
        self.rounds += 1
        self.bytes_read += bytes_read
        self.decided_per_round.append(decided)

        update = {"bytes": bytes_read, "decided": decided, "total": total}
        for listener in self._listeners:
            try:
                listener(self.rounds, update)
            except Exception as e:
                logger.warning(f"⚠️ Error in stats event handler: {e}")

    def print_summary(self) -> str:
        lines = [
            "📊 Comparison Statistics:",
            f"Total Execution Time: {self.total_time:.3f}s",
            f"Rounds: {self.rounds}",
            f"Bytes read: {self.bytes_read}",
        ]
        if self.decided_per_round:
            lines.append(f"Pairs decided: {self.decided_per_round[-1]}")
        return "\n".join(lines)


@dataclass(frozen=True)
class PairResult:
    """Verdict of one pair, as seen by the reporting layer."""
    position: int
    pair: Pair
    state: MatchState
    identity_a: str
    identity_b: str


@dataclass
class MatchGroup:
    """
    Sources whose data matched each other byte by byte.
    """
    identities: List[str]
    fingerprint: Optional[str] = None

    @property
    def match_count(self) -> int:
        return len(self.identities)

    def __repr__(self):
        return f"<MatchGroup count={len(self.identities)}>"


@dataclass
class CompareReport:
    """
    Immutable outcome of a finished comparison run.
    Holds no open resources and outlives the session that produced it.
    """
    identities: List[str]
    results: List[PairResult]
    all_matched: bool
    stats: CompareStats
    fingerprints: Dict[str, Optional[str]] = field(default_factory=dict)

    @property
    def matched(self) -> List[PairResult]:
        return [r for r in self.results if r.state is MatchState.MATCHED]

    @property
    def not_matched(self) -> List[PairResult]:
        return [r for r in self.results if r.state is MatchState.NOT_MATCHED]

    def __repr__(self):
        return f"<CompareReport sources={len(self.identities)}, pairs={len(self.results)}>"


"""
DTO for comparison parameters with built-in validation.
Interface-agnostic, shared by the command layer and the CLI.
"""
from cmpfiles.core.errors import ConfigurationError
from cmpfiles.utils.convert_utils import ConvertUtils


@dataclass
class CompareParams:
    """Parameters for a comparison run with validation."""
    identities: List[str]
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        self.identities = [str(identity) for identity in self.identities]

        if len(self.identities) < 2:
            raise ConfigurationError("At least 2 files need to be defined")

        if any(not identity for identity in self.identities):
            raise ConfigurationError("File path cannot be empty")

        if self.buffer_size <= 0:
            raise ConfigurationError("Buffer size must be greater than zero")

    @property
    def uses_stdin(self) -> bool:
        return STDIN_IDENTITY in self.identities

    @staticmethod
    def from_human_readable(
            identities: List[str],
            buffer_size_str: Optional[str] = None,
    ) -> 'CompareParams':
        """
        Factory method to create params from human-readable inputs.
        Useful for CLI argument parsing.
        """
        if buffer_size_str is None:
            buffer_size = DEFAULT_BUFFER_SIZE
        else:
            try:
                buffer_size = ConvertUtils.human_to_bytes(buffer_size_str)
            except ValueError as e:
                raise ConfigurationError(str(e))

        return CompareParams(identities=list(identities), buffer_size=buffer_size)
