"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the comparison engine.

Key Components:
---------------
- ByteStream: Anything a Source can read blocks from (files, pipes, in-memory streams).
- Comparator: Interface for the round-based engine that decides every pair.
"""

from typing import Protocol, List, Optional, Callable, TYPE_CHECKING
from cmpfiles.core.models import WorkingBuffer, CompareStats
from cmpfiles.core.combinations import CombinationSet

if TYPE_CHECKING:
    from cmpfiles.core.sources import Source


class ByteStream(Protocol):
    """Readable binary stream supporting zero-copy reads."""
    def readinto(self, buffer) -> Optional[int]: ...
    def close(self) -> None: ...


class Comparator(Protocol):
    """
    Interface for the comparison engine.

    Drives synchronized read rounds over all sources and writes verdicts into the
    combination set until every pair is decided.
    """
    def compare(
        self,
        sources: List["Source"],
        combinations: CombinationSet,
        buffers: List[WorkingBuffer],
        buffer_capacity: int,
        stats: Optional[CompareStats] = None,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> bool:
        """
        Decide every pair of `combinations`.

        Args:
            sources: Open sources, indexed like the combination set elements.
            combinations: Pair table built for len(sources).
            buffers: One working buffer per source.
            buffer_capacity: Bytes read per source per round.
            stats: Optional statistics collector.
            progress_callback: (stage, decided pairs, total pairs) after each round.

        Returns:
            True if every pair matched.
        """
        ...
