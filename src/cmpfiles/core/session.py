"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/session.py
A comparison session owns its sources, one working buffer per source and the
combination/verdict table. Everything is released together by close(), which
also runs when construction fails partway or the session is used as a
context manager.
"""
from typing import List, Optional, Callable, Tuple, Dict
import logging

from cmpfiles.core.combinations import CombinationSet
from cmpfiles.core.comparator import StreamComparator
from cmpfiles.core.errors import ConfigurationError, ResourceError
from cmpfiles.core.interfaces import ByteStream, Comparator
from cmpfiles.core.models import (
    MatchState,
    WorkingBuffer,
    CompareStats,
    CompareReport,
    PairResult,
)
from cmpfiles.core.sources import Source, open_sources

logger = logging.getLogger(__name__)


class CompareSession:
    """
    Bundles sources, buffers and verdicts for one comparison run.

    Usage:
        with CompareSession.open(["a.bin", "b.bin", "stdin"], 65536) as session:
            all_matched = session.run()
            for position in range(len(session)):
                print(session.pair_at(position), session.verdict_at(position))
    """

    def __init__(
        self,
        sources: List[Source],
        buffer_capacity: int,
        comparator: Optional[Comparator] = None
    ):
        """
        Take ownership of `sources` and allocate buffers and combinations.
        On any failure the sources are closed before the error propagates.
        """
        self.sources: List[Source] = list(sources)
        self.buffer_capacity = buffer_capacity
        self.buffers: List[WorkingBuffer] = []
        self.combinations: Optional[CombinationSet] = None
        self.stats = CompareStats()
        self._comparator: Comparator = comparator or StreamComparator()
        self._closed = False

        try:
            if buffer_capacity <= 0:
                raise ConfigurationError("Buffer capacity must be greater than zero")
            if not self.sources:
                raise ConfigurationError("At least one source is needed to build a session")

            try:
                self.buffers = [WorkingBuffer(buffer_capacity) for _ in self.sources]
            except (MemoryError, OverflowError) as e:
                raise ResourceError(
                    f"Couldn't allocate {len(self.sources)} buffers of {buffer_capacity} bytes"
                ) from e

            self.combinations = CombinationSet(len(self.sources))
        except Exception:
            self.close()
            raise

        logger.debug(
            f"Session ready: {len(self.sources)} sources, "
            f"{len(self.combinations)} pairs, buffer {buffer_capacity} bytes"
        )

    @classmethod
    def open(
        cls,
        identities: List[str],
        buffer_capacity: int,
        stdin: Optional[ByteStream] = None
    ) -> 'CompareSession':
        """Open every identity and build a session around the resulting sources."""
        if buffer_capacity <= 0:
            raise ConfigurationError("Buffer capacity must be greater than zero")
        return cls(open_sources(identities, stdin=stdin), buffer_capacity)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def identities(self) -> List[str]:
        return [source.identity for source in self.sources]

    def run(
        self,
        progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
    ) -> bool:
        """
        Compare all sources until every pair is decided.

        Returns:
            True if every pair matched. Content mismatch is reported through the
            verdicts, never raised.

        Raises:
            ConfigurationError: Fewer than two sources, or the session is closed.
        """
        if self._closed:
            raise ConfigurationError("Session is closed")
        return self._comparator.compare(
            self.sources,
            self.combinations,
            self.buffers,
            self.buffer_capacity,
            stats=self.stats,
            progress_callback=progress_callback
        )

    def pair_at(self, position: int) -> Optional[Tuple[int, int]]:
        if self.combinations is None:
            return None
        pair = self.combinations.get(position)
        return tuple(pair) if pair is not None else None

    def verdict_at(self, position: int) -> Optional[MatchState]:
        if self.combinations is None:
            return None
        return self.combinations.verdict(position)

    def fingerprints(self) -> Dict[str, Optional[str]]:
        return {source.identity: source.fingerprint for source in self.sources}

    def report(self) -> CompareReport:
        """Snapshot of the verdict table that stays valid after close()."""
        if self.combinations is None or not self.combinations.is_initialized:
            raise ConfigurationError("Session has no combinations to report")

        identities = self.identities
        results = [
            PairResult(
                position=position,
                pair=pair,
                state=state,
                identity_a=identities[pair.a],
                identity_b=identities[pair.b],
            )
            for position, pair, state in self.combinations
        ]
        return CompareReport(
            identities=identities,
            results=results,
            all_matched=self.combinations.all_matched(),
            stats=self.stats,
            fingerprints=self.fingerprints(),
        )

    def close(self) -> None:
        """Release buffers, source handles and pair storage. Safe to call twice."""
        if self._closed:
            return
        self._closed = True

        for source in self.sources:
            source.close()
        for buffer in self.buffers:
            buffer.release()
        if self.combinations is not None:
            self.combinations.release()
        logger.debug("Session closed")

    def __len__(self):
        return len(self.combinations) if self.combinations is not None else 0

    def __enter__(self) -> 'CompareSession':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self):
        return f"<CompareSession sources={len(self.sources)}, closed={self._closed}>"
