"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

comparator.py
Round-based, many-way byte comparison over synchronized reads.

Every round reads the next block of each source that still takes part in an
undecided pair, then evaluates every undecided pair against those blocks:

    1. either source failed to read          -> NOT_MATCHED
    2. end-of-stream flags disagree           -> NOT_MATCHED
    3. block lengths differ                   -> NOT_MATCHED
    4. non-empty blocks differ byte-wise      -> NOT_MATCHED
    5. empty blocks, both at end-of-stream    -> MATCHED
    6. empty block without end-of-stream      -> NOT_MATCHED
    otherwise the pair stays UNKNOWN until the next round.

Decided pairs are never looked at again. The loop ends once no pair is UNKNOWN.
"""
import time
from typing import List, Optional, Callable, Set
import logging

from cmpfiles.core.combinations import CombinationSet
from cmpfiles.core.errors import ConfigurationError
from cmpfiles.core.interfaces import Comparator
from cmpfiles.core.models import MatchState, WorkingBuffer, CompareStats
from cmpfiles.core.sources import Source

logger = logging.getLogger(__name__)


class StreamComparator(Comparator):
    """
    Single-threaded engine that advances all sources in lockstep.
    Memory use is one working buffer per source, regardless of file size.
    """
    STAGE = "comparing"

    def compare(
        self,
        sources: List[Source],
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
            buffers: One working buffer of `buffer_capacity` bytes per source.
            buffer_capacity: Bytes read per source per round.
            stats: Optional statistics collector, updated after each round.
            progress_callback: (stage, decided pairs, total pairs) after each round.

        Returns:
            True if every pair ended up MATCHED.

        Raises:
            ConfigurationError: If the arguments do not describe a valid session.
        """
        self._validate(sources, combinations, buffers, buffer_capacity)
        stats = stats if stats is not None else CompareStats()
        total = len(combinations)
        start_time = time.time()

        undecided = combinations.undecided_positions()
        logger.debug(f"Comparing {len(sources)} sources, {len(undecided)}/{total} pairs undecided")

        while undecided:
            bytes_read = 0
            for index in sorted(self._relevant_sources(combinations, undecided)):
                bytes_read += sources[index].fill(buffers[index])

            still_undecided = []
            for position in undecided:
                a, b = combinations.get(position)
                state = self.evaluate(sources[a], buffers[a], sources[b], buffers[b])
                if state is MatchState.UNKNOWN:
                    still_undecided.append(position)
                else:
                    combinations.set_verdict(position, state)
            undecided = still_undecided

            decided = total - len(undecided)
            stats.update_round(bytes_read=bytes_read, decided=decided, total=total)
            logger.debug(f"Round {stats.rounds}: read {bytes_read} bytes, {decided}/{total} pairs decided")

            if progress_callback:
                progress_callback(self.STAGE, decided, total)

        stats.total_time += time.time() - start_time
        all_matched = combinations.all_matched()
        logger.info(f"✅ Comparison finished after {stats.rounds} rounds, all matched: {all_matched}")
        return all_matched

    @staticmethod
    def evaluate(
        source_a: Source,
        buffer_a: WorkingBuffer,
        source_b: Source,
        buffer_b: WorkingBuffer
    ) -> MatchState:
        """Verdict for one pair after a round, or UNKNOWN if more data is needed."""
        if source_a.error is not None or source_b.error is not None:
            return MatchState.NOT_MATCHED

        if source_a.eof != source_b.eof:
            return MatchState.NOT_MATCHED

        if buffer_a.count != buffer_b.count:
            return MatchState.NOT_MATCHED

        if buffer_a.count > 0:
            if not buffer_a.same_content(buffer_b):
                return MatchState.NOT_MATCHED
            return MatchState.UNKNOWN

        if source_a.eof and source_b.eof:
            return MatchState.MATCHED

        # Nothing read but not at end-of-stream: not retried
        return MatchState.NOT_MATCHED

    @staticmethod
    def _relevant_sources(combinations: CombinationSet, undecided: List[int]) -> Set[int]:
        """Indices of sources that still appear in at least one undecided pair."""
        relevant = set()
        for position in undecided:
            relevant.update(combinations.get(position))
        return relevant

    @staticmethod
    def _validate(
        sources: List[Source],
        combinations: CombinationSet,
        buffers: List[WorkingBuffer],
        buffer_capacity: int
    ) -> None:
        if len(sources) < 2:
            raise ConfigurationError("At least 2 sources are needed for comparing")
        if buffer_capacity <= 0:
            raise ConfigurationError("Buffer capacity must be greater than zero")
        if len(buffers) != len(sources):
            raise ConfigurationError(f"Expected {len(sources)} buffers, got {len(buffers)}")
        if any(buffer.capacity != buffer_capacity for buffer in buffers):
            raise ConfigurationError(f"Every buffer must hold exactly {buffer_capacity} bytes")
        if not combinations.is_initialized or combinations.element_count != len(sources):
            raise ConfigurationError("Combinations were not built for these sources")
