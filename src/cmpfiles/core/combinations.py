"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/combinations.py
Enumerates every unordered pair of source indices and carries one verdict per pair.

ORDER
-----
Pairs are produced by a nested sweep: outer index i from 0 to N-1, inner index
j from i+1 to N-1, giving (0,1), (0,2), ..., (0,N-1), (1,2), ..., (N-2,N-1).
Reporting code addresses pairs by position, so this order is part of the contract.

STORAGE
-------
Two parallel index arrays plus a parallel verdict array. Verdicts only ever move
out of UNKNOWN once; a write that would leave a terminal state is refused.
"""

from typing import Callable, Iterator, List, Optional, Tuple
import logging

from cmpfiles.core.errors import ConfigurationError
from cmpfiles.core.models import MatchState, Pair

logger = logging.getLogger(__name__)

VerdictListener = Callable[[int, Pair, MatchState], None]


def count_combinations(number_of_elements: int) -> int:
    """
    Number of unordered pairs among `number_of_elements` items.
    Accumulates the triangular number instead of using n*(n-1)/2 directly.
    """
    number_of_combinations = 0
    while number_of_elements > 0:
        number_of_elements -= 1
        number_of_combinations += number_of_elements
    return number_of_combinations


class CombinationSet:
    """
    Ordered pair table with a verdict slot per pair.
    Owned by a single comparison session; never shared.
    """

    def __init__(self, element_count: int):
        if element_count <= 0:
            raise ConfigurationError("Cannot build combinations for zero elements")

        self.element_count = element_count
        self.combination_count = count_combinations(element_count)
        self._compare_indexes: Optional[List[int]] = [0] * self.combination_count
        self._compare_with_indexes: Optional[List[int]] = [0] * self.combination_count
        self._states: Optional[List[MatchState]] = [MatchState.UNKNOWN] * self.combination_count
        self._listeners: List[VerdictListener] = []

        self.rebuild()

    @property
    def is_initialized(self) -> bool:
        return (
            self._compare_indexes is not None
            and self._compare_with_indexes is not None
            and self._states is not None
        )

    def add_listener(self, listener: VerdictListener) -> None:
        """Registers a callback invoked on every verdict write."""
        self._listeners.append(listener)

    def _in_range(self, position: int) -> bool:
        return self.is_initialized and 0 <= position < self.combination_count

    # =============================
    # Pair accessors
    # =============================

    def get(self, position: int) -> Optional[Pair]:
        """Pair stored at `position`, or None when out of range or released."""
        if not self._in_range(position):
            return None
        return Pair(self._compare_indexes[position], self._compare_with_indexes[position])

    def set(self, position: int, pair: Tuple[int, int]) -> bool:
        """Store `pair` at `position`. Returns False when out of range, released or invalid."""
        if not self._in_range(position):
            return False

        compare_index, compare_with_index = pair
        if not 0 <= compare_index < compare_with_index < self.element_count:
            return False

        self._compare_indexes[position] = compare_index
        self._compare_with_indexes[position] = compare_with_index
        return True

    def rebuild(self) -> bool:
        """
        Regenerate every pair in enumeration order and reset all verdicts to UNKNOWN.
        Returns False when there is nothing to build or storage was released.
        """
        if not self.is_initialized:
            return False
        if self.element_count == 0 or self.combination_count == 0:
            return False

        position = 0
        for compare_index in range(self.element_count):
            for compare_with_index in range(compare_index + 1, self.element_count):
                self.set(position, (compare_index, compare_with_index))
                position += 1

        for position in range(self.combination_count):
            self._states[position] = MatchState.UNKNOWN

        logger.debug(f"Built {self.combination_count} combinations for {self.element_count} elements")
        return True

    # =============================
    # Verdict accessors
    # =============================

    def verdict(self, position: int) -> Optional[MatchState]:
        if not self._in_range(position):
            return None
        return self._states[position]

    def set_verdict(self, position: int, state: MatchState) -> bool:
        """
        Record the verdict of one pair.
        Decided verdicts are final: changing a MATCHED or NOT_MATCHED pair is refused.
        """
        if not self._in_range(position):
            return False

        current = self._states[position]
        if current is state:
            return True
        if current.is_terminal:
            logger.error(f"Refusing to change decided pair {self.get(position)} from {current!r} to {state!r}")
            return False

        self._states[position] = state
        pair = self.get(position)
        for listener in self._listeners:
            listener(position, pair, state)
        return True

    def undecided_positions(self) -> List[int]:
        if not self.is_initialized:
            return []
        return [p for p, state in enumerate(self._states) if state is MatchState.UNKNOWN]

    def is_decided(self) -> bool:
        return self.is_initialized and all(state.is_terminal for state in self._states)

    def all_matched(self) -> bool:
        return self.is_initialized and all(state is MatchState.MATCHED for state in self._states)

    def release(self) -> None:
        """Drop pair and verdict storage. Accessors fail afterwards."""
        self._compare_indexes = None
        self._compare_with_indexes = None
        self._states = None
        self._listeners.clear()

    def __len__(self):
        return self.combination_count

    def __iter__(self) -> Iterator[Tuple[int, Pair, MatchState]]:
        if not self.is_initialized:
            return iter(())
        return (
            (position, self.get(position), self._states[position])
            for position in range(self.combination_count)
        )

    def __repr__(self):
        return f"<CombinationSet elements={self.element_count}, pairs={self.combination_count}>"
