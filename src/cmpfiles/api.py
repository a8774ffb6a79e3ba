"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

api.py

Functional interface to the comparison engine for presentation layers.

    sources = open_sources(["a.bin", "b.bin"])
    session = build_session(sources, 16384)
    try:
        all_matched = run(session)
        for position in range(len(session)):
            a, b = pair_at(session, position)
            state = verdict_at(session, position)
    finally:
        close(session)

Process-level failures raise ConfigurationError or ResourceError.
Content mismatch never raises: it shows up as NOT_MATCHED verdicts.
"""
from typing import List, Optional, Callable, Tuple
import logging

from cmpfiles.core.interfaces import ByteStream
from cmpfiles.core.models import MatchState
from cmpfiles.core.session import CompareSession
from cmpfiles.core.sources import Source, open_sources as _open_sources

logger = logging.getLogger(__name__)


def open_sources(identities: List[str], stdin: Optional[ByteStream] = None) -> List[Source]:
    """
    Open every identity for unbuffered binary reading.
    The identity "stdin" binds standard input and may appear at most once.
    """
    return _open_sources(identities, stdin=stdin)


def build_session(sources: List[Source], buffer_capacity: int) -> CompareSession:
    """
    Allocate one buffer per source and the combination table.
    On failure the given sources are closed before the error is raised.
    """
    return CompareSession(sources, buffer_capacity)


def run(
    session: CompareSession,
    progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None
) -> bool:
    """Decide every pair. True if all of them matched."""
    return session.run(progress_callback=progress_callback)


def pair_at(session: CompareSession, position: int) -> Optional[Tuple[int, int]]:
    return session.pair_at(position)


def verdict_at(session: CompareSession, position: int) -> Optional[MatchState]:
    return session.verdict_at(position)


def close(session: CompareSession) -> None:
    """Release buffers, source handles and pair storage. Standard input stays open."""
    session.close()
