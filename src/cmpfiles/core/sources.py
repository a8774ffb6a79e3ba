"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/sources.py
Byte sources taking part in a comparison: regular files opened for unbuffered
binary reads, and at most one binding to the process standard input.

Read errors never escape a Source. They are recorded on it, and the comparator
turns them into NOT_MATCHED verdicts for every pair touching that source.
"""

import sys
from contextlib import ExitStack
from typing import List, Optional
import logging

import xxhash

from cmpfiles.core.errors import ResourceError
from cmpfiles.core.interfaces import ByteStream
from cmpfiles.core.models import STDIN_IDENTITY, WorkingBuffer

logger = logging.getLogger(__name__)


class StdinBinding:
    """
    Exclusive claim on the standard-input channel for one session.
    """

    def __init__(self, stream: Optional[ByteStream] = None):
        self._stream = stream
        self._claimed = False

    @property
    def is_claimed(self) -> bool:
        return self._claimed

    def claim(self) -> ByteStream:
        if self._claimed:
            raise ResourceError("Standard input can only be used once", STDIN_IDENTITY)
        self._claimed = True
        return self._stream if self._stream is not None else sys.stdin.buffer.raw

    def release(self) -> None:
        self._claimed = False


class Source:
    """
    One logical byte stream with an identity, an open/closed state,
    an end-of-stream flag and an error slot.
    """

    def __init__(self, identity: str, stream: ByteStream, binding: Optional[StdinBinding] = None):
        self.identity = identity
        self._stream = stream
        self._binding = binding
        self._hasher = xxhash.xxh64()
        self.eof = False
        self.error: Optional[Exception] = None
        self.closed = False

    @property
    def is_stdin(self) -> bool:
        return self._binding is not None

    @property
    def can_read(self) -> bool:
        return not (self.closed or self.eof or self.error is not None)

    @property
    def fingerprint(self) -> Optional[str]:
        """
        xxHash64 of everything read so far, published only once the whole
        stream was consumed without error.
        """
        if self.eof and self.error is None:
            return self._hasher.hexdigest()
        return None

    def fill(self, buffer: WorkingBuffer) -> int:
        """
        Read up to `buffer.capacity` bytes into `buffer` and record the count.

        Keeps reading until the buffer is full, the stream ends or an error occurs,
        so short reads from pipes never shift block boundaries between sources.
        A stream that has no data right now (non-blocking read returning None)
        ends the fill early without setting EOF.
        """
        if self.closed and not self.eof and self.error is None:
            self.error = ValueError(f"{self.identity} was closed before reaching end of stream")
            logger.warning(f"⚠️ {self.error}")

        if not self.can_read:
            buffer.count = 0
            return 0

        view = buffer.view
        total = 0
        try:
            while total < buffer.capacity:
                read = self._stream.readinto(view[total:])
                if read is None:
                    break
                if read == 0:
                    self.eof = True
                    break
                total += read
        except (OSError, ValueError) as e:
            # ValueError: the stream was closed out-of-band
            self.error = e
            logger.warning(f"⚠️ Read error on {self.identity}: {e}")

        buffer.count = total
        if total:
            self._hasher.update(view[:total])
        return total

    def close(self) -> None:
        """Close the handle. Standard input is only released from its binding."""
        if self.closed:
            return
        self.closed = True
        if self._binding is not None:
            self._binding.release()
            return
        try:
            self._stream.close()
        except OSError as e:
            logger.warning(f"⚠️ Failed to close {self.identity}: {e}")

    def __repr__(self):
        return f"<Source identity={self.identity}, eof={self.eof}, error={self.error is not None}>"


def open_sources(identities: List[str], stdin: Optional[ByteStream] = None) -> List[Source]:
    """
    Open every identity for unbuffered binary reading.

    Args:
        identities: File paths; the reserved identity "stdin" binds standard input.
        stdin: Stream to bind instead of the process standard input.

    Returns:
        Open sources in the order of `identities`.

    Raises:
        ResourceError: "stdin" given more than once (checked before anything is
            opened), or a path cannot be opened. Sources opened so far are closed.
    """
    identities = [str(identity) for identity in identities]
    if identities.count(STDIN_IDENTITY) > 1:
        logger.error("🛑 Standard input was requested more than once")
        raise ResourceError("Standard input can only be used once", STDIN_IDENTITY)

    binding = StdinBinding(stdin)
    sources: List[Source] = []

    with ExitStack() as stack:
        for identity in identities:
            if identity == STDIN_IDENTITY:
                source = Source(identity, binding.claim(), binding)
            else:
                try:
                    stream = open(identity, 'rb', buffering=0)
                except (OSError, ValueError) as e:
                    # ValueError: the path holds a NUL byte
                    logger.error(f"Couldn't open {identity}: {e}")
                    reason = getattr(e, "strerror", None) or e
                    raise ResourceError(f"Couldn't open {identity}: {reason}", identity) from e
                source = Source(identity, stream)

            stack.callback(source.close)
            sources.append(source)

        stack.pop_all()

    logger.debug(f"Opened {len(sources)} sources")
    return sources
