"""
Tests for byte sources: opening, the exclusive stdin binding, block reads and cleanup.
"""
import io
import sys

import pytest
import xxhash

from cmpfiles.core.errors import ResourceError
from cmpfiles.core.models import WorkingBuffer, STDIN_IDENTITY
from cmpfiles.core.sources import Source, StdinBinding, open_sources


class TrickleStream(io.RawIOBase):
    """Returns at most `step` bytes per read, like a pipe."""

    def __init__(self, data: bytes, step: int = 1):
        self._data = data
        self._step = step
        self._pos = 0

    def readable(self):
        return True

    def readinto(self, buffer):
        chunk = self._data[self._pos:self._pos + min(self._step, len(buffer))]
        buffer[:len(chunk)] = chunk
        self._pos += len(chunk)
        return len(chunk)


class FailingStream(io.RawIOBase):
    def readable(self):
        return True

    def readinto(self, buffer):
        raise OSError(5, "Input/output error")


class TestOpenSources:

    def test_opens_files_in_order(self, make_file):
        first = make_file("first.bin", b"1")
        second = make_file("second.bin", b"2")

        sources = open_sources([first, second])
        try:
            assert [s.identity for s in sources] == [first, second]
            assert not any(s.is_stdin for s in sources)
        finally:
            for source in sources:
                source.close()

    def test_stdin_sentinel_binds_given_stream(self, make_file):
        path = make_file("file.bin", b"data")
        stdin = io.BytesIO(b"data")

        sources = open_sources([STDIN_IDENTITY, path], stdin=stdin)
        try:
            assert sources[0].is_stdin
            assert not sources[1].is_stdin
        finally:
            for source in sources:
                source.close()

    def test_duplicate_stdin_rejected_before_opening(self, make_file, monkeypatch):
        path = make_file("file.bin", b"data")
        opened = []
        monkeypatch.setattr("cmpfiles.core.sources.open", lambda *a, **k: opened.append(a), raising=False)

        with pytest.raises(ResourceError) as exc_info:
            open_sources([STDIN_IDENTITY, path, STDIN_IDENTITY], stdin=io.BytesIO())

        assert exc_info.value.identity == STDIN_IDENTITY
        assert opened == []

    def test_missing_file_closes_already_opened(self, make_file, temp_dir, monkeypatch):
        path = make_file("exists.bin", b"data")
        closed = []
        original_close = Source.close

        def tracking_close(self):
            closed.append(self.identity)
            original_close(self)

        monkeypatch.setattr(Source, "close", tracking_close)

        missing = str(temp_dir / "missing.bin")
        with pytest.raises(ResourceError) as exc_info:
            open_sources([path, missing])

        assert exc_info.value.identity == missing
        assert closed == [path]

    def test_directory_cannot_be_opened(self, temp_dir, make_file):
        path = make_file("file.bin", b"data")
        with pytest.raises(ResourceError):
            open_sources([path, str(temp_dir)])

    def test_path_with_nul_byte_is_resource_error(self, make_file):
        path = make_file("file.bin", b"data")
        bad = path + "\0tail"

        with pytest.raises(ResourceError) as exc_info:
            open_sources([path, bad])
        assert exc_info.value.identity == bad


class TestStdinBinding:

    def test_claim_is_exclusive(self):
        binding = StdinBinding(io.BytesIO())
        binding.claim()
        with pytest.raises(ResourceError):
            binding.claim()

    def test_release_allows_new_claim(self):
        stream = io.BytesIO()
        binding = StdinBinding(stream)
        binding.claim()
        binding.release()
        assert binding.claim() is stream

    def test_default_binds_unbuffered_stdin(self, monkeypatch):
        raw = io.BytesIO(b"piped")
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BufferedReader(raw)))

        assert StdinBinding().claim() is raw


class TestSourceFill:

    def test_reads_blocks_then_eof(self):
        source = Source("mem", io.BytesIO(b"abcde"))
        buffer = WorkingBuffer(2)

        assert source.fill(buffer) == 2 and bytes(buffer.data) == b"ab"
        assert source.fill(buffer) == 2 and bytes(buffer.data) == b"cd"
        assert source.fill(buffer) == 1 and bytes(buffer.data) == b"e"
        assert source.eof
        assert source.fill(buffer) == 0

    def test_eof_not_set_when_size_is_multiple_of_capacity(self):
        source = Source("mem", io.BytesIO(b"abcd"))
        buffer = WorkingBuffer(4)

        assert source.fill(buffer) == 4
        assert not source.eof
        assert source.fill(buffer) == 0
        assert source.eof

    def test_short_reads_fill_whole_buffer(self):
        source = Source("pipe", TrickleStream(b"0123456789", step=3))
        buffer = WorkingBuffer(8)

        assert source.fill(buffer) == 8
        assert bytes(buffer.data) == b"01234567"

    def test_read_error_is_recorded_not_raised(self):
        source = Source("bad", FailingStream())
        buffer = WorkingBuffer(4)

        assert source.fill(buffer) == 0
        assert isinstance(source.error, OSError)
        assert not source.can_read

    def test_stream_closed_out_of_band_becomes_error(self):
        stream = io.BytesIO(b"data")
        source = Source("mem", stream)
        stream.close()

        source.fill(WorkingBuffer(4))
        assert source.error is not None

    def test_closed_source_before_eof_becomes_error(self):
        source = Source("mem", io.BytesIO(b"data"))
        source.close()

        assert source.fill(WorkingBuffer(4)) == 0
        assert source.error is not None

    def test_fingerprint_only_after_full_read(self):
        content = b"fingerprint me" * 10
        source = Source("mem", io.BytesIO(content))
        buffer = WorkingBuffer(16)

        source.fill(buffer)
        assert source.fingerprint is None

        while source.can_read:
            source.fill(buffer)
        assert source.fingerprint == xxhash.xxh64(content).hexdigest()


class TestSourceClose:

    def test_close_closes_file_stream(self):
        stream = io.BytesIO(b"x")
        source = Source("mem", stream)
        source.close()
        assert stream.closed
        assert source.closed

    def test_close_only_releases_stdin(self):
        stream = io.BytesIO(b"x")
        binding = StdinBinding(stream)
        source = Source(STDIN_IDENTITY, binding.claim(), binding)

        source.close()
        source.close()

        assert not stream.closed
        assert not binding.is_claimed
