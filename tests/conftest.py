"""
Shared fixtures for comparison engine tests.
Creates isolated temporary directories with controlled source files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Callable, Dict
import sys

# Add src/ to sys.path so 'cmpfiles' is importable without installation
project_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(project_src))


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_file(temp_dir) -> Callable[[str, bytes], str]:
    """Factory writing `content` to `name` inside temp_dir, returns the path as str."""
    def _make(name: str, content: bytes) -> str:
        path = temp_dir / name
        path.write_bytes(content)
        return str(path)
    return _make


@pytest.fixture
def test_files(make_file) -> Dict[str, str]:
    """
    Controlled sources for comparison scenarios:
    - 2 identical 40KB files
    - 1 file differing from them in its very last byte
    - 1 file that is a strict prefix of them
    - 2 empty files
    """
    content = bytes(range(256)) * 160
    files = {
        "same_a": make_file("same_a.bin", content),
        "same_b": make_file("same_b.bin", content),
        "last_byte": make_file("last_byte.bin", content[:-1] + b"\x00"),
        "prefix": make_file("prefix.bin", content[:-100]),
        "empty_a": make_file("empty_a.bin", b""),
        "empty_b": make_file("empty_b.bin", b""),
    }
    return files
