"""
Shared fixtures for samebytes tests.
Creates isolated temporary directories with controlled test files.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict

from samebytes.core.models import Candidate


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir).resolve()


@pytest.fixture
def test_files(temp_dir) -> Dict[str, Path]:
    """
    Creates controlled test files for matching scenarios:
    - 2 identical files (duplicates)
    - 2 identical files of a different size (duplicates)
    - 2 unique files (one differs only in its last byte)
    - 1 empty file (never above the minimum size)
    - 1 file with .tmp extension (for name pattern tests)
    - 1 duplicate inside a subdirectory
    """
    files = {}

    # Duplicate pair #1 (1KB of 'A')
    content_a = b"A" * 1024
    files["dup1_a"] = temp_dir / "dup1_a.txt"
    files["dup1_b"] = temp_dir / "dup1_b.txt"
    files["dup1_a"].write_bytes(content_a)
    files["dup1_b"].write_bytes(content_a)

    # Duplicate pair #2 (2KB of 'B')
    content_b = b"B" * 2048
    files["dup2_a"] = temp_dir / "dup2_a.txt"
    files["dup2_b"] = temp_dir / "dup2_b.txt"
    files["dup2_a"].write_bytes(content_b)
    files["dup2_b"].write_bytes(content_b)

    # Unique files
    files["unique1"] = temp_dir / "unique1.txt"
    files["unique1"].write_bytes(b"C" * 1500)
    files["unique2"] = temp_dir / "unique2.txt"
    files["unique2"].write_bytes(b"A" * 1023 + b"Z")  # Same size as dup1, last byte differs

    # Empty file (0 bytes)
    files["empty"] = temp_dir / "empty.txt"
    files["empty"].write_bytes(b"")

    # Different extension
    files["filtered"] = temp_dir / "ignore.tmp"
    files["filtered"].write_bytes(b"E" * 1024)

    # Subdirectory with a duplicate
    subdir = temp_dir / "subdir"
    subdir.mkdir()
    files["sub_dup"] = subdir / "dup_in_subdir.txt"
    files["sub_dup"].write_bytes(content_a)  # Same as dup1_a/b

    return files


@pytest.fixture
def make_candidate(temp_dir):
    """Factory writing `content` to `name` and returning the matching Candidate."""
    def _make(name: str, content: bytes) -> Candidate:
        path = temp_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return Candidate(path=str(path), size=len(content))
    return _make
