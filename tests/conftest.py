"""
Shared fixtures for duplicate removal tests.
Creates isolated reference/root directory trees with controlled contents.
"""
import pytest
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'dupsrm' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))


@pytest.fixture
def trees(tmp_path) -> Dict[str, Path]:
    """
    Creates a reference tree and a root tree side by side:
    - reference/a.txt    "hello"          duplicate of root/x.txt
    - reference/b.txt    "world"          unique
    - reference/sub/c.bin  "shared bytes"   duplicate of root/deep/y.bin and root/z.bin
    - reference/empty.txt  (0 bytes)      empty, never a candidate
    - root/empty.txt       (0 bytes)
    """
    reference = tmp_path / "reference"
    root = tmp_path / "root"
    (reference / "sub").mkdir(parents=True)
    (root / "deep").mkdir(parents=True)

    files = {"reference": reference, "root": root}

    files["ref_a"] = reference / "a.txt"
    files["ref_a"].write_bytes(b"hello")
    files["ref_b"] = reference / "b.txt"
    files["ref_b"].write_bytes(b"world")
    files["ref_c"] = reference / "sub" / "c.bin"
    files["ref_c"].write_bytes(b"shared bytes")
    files["ref_empty"] = reference / "empty.txt"
    files["ref_empty"].write_bytes(b"")

    files["root_x"] = root / "x.txt"
    files["root_x"].write_bytes(b"hello")
    files["root_y"] = root / "deep" / "y.bin"
    files["root_y"].write_bytes(b"shared bytes")
    files["root_z"] = root / "z.bin"
    files["root_z"].write_bytes(b"shared bytes")
    files["root_empty"] = root / "empty.txt"
    files["root_empty"].write_bytes(b"")

    return files


def snapshot(directory: Path) -> Dict[str, bytes]:
    """Relative path → content for every file under directory."""
    return {
        str(p.relative_to(directory)): p.read_bytes()
        for p in sorted(directory.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def tree_snapshot():
    return snapshot
