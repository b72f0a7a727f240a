"""
Shared fixtures for the Namesake test suite.
"""

import os
import sys
from pathlib import Path

import pytest

# Ensure the src/ directory is on the import path so that
# namesake.core.similarity / namesake.core.matcher / etc. can be imported.
SRC_ROOT = Path(__file__).resolve().parent.parent / "src"
sys.path.insert(0, str(SRC_ROOT))

# Keep the environment from leaking into config defaults.
for _var in (
    "NAMESAKE_SIMILARITY_THRESHOLD",
    "NAMESAKE_PROPAGATE_NESTED",
    "NAMESAKE_MAX_WORKERS",
    "NAMESAKE_LOG_LEVEL",
):
    os.environ.pop(_var, None)


# =============================================================================
# Fixtures — sample source code
# =============================================================================

@pytest.fixture
def python_source() -> str:
    """Module whose function binds two confusable locals."""
    return (
        "import os.path as osp\n"
        "\n"
        "def register(customer_name, customer_names):\n"
        "    \"\"\"Register a customer.\"\"\"\n"
        "    total = 0\n"
        "    for item in customer_names:\n"
        "        total += 1\n"
        "    return total\n"
        "\n"
        "\n"
        "class Registry:\n"
        "    def lookup(self, key):\n"
        "        return key\n"
    )


@pytest.fixture
def tmp_project(tmp_path: Path) -> Path:
    """
    Create a temporary project directory containing Python source files
    for integration tests.
    """
    py_dir = tmp_path / "src"
    py_dir.mkdir()
    (py_dir / "app.py").write_text(
        "def process(ALEXANDRE, ALEKSANDRE):\n"
        "    return ALEXANDRE\n"
        "\n"
        "def clean(data):\n"
        "    return data\n",
        encoding="utf-8",
    )
    (py_dir / "util.py").write_text(
        "def helper(value):\n"
        "    return value\n",
        encoding="utf-8",
    )

    # Excluded directory (should be ignored)
    excluded = tmp_path / "__pycache__"
    excluded.mkdir()
    (excluded / "cached.py").write_text("def x(abcdef, abcdeg): pass\n", encoding="utf-8")

    return tmp_path
