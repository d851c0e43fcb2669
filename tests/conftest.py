import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'layoutstack'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from layoutstack.core import Layout, LayoutRegistry  # noqa: E402
from layoutstack.core.matcher import compile_matcher  # noqa: E402
from layoutstack.data import clear_caches  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_layoutstack_caches():
    """Drop cached schemas and compiled matchers between tests."""
    clear_caches()
    compile_matcher.cache_clear()
    yield


@pytest.fixture
def fixtures_dir() -> Path:
    return TESTS_ROOT / "fixtures"


@pytest.fixture
def registry() -> LayoutRegistry:
    """Registry with the canonical base <- post chain."""
    reg = LayoutRegistry()
    reg.set("base", Layout(content="<html>{{ body }}</html>", metadata={}))
    reg.set("post", Layout(content="<article>{{ body }}</article>", metadata={"layout": "base"}))
    return reg
