# tests/conftest.py
import sys
from pathlib import Path

# ---------------------------------------------------------
# Ensure project root is on PYTHONPATH BEFORE app imports
# ---------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# ---------------------------------------------------------
# Now safe to import app + dependencies
# ---------------------------------------------------------
import pytest

from config import ENV_VARS, reset_config

LLM_ENV_VARS = (
    "GOOGLE_API_KEY",
    "GOOGLE_MODEL",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
)


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """
    Every test starts with no configuration loaded and no
    parser/LLM variables leaking in from the developer's shell or .env.
    """
    for name in list(ENV_VARS) + list(LLM_ENV_VARS):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def loaded_config(monkeypatch):
    """Load configuration from a given env mapping: loaded_config(DEFAULT_CURRENCY="EUR")."""
    from config import load_config

    def _load(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        reset_config()
        return load_config()

    return _load
