"""
Pytest configuration and fixtures for the Workers AI adapter tests.
"""

import os
import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_dir = Path(__file__).parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))


@pytest.fixture
def clean_env(monkeypatch):
    """Remove Workers AI configuration from the environment."""
    for name in (
        "CLOUDFLARE_ACCOUNT_ID",
        "CLOUDFLARE_AUTH_TOKEN",
        "WORKERS_AI_BASE_URL",
        "WORKERS_AI_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    return os.environ
