"""Unit test configuration - shared rule table and stemmer fixtures"""

import os
import tempfile
from pathlib import Path

import pytest

# Set env vars BEFORE any test module imports src.main
# main.py configures logging at module level (on import)
os.environ.setdefault("LOG_FILE", str(Path(tempfile.gettempdir()) / "rslp-stemmer-tests" / "rslp-stemmer.log"))
os.environ.setdefault("LOG_LEVEL", "WARNING")

from src.rslp import RSLPStemmer, load_rules

PROJECT_ROOT = Path(__file__).parent.parent.parent
RULES_PATH = PROJECT_ROOT / "assets" / "portuguese.rslp"


@pytest.fixture(scope="session")
def rules_path():
    """Bundled Portuguese rule file"""
    return RULES_PATH


@pytest.fixture(scope="session")
def stages():
    """Bundled rule table, parsed once for the whole session"""
    return load_rules(RULES_PATH)


@pytest.fixture(scope="session")
def stemmer(stages):
    """Stemmer with default settings (accent removal on)"""
    return RSLPStemmer(stages)


@pytest.fixture(scope="session")
def accented_stemmer(stages):
    """Stemmer that keeps accents in the final stem"""
    return RSLPStemmer(stages, remove_accents=False)
