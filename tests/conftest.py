import os
import sys
import warnings
from pathlib import Path

# Ignore warnings from app.shared
warnings.filterwarnings("ignore", category=DeprecationWarning, module="app.shared.*")

# Set test environment variables before app config is imported
os.environ.setdefault("INTERNAL_API_KEY", "test-internal-key")
os.environ.setdefault("ADMIN_CLAIM_RATE_LIMIT", "1000/minute")

# Ensure the project root is on sys.path so `app` packages resolve
PROJECT_ROOT = Path(__file__).resolve().parents[1]
root_str = str(PROJECT_ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

# Import database fixtures so they are available to all tests
from tests.fixtures.api import admin_gate, identity  # noqa: E402, F401
from tests.fixtures.mongo_fixtures import *  # noqa: E402, F403
from tests.fixtures.services import *  # noqa: E402, F403
