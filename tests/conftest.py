"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and points the
application at an in-memory SQLite database before any app module is imported.
"""

import os
import sys
from pathlib import Path

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["STORAGE_BOOTSTRAP_ON_STARTUP"] = "false"
os.environ.pop("SECURITY_ALLOWED_HOSTS", None)
os.environ.pop("SECURITY_BACKEND_CORS_ORIGINS", None)

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
