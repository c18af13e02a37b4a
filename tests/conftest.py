"""
tests/conftest.py

Provide minimal, safe env defaults so that importing the root `config`
module never depends on the developer's shell or local .env files.
"""

import os
import sys
from pathlib import Path

# Ensure safe, isolated test environment variables (no external IO)
os.environ.setdefault("LOG_FORMAT", "json")
os.environ.setdefault("LOG_LEVEL", "INFO")

# Prefer the project root (parent of tests dir) on sys.path to avoid
# shadowing by unrelated top-level modules named `config`
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))
