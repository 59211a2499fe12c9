"""
Pytest configuration: make sure `import prevhub` works regardless of
where pytest is invoked.

It prepends the project root (one directory above *tests/*) to
``sys.path`` **before** any tests are collected.
"""

import sys
from pathlib import Path

# /path/to/project/tests -> project root
PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))
