"""Pytest configuration for MotionBlocks tests.

This file is automatically loaded by pytest before running tests.
It configures the Python path so that the motionblocks package can be
imported from a plain checkout.
"""

import sys
from pathlib import Path

# Add the repository root to Python path
# This allows `from motionblocks.core import ...` to work without installing
repo_root = Path(__file__).parent.parent
sys.path.insert(0, str(repo_root))
