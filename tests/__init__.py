"""
Test suite for the stylequill project.

This module contains all unit tests for the stylequill package.
"""

import sys
from pathlib import Path

# Add the package source directory to the Python path
package_root = Path(__file__).parent.parent / "packages" / "stylequill_core"
sys.path.insert(0, str(package_root))
