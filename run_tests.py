#!/usr/bin/env python3
"""
Test runner for the N-Queens GA
"""

import sys
import unittest
from pathlib import Path

# Add current directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))


def run_all_tests():
    """Discover and run every test module under tests/"""
    loader = unittest.TestLoader()
    suite = loader.discover(str(Path(__file__).parent / "tests"), pattern="test_*.py")
    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)
    return result.wasSuccessful()


if __name__ == "__main__":
    print("Running N-Queens GA Tests")
    print("=" * 60)
    sys.exit(0 if run_all_tests() else 1)
