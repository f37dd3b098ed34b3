"""
Shared testing utilities.

Provides standardized test structure:
- LaborantTest: Base class for all tests
- Result models for standalone runs

All tests MUST inherit from LaborantTest.
"""

from shared.tests.test_base import (
    IndividualTestResult,
    LaborantTest,
    TestFileResult,
)

__all__ = [
    "LaborantTest",
    "IndividualTestResult",
    "TestFileResult",
]
