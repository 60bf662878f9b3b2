"""Test fixtures shared by the unit tests.

This module provides:
- A sample documentation tree (Product Widget with three Versions, a Draft
  area, an invalid topic and a plain page) for any page store
- A sample user/rights table matching the tree's role lists
"""

from .sample_docs import (
    SAMPLE_USERS,
    populate_sample_docs,
)

__all__ = [
    "SAMPLE_USERS",
    "populate_sample_docs",
]
