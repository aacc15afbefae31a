"""
Module: puzzle.rules

Purpose:
    The fixed, ordered rule table and the pure transforms behind it.

Key Classes:
    - RuleLibrary: Ordered registry of Rule descriptors

Key Functions:
    - default_library(): The 25-rule catalog
"""

from .library import RuleLibrary, default_library

__all__ = ["RuleLibrary", "default_library"]
