"""
Module: puzzle.generation

Purpose:
    Uniform generation of 12-digit rule inputs.

Key Classes:
    - NumberGenerator: Draws NumericInput values from an injected random source
"""

from .generator import NumberGenerator

__all__ = ["NumberGenerator"]
