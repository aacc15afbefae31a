"""Helper utilities for hosts embedding the puzzle."""
