"""Command processing helpers.

This package centralizes validation so every command flows through the same
pipeline before the game state is touched.
"""
