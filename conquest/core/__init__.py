"""Core gameplay primitives (errors, events, and state rendering).

Kept free of console concerns so it can be reused by the game loop, CLI, and tests.
"""
