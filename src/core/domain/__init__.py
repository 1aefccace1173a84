"""Domain models and entities.

Why here:
- Pure, strict data structures (Pydantic v2) and small value objects.
- The domain knows nothing about the CLI, templates or logging backends.
"""
