"""Core interfaces/abstractions.

Why:
- Defines the contracts (Protocol) that concrete adapters implement.
- Inverts dependencies: services depend on these abstractions only.
"""
