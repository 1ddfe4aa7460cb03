"""Domain layer — concept types, card models, and static lookup tables.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
