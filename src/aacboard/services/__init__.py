"""Service layer — the interpretation pipeline, returning typed results.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
