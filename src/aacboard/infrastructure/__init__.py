"""Infrastructure layer — outbound collaborators.

The external language model client and the vocabulary snapshot loader.
"""
