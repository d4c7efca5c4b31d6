"""Infrastructure layer — concrete collaborators behind domain protocols.

This layer may import from domain and config.
It must never import from services, commands, or output.
"""
