"""Domain layer — link targets, the reference builder, and the resolver.

This layer depends only on the stdlib.
It must never import from services, infrastructure, parser, commands, or config.
"""
