"""Service layer — pipelines returning ServiceResult.

Services may import from domain, parser, config, plugins and infrastructure layers.
They must never import from commands or output.
"""
