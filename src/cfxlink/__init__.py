"""cfxlink — resolve Confluence storage-format links into wiki references."""

__version__ = "0.3.0"
