"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cfxlink.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_VIEW_FILE_IDS = [
    "view-file",
    "viewfile",
    "view-pdf",
    "viewpdf",
    "view-xls",
    "viewxls",
    "view-ppt",
    "viewppt",
    "view-doc",
    "viewdoc",
]


# --- cfxlink.toml sections ---


class ReferencesConfig(BaseModel):
    """[references] section."""

    model_config = {"frozen": True}

    current_space: str = ""
    current_page: str = ""
    root_space: str = ""
    home_page: str = "WebHome"


class MacrosConfig(BaseModel):
    """[macros] section."""

    model_config = {"frozen": True}

    view_file_ids: list[str] = Field(default_factory=lambda: list(DEFAULT_VIEW_FILE_IDS))
    preserve_original: bool = True


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    separator: str = " | "
