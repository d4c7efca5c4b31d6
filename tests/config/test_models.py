"""Tests for config models — defaults and sparse overrides."""

import pytest

from cfxlink.config.models import (
    DEFAULT_VIEW_FILE_IDS,
    MacrosConfig,
    OutputConfig,
    ReferencesConfig,
)


class TestReferencesConfig:
    def test_defaults(self) -> None:
        cfg = ReferencesConfig()
        assert cfg.current_space == ""
        assert cfg.current_page == ""
        assert cfg.root_space == ""
        assert cfg.home_page == "WebHome"

    def test_sparse_override(self) -> None:
        cfg = ReferencesConfig.model_validate({"current_space": "Main.Sub"})
        assert cfg.current_space == "Main.Sub"
        assert cfg.home_page == "WebHome"  # default preserved

    def test_frozen(self) -> None:
        cfg = ReferencesConfig()
        with pytest.raises(Exception):
            cfg.home_page = "Start"  # type: ignore[misc]


class TestMacrosConfig:
    def test_view_file_family(self) -> None:
        cfg = MacrosConfig()
        assert cfg.view_file_ids == DEFAULT_VIEW_FILE_IDS
        assert {"view-file", "viewpdf", "view-doc"} <= set(cfg.view_file_ids)
        assert cfg.preserve_original is True

    def test_default_list_is_not_shared(self) -> None:
        assert MacrosConfig().view_file_ids is not DEFAULT_VIEW_FILE_IDS

    def test_override(self) -> None:
        cfg = MacrosConfig.model_validate({"view_file_ids": ["view-file"]})
        assert cfg.view_file_ids == ["view-file"]


class TestOutputConfig:
    def test_default_separator(self) -> None:
        assert OutputConfig().separator == " | "

    def test_json_round_trip(self) -> None:
        cfg = OutputConfig(separator=", ")
        assert OutputConfig.model_validate_json(cfg.model_dump_json()) == cfg
