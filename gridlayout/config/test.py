"""Tests for configuration management."""

from pathlib import Path

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    get_environment,
    get_environment_info,
    get_history_limit,
    get_max_tracks,
    get_parent_class,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("GRID_MAX_TRACKS", raising=False)
        assert get_environment(EnvVar.GRID_MAX_TRACKS) == 20

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("GRID_HISTORY_LIMIT", "99")
        assert get_environment(EnvVar.GRID_HISTORY_LIMIT, override=5) == 5

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("GRID_HISTORY_LIMIT", "12")
        result = get_environment(EnvVar.GRID_HISTORY_LIMIT)
        assert result == 12
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_invalid_int_falls_back_to_default(self, monkeypatch):
        """Unparseable integers resolve to the default."""
        monkeypatch.setenv("GRID_MAX_TRACKS", "many")
        assert get_environment(EnvVar.GRID_MAX_TRACKS) == 20

    @pytest.mark.unit
    def test_bool_type_conversion(self, monkeypatch):
        """Boolean type conversion for true and false spellings."""
        for value in ("true", "1", "yes", "TRUE", "Yes"):
            monkeypatch.setenv("GRID_USE_AREAS", value)
            assert get_environment(EnvVar.GRID_USE_AREAS) is True
        for value in ("false", "0", "no", "FALSE", "No"):
            monkeypatch.setenv("GRID_USE_AREAS", value)
            assert get_environment(EnvVar.GRID_USE_AREAS) is False

    @pytest.mark.unit
    def test_unrecognized_bool_uses_default(self, monkeypatch):
        """Unrecognized boolean spellings resolve to the default."""
        monkeypatch.setenv("GRID_USE_AREAS", "maybe")
        assert get_environment(EnvVar.GRID_USE_AREAS) is False

    @pytest.mark.unit
    def test_path_type_conversion(self, monkeypatch):
        """Path variables are converted to Path objects."""
        monkeypatch.setenv("GRID_LAYOUT_FILE", "layouts/home.json")
        assert get_environment(EnvVar.GRID_LAYOUT_FILE) == Path("layouts/home.json")


class TestConvenience:
    """Tests for convenience accessors."""

    @pytest.mark.unit
    def test_max_tracks_never_below_one(self, monkeypatch):
        """A zero clamp from the environment is raised to 1."""
        monkeypatch.setenv("GRID_MAX_TRACKS", "0")
        assert get_max_tracks() == 1

    @pytest.mark.unit
    def test_history_limit_override(self, monkeypatch):
        """Explicit override wins over environment."""
        monkeypatch.setenv("GRID_HISTORY_LIMIT", "7")
        assert get_history_limit() == 7
        assert get_history_limit(3) == 3

    @pytest.mark.unit
    def test_parent_class_blank_override_ignored(self, monkeypatch):
        """An empty override falls through to the default."""
        monkeypatch.delenv("GRID_PARENT_CLASS", raising=False)
        assert get_parent_class("") == "parent"
        assert get_parent_class("layout") == "layout"


class TestIntrospection:
    """Tests for metadata helpers."""

    @pytest.mark.unit
    def test_info_returns_config(self):
        """Metadata is exposed as EnvConfig."""
        info = get_environment_info(EnvVar.GRID_PARENT_CLASS)
        assert isinstance(info, EnvConfig)
        assert info.name == "GRID_PARENT_CLASS"
        assert info.category == "output"

    @pytest.mark.unit
    def test_list_by_category(self):
        """Category filter narrows the variable list."""
        grid_vars = list_environment_variables("grid")
        assert set(grid_vars) == {EnvVar.GRID_MAX_TRACKS, EnvVar.GRID_HISTORY_LIMIT}
        assert len(list_environment_variables()) == len(EnvVar)

    @pytest.mark.unit
    def test_names_match_members(self):
        """Every member's config name matches the member name."""
        for var in EnvVar:
            assert var.value.name == var.name
