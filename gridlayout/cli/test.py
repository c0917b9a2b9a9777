"""Unit tests for the command line interface."""

import json

import pytest

from gridlayout.schema import (
    BreakpointConfig,
    BreakpointId,
    GridCell,
    GridChild,
    default_grid_definition,
    default_layout_state,
    export_layout_json,
)

from .lib import main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("GRID_LAYOUT_FILE", "GRID_USE_AREAS", "GRID_PARENT_CLASS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def layout_file(tmp_path):
    """Export file with one 2x2 child on desktop."""
    cells = [GridCell(row=r, column=c) for r in range(2) for c in range(2)]
    config = BreakpointConfig(
        grid=default_grid_definition(3, 4),
        children=[GridChild(id="c1", name="child1", cells=cells)],
    )
    state = default_layout_state().with_config(config, BreakpointId.DESKTOP)
    path = tmp_path / "layout.json"
    path.write_text(export_layout_json(state), encoding="utf-8")
    return path


class TestMain:
    """Tests for command dispatch."""

    @pytest.mark.unit
    def test_no_command_shows_help(self, capsys):
        """Running without a command prints usage and fails."""
        assert main([]) == 1
        assert "Usage: gridlayout" in capsys.readouterr().out

    @pytest.mark.unit
    def test_help(self, capsys):
        """--help prints usage and succeeds."""
        assert main(["--help"]) == 0
        assert "generate" in capsys.readouterr().out

    @pytest.mark.unit
    def test_unknown_command(self):
        """Unknown commands fail."""
        assert main(["render"]) == 1


class TestNewCommand:
    """Tests for gridlayout new."""

    @pytest.mark.unit
    def test_prints_default_export(self, capsys):
        """The default layout is written to stdout."""
        assert main(["new"]) == 0
        document = json.loads(capsys.readouterr().out)
        assert document["version"] == 1
        assert document["layout"]["activeBreakpoint"] == "desktop"

    @pytest.mark.unit
    def test_writes_file(self, tmp_path):
        """-o writes the export to disk."""
        target = tmp_path / "new.json"
        assert main(["new", "-o", str(target)]) == 0
        assert json.loads(target.read_text())["layout"]["breakpoints"]["mobile"]


class TestGenerateCommand:
    """Tests for gridlayout generate."""

    @pytest.mark.unit
    def test_css(self, layout_file, capsys):
        """Default target renders line-based CSS."""
        assert main(["generate", str(layout_file)]) == 0
        out = capsys.readouterr().out
        assert out.startswith(".parent {")
        assert ".child1 {\n  grid-row: 1 / 3;\n  grid-column: 1 / 3;\n}" in out

    @pytest.mark.unit
    def test_css_areas_with_parent_class(self, layout_file, capsys):
        """Named-area output with a custom container class."""
        assert main(["generate", str(layout_file), "-t", "css-areas", "--parent-class", "page"]) == 0
        out = capsys.readouterr().out
        assert out.startswith(".page {")
        assert "grid-area: child1;" in out

    @pytest.mark.unit
    def test_use_areas_env_switches_default(self, layout_file, capsys, monkeypatch):
        """GRID_USE_AREAS selects the named-area target."""
        monkeypatch.setenv("GRID_USE_AREAS", "true")
        assert main(["generate", str(layout_file)]) == 0
        assert "grid-template-areas" in capsys.readouterr().out

    @pytest.mark.unit
    def test_html_for_other_breakpoint(self, layout_file, capsys):
        """--breakpoint renders a breakpoint other than the active one."""
        assert main(["generate", str(layout_file), "-t", "html", "-b", "mobile"]) == 0
        assert capsys.readouterr().out == '<div class="parent">\n</div>\n'

    @pytest.mark.unit
    def test_responsive_to_file(self, layout_file, tmp_path):
        """--responsive output is written with -o."""
        target = tmp_path / "out.css"
        assert main(["generate", str(layout_file), "--responsive", "-o", str(target)]) == 0
        css = target.read_text()
        assert "@media (min-width: 768px)" in css
        assert "@media (min-width: 1200px)" in css

    @pytest.mark.unit
    def test_layout_file_from_env(self, layout_file, capsys, monkeypatch):
        """GRID_LAYOUT_FILE is used when no file is given."""
        monkeypatch.setenv("GRID_LAYOUT_FILE", str(layout_file))
        assert main(["generate"]) == 0
        assert ".child1" in capsys.readouterr().out

    @pytest.mark.unit
    def test_no_file(self):
        """Without a file or GRID_LAYOUT_FILE the command fails."""
        assert main(["generate"]) == 1

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        """Unreadable files fail cleanly."""
        assert main(["generate", str(tmp_path / "missing.json")]) == 1

    @pytest.mark.unit
    def test_invalid_export(self, tmp_path):
        """Documents with the wrong version are rejected."""
        path = tmp_path / "bad.json"
        document = json.loads(export_layout_json(default_layout_state()))
        document["version"] = 2
        path.write_text(json.dumps(document))
        assert main(["generate", str(path)]) == 1


class TestValidateCommand:
    """Tests for gridlayout validate."""

    @pytest.mark.unit
    def test_clean_file(self, layout_file, capsys):
        """A clean layout reports nothing on stdout."""
        assert main(["validate", str(layout_file)]) == 0
        assert capsys.readouterr().out == ""

    @pytest.mark.unit
    def test_findings_listed(self, tmp_path, capsys):
        """Findings are printed one per line."""
        config = BreakpointConfig(
            grid=default_grid_definition(4, 2),
            children=[GridChild(id="ghost", name="ghost")],
        )
        state = default_layout_state().with_config(config, BreakpointId.MOBILE)
        path = tmp_path / "layout.json"
        path.write_text(export_layout_json(state))

        assert main(["validate", str(path)]) == 0
        assert capsys.readouterr().out.strip() == (
            "mobile: empty_cells (ghost) Child 'ghost' covers no cells"
        )

    @pytest.mark.unit
    def test_unreadable_export(self, tmp_path):
        """Malformed JSON fails."""
        path = tmp_path / "broken.json"
        path.write_text("{")
        assert main(["validate", str(path)]) == 1


class TestEnvCommand:
    """Tests for gridlayout env."""

    @pytest.mark.unit
    def test_lists_variables(self, capsys, monkeypatch):
        """Effective values are shown per variable."""
        monkeypatch.setenv("GRID_MAX_TRACKS", "12")
        assert main(["env", "-c", "grid"]) == 0
        out = capsys.readouterr().out
        assert "GRID_MAX_TRACKS=12" in out
        assert "GRID_HISTORY_LIMIT=" in out
        assert "GRID_PARENT_CLASS" not in out
