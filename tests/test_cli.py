"""End-to-end tests for the atpath command line over a real directory tree."""

from pathlib import Path
from unittest.mock import patch

import pytest
import yaml
from atpath.lib.settings import AppSettings
from atpath.lib.settings import SettingsPaths
from atpath.main import cli
from click.testing import CliRunner


@pytest.fixture
def vault_dir(tmp_path: Path) -> Path:
    root = tmp_path / "vault"
    (root / "_repos" / "proj" / "src").mkdir(parents=True)
    (root / "_repos" / "proj" / "README.md").write_text("Start at @src/util.ts\n", encoding="utf-8")
    (root / "_repos" / "proj" / "src" / "util.ts").write_text("export {}\n", encoding="utf-8")
    (root / "inbox.md").write_text("See @_repos/proj/src/util.ts and @missing.md\n", encoding="utf-8")
    (root / "plain.md").write_text("Nothing to see.\n", encoding="utf-8")
    return root


@pytest.fixture
def run(tmp_path, vault_dir, monkeypatch):
    """Invoke the CLI against vault_dir with isolated settings."""
    monkeypatch.delenv("ATPATH_MARKER", raising=False)
    monkeypatch.delenv("ATPATH_SUGGESTION_LIMIT", raising=False)
    settings = AppSettings(
        SettingsPaths(
            global_settings=tmp_path / "home" / "settings.yaml",
            project_settings=tmp_path / "project" / "settings.yaml",
            local_settings=tmp_path / "project" / "settings.local.yaml",
        )
    )
    runner = CliRunner()

    def invoke(*args: str):
        with patch("atpath.main.AppSettings", return_value=settings):
            return runner.invoke(cli, ["--root", str(vault_dir), *args])

    return invoke


class TestRoot:
    def test_repository_file(self, run):
        result = run("root", "_repos/proj/src/util.ts")

        assert result.exit_code == 0
        assert result.output == "root: _repos/proj\nrelative: src/util.ts\n"

    def test_global_file(self, run):
        result = run("root", "inbox.md")

        assert result.output == "root: (none)\nrelative: inbox.md\n"

    def test_absolute_argument_converted(self, run, vault_dir):
        result = run("root", str(vault_dir / "_repos" / "proj" / "README.md"))

        assert "relative: README.md" in result.output


class TestRefs:
    def test_lists_references_with_missing_count(self, run):
        result = run("refs", "inbox.md")

        assert result.exit_code == 0
        assert "missing.md" in result.output
        assert "Total: 2 references, 1 missing" in result.output

    def test_missing_only(self, run):
        result = run("refs", "inbox.md", "--missing-only")

        assert "Total: 1 references, 1 missing" in result.output

    def test_no_references(self, run):
        result = run("refs", "plain.md")

        assert result.exit_code == 0
        assert "No references found." in result.output

    def test_unreadable_file(self, run):
        result = run("refs", "nope.md")

        assert result.exit_code == 1
        assert "cannot read nope.md" in result.output


class TestResolve:
    def test_relative_capture(self, run):
        result = run("resolve", "_repos/proj/README.md", "@src/util.ts")

        assert result.exit_code == 0
        assert result.output == "_repos/proj/src/util.ts\n"

    def test_missing_target_fails(self, run):
        result = run("resolve", "inbox.md", "missing.md")

        assert result.exit_code == 1
        assert "Target does not exist" in result.output

    def test_no_check(self, run):
        result = run("resolve", "inbox.md", "missing.md", "--no-check")

        assert result.exit_code == 0
        assert result.output == "missing.md\n"


class TestSuggest:
    def test_repository_scoped(self, run):
        result = run("suggest", "_repos/proj/README.md", "util")

        assert result.exit_code == 0
        assert result.output == "@src/util.ts\n"

    def test_limit(self, run):
        result = run("suggest", "inbox.md", "--limit", "1")

        assert len(result.output.splitlines()) == 1

    def test_no_match(self, run):
        result = run("suggest", "inbox.md", "zzz")

        assert "No suggestions." in result.output


class TestMv:
    def test_moves_file_and_rewrites_references(self, run, vault_dir):
        result = run("mv", "_repos/proj/src/util.ts", "_repos/proj/src/helpers.ts")

        assert result.exit_code == 0, result.output
        assert (vault_dir / "_repos" / "proj" / "src" / "helpers.ts").exists()
        assert not (vault_dir / "_repos" / "proj" / "src" / "util.ts").exists()
        assert (vault_dir / "_repos" / "proj" / "README.md").read_text() == "Start at @src/helpers.ts\n"
        assert (vault_dir / "inbox.md").read_text() == "See @_repos/proj/src/helpers.ts and @missing.md\n"
        assert "Updated: 2 documents, 2 references" in result.output

    def test_moves_folder(self, run, vault_dir):
        result = run("mv", "_repos/proj/src", "_repos/proj/lib")

        assert result.exit_code == 0, result.output
        assert (vault_dir / "_repos" / "proj" / "lib" / "util.ts").exists()
        assert (vault_dir / "_repos" / "proj" / "README.md").read_text() == "Start at @lib/util.ts\n"

    def test_dry_run_changes_nothing(self, run, vault_dir):
        result = run("mv", "_repos/proj/src/util.ts", "_repos/proj/src/helpers.ts", "--dry-run")

        assert result.exit_code == 0
        assert (vault_dir / "_repos" / "proj" / "src" / "util.ts").exists()
        assert (vault_dir / "inbox.md").read_text() == "See @_repos/proj/src/util.ts and @missing.md\n"
        assert "Would update: 2 documents, 2 references" in result.output

    def test_missing_source(self, run):
        result = run("mv", "ghost.md", "spirit.md")

        assert result.exit_code == 1
        assert "ghost.md does not exist" in result.output

    def test_existing_destination(self, run, vault_dir):
        result = run("mv", "inbox.md", "plain.md")

        assert result.exit_code == 1
        assert "Destination already exists" in result.output
        assert (vault_dir / "inbox.md").exists()

    def test_nothing_to_update(self, run):
        result = run("mv", "plain.md", "other.md")

        assert result.exit_code == 0
        assert "No references to update." in result.output


class TestPropagate:
    def test_detects_folder_after_external_move(self, run, vault_dir):
        (vault_dir / "_repos" / "proj" / "src").rename(vault_dir / "_repos" / "proj" / "lib")

        result = run("propagate", "_repos/proj/src", "_repos/proj/lib")

        assert result.exit_code == 0, result.output
        assert (vault_dir / "_repos" / "proj" / "README.md").read_text() == "Start at @lib/util.ts\n"
        assert (vault_dir / "inbox.md").read_text() == "See @_repos/proj/lib/util.ts and @missing.md\n"

    def test_explicit_file_flag(self, run, vault_dir):
        result = run("propagate", "missing.md", "found", "--file")

        assert result.exit_code == 0
        assert (vault_dir / "inbox.md").read_text() == "See @_repos/proj/src/util.ts and @found\n"

    def test_unreadable_document_fails_but_continues(self, run, vault_dir):
        (vault_dir / "broken.md").write_bytes(b"\xff\xfe @_repos/proj/src/util.ts")

        result = run("propagate", "_repos/proj/src/util.ts", "_repos/proj/src/helpers.ts")

        assert result.exit_code == 1
        assert "broken.md" in result.output
        assert "1 documents could not be updated" in result.output
        assert (vault_dir / "inbox.md").read_text() == "See @_repos/proj/src/helpers.ts and @missing.md\n"


class TestPathArguments:
    @pytest.mark.parametrize(
        "args",
        [
            ("root", "{outside}"),
            ("suggest", "{outside}"),
            ("resolve", "{outside}", "a.md"),
            ("propagate", "{outside}", "b.md"),
        ],
    )
    def test_path_outside_root_is_an_error(self, run, tmp_path, args):
        outside = str(tmp_path / "elsewhere.md")

        result = run(*(arg.format(outside=outside) for arg in args))

        assert result.exit_code == 1
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert "Error:" in result.output
        assert "outside corpus" in result.output

    def test_corpus_root_is_not_an_entry(self, run):
        result = run("propagate", "./", "b.md")

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error:" in result.output

    def test_propagation_crash_reported_after_move(self, run, vault_dir):
        with patch("atpath.commands.rename.RenamePropagator.propagate", side_effect=RuntimeError("boom")):
            result = run("mv", "plain.md", "other.md")

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Propagation failed for plain.md" in result.output
        assert (vault_dir / "other.md").exists()


class TestConfig:
    def test_set_show_and_unset(self, run, tmp_path):
        result = run("config", "set", "suggestion_limit", "7")

        assert result.exit_code == 0, result.output
        assert "Set suggestion_limit at project scope" in result.output
        assert "suggestion_limit: 7" in run("config", "show").output

        result = run("config", "unset", "suggestion_limit")

        assert result.exit_code == 0
        assert "suggestion_limit: 50" in run("config", "show").output

    def test_set_parses_yaml_lists(self, run, tmp_path):
        run("config", "set", "document_suffixes", "[md, txt]", "--global")

        saved = yaml.safe_load((tmp_path / "home" / "settings.yaml").read_text())
        assert saved == {"document_suffixes": ["md", "txt"]}
        assert "document_suffixes: .md, .txt" in run("config", "show").output

    def test_unknown_key(self, run):
        result = run("config", "set", "colour", "red")

        assert result.exit_code == 1
        assert "Unknown setting 'colour'" in result.output
