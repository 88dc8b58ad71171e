# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.16
# License: (c) HRDAG, 2025, GPL-2 or newer
#
# ------
# tests/test_cli.py

import json
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from gittfs.cli import app, run_cli
from gittfs.system.exceptions import ExitCode

runner = CliRunner()

URL = "http://tfs:8080/tfs"


@pytest.fixture
def outside_repository(tmp_path, monkeypatch):
    path = tmp_path / "plain"
    path.mkdir()
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.chdir(path)
    return path


def test_version(outside_repository):
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "git-tfs version" in result.stdout


def test_no_arguments_shows_overview(outside_repository):
    result = runner.invoke(app, [])
    assert result.exit_code == 0
    assert "Usage: git-tfs [command] [options]" in result.stdout


def test_help_for_unknown_command(outside_repository):
    result = runner.invoke(app, ["help", "frobnicate"])
    assert result.exit_code == ExitCode.INVALID_ARGUMENTS
    assert "Unknown command: frobnicate" in result.stdout


def test_command_outside_repository(outside_repository):
    result = runner.invoke(app, ["fetch"])
    assert result.exit_code == ExitCode.EXCEPTION_THROWN
    assert "This command must be run inside a git repository!" in result.stdout


def test_invalid_user_config(outside_repository, console):
    config_dir = Path(os.environ["GITTFS_CONFIG_HOME"])
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "gittfs.yml").write_text("default_remote_id: ''\n")

    assert run_cli(["help"], console) == ExitCode.EXCEPTION_THROWN
    assert "Invalid git-tfs configuration" in console.file.getvalue()


@pytest.mark.git
class TestInRepository:

    def test_auto_remote_without_remotes(self, git_work_tree):
        result = runner.invoke(app, ["fetch", "-I"])
        assert result.exit_code == ExitCode.EXCEPTION_THROWN
        assert "error: no tfs remotes defined in this repository!" in result.stdout

    def test_auto_remote_ambiguous(self, git_work_tree):
        git_work_tree.add_remote("default", URL, "$/Project/Trunk")
        git_work_tree.add_remote("other", URL, "$/Project/Other")

        result = runner.invoke(app, ["fetch", "-I"])

        assert result.exit_code == ExitCode.EXCEPTION_THROWN
        assert "can't find a tfs remote to use" in result.stdout

    def test_conflicting_remote_options(self, git_work_tree):
        result = runner.invoke(app, ["-i", "remote2", "pull", "-I"])
        assert result.exit_code == ExitCode.EXCEPTION_THROWN
        assert "you can't use -i and -I option in the same time!" in result.stdout

    def test_invalid_option(self, git_work_tree):
        result = runner.invoke(app, ["fetch", "--frobnicate"])
        assert result.exit_code == ExitCode.INVALID_ARGUMENTS

    def test_fetch_without_sync_engine(self, git_work_tree, monkeypatch):
        monkeypatch.setattr("gittfs.core.sync_engine.available_sync_engines", lambda: {})
        git_work_tree.add_remote("default", URL, "$/Project/Trunk")

        result = runner.invoke(app, ["fetch"])

        assert result.exit_code == ExitCode.EXCEPTION_THROWN
        assert "No TFS sync engine installed" in result.stdout

    def test_info_json(self, git_work_tree):
        git_work_tree.add_remote("default", URL, "$/Project/Trunk")

        result = runner.invoke(app, ["info", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["git_version"].startswith("git version")
        assert [r["id"] for r in data["remotes"]] == ["default"]

    def test_bootstrap_from_history(self, git_work_tree):
        sha = git_work_tree.commit("Imported", tfs_id=f"[{URL}]$/Project/Trunk;C17")

        result = runner.invoke(app, ["bootstrap"])

        assert result.exit_code == 0
        assert "-> new remote default" in result.stdout
        assert git_work_tree.git("config", "tfs-remote.default.url").strip() == URL
        assert git_work_tree.git("config", "tfs-remote.default.repository").strip() == "$/Project/Trunk"
        assert git_work_tree.git("rev-parse", "refs/remotes/tfs/default").strip() == sha

        result = runner.invoke(app, ["bootstrap"])
        assert "-> existing remote default (up to date)" in result.stdout

    def test_bootstrap_with_auto_remote_names_new_remote(self, git_work_tree):
        sha = git_work_tree.commit("Imported", tfs_id=f"[{URL}]$/Project/Branch;C3")

        result = runner.invoke(app, ["bootstrap", "-I"])

        assert result.exit_code == 0
        assert "-> new remote default" in result.stdout
        remotes = git_work_tree.git("config", "--get-regexp", r"^tfs-remote\.").splitlines()
        assert sorted(remotes) == [
            "tfs-remote.default.repository $/Project/Branch",
            f"tfs-remote.default.url {URL}",
        ]
        assert git_work_tree.git("rev-parse", "refs/remotes/tfs/default").strip() == sha

    def test_auto_remote_from_history_needs_bootstrap(self, git_work_tree):
        git_work_tree.commit("Imported", tfs_id=f"[{URL}]$/Project/Branch;C3")

        result = runner.invoke(app, ["info", "-I"])

        assert result.exit_code == 0
        assert f"Need to bootstrap: {URL}$/Project/Branch" in result.stdout
        assert "Working with tfs remote: (derived)" in result.stdout

    def test_runs_from_subdirectory(self, git_work_tree, monkeypatch):
        git_work_tree.add_remote("default", URL, "$/Project/Trunk")
        sub_dir = git_work_tree.path / "src"
        sub_dir.mkdir()
        monkeypatch.chdir(sub_dir)

        result = runner.invoke(app, ["info", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["remotes"][0]["repository"] == "$/Project/Trunk"
