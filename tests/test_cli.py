"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from dist_provisioner.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    """Click test runner."""
    return CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Empty working directory that commands run in."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _make_project(root: Path, web_dir: str = "web") -> None:
    (root / "app" / "config").mkdir(parents=True)
    (root / "app" / "config" / "parameters.dist.yml").write_text("secret: x\n")
    (root / web_dir).mkdir()
    (root / web_dir / ".dist.htaccess").write_text("RewriteEngine On\n")


class TestCLI:
    """Test CLI commands."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0

    def test_parameters_copies_template(
        self, runner: CliRunner, workdir: Path
    ) -> None:
        _make_project(workdir)

        result = runner.invoke(cli, ["parameters"])

        live = workdir / "app" / "config" / "parameters.yml"
        assert result.exit_code == 0
        assert "Building Parameters File... Success" in result.output
        assert f"Created {Path('app/config/parameters.yml')}" in result.output
        assert "Provisioned 1 file(s)" in result.output
        assert live.read_text() == "secret: x\n"
        assert not (workdir / "web" / ".htaccess").exists()

    def test_parameters_skips_existing(self, runner: CliRunner, workdir: Path) -> None:
        _make_project(workdir)
        live = workdir / "app" / "config" / "parameters.yml"
        live.write_text("mine")

        result = runner.invoke(cli, ["parameters"])

        assert result.exit_code == 0
        assert "Skipping. Parameters already exist" in result.output
        assert "Kept existing" in result.output
        assert live.read_text() == "mine"

    def test_parameters_missing_template_fails(
        self, runner: CliRunner, workdir: Path
    ) -> None:
        (workdir / "app" / "config").mkdir(parents=True)

        result = runner.invoke(cli, ["parameters"])

        assert result.exit_code == 1
        assert "Could not find parameters dist file" in result.output

    def test_htaccess_with_absolute_dirs(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        _make_project(tmp_path)

        result = runner.invoke(
            cli,
            [
                "htaccess",
                "--app-dir",
                str(tmp_path / "app"),
                "--web-dir",
                str(tmp_path / "web"),
            ],
        )

        assert result.exit_code == 0
        assert (tmp_path / "web" / ".htaccess").read_text() == "RewriteEngine On\n"
        assert not (tmp_path / "app" / "config" / "parameters.yml").exists()

    def test_install_uses_composer_extra(
        self, runner: CliRunner, workdir: Path
    ) -> None:
        _make_project(workdir, web_dir="public")
        (workdir / "composer.json").write_text(
            json.dumps({"extra": {"symfony-web-dir": "public"}})
        )

        result = runner.invoke(cli, ["install"])

        assert result.exit_code == 0
        assert "Provisioned 2 file(s)" in result.output
        assert (workdir / "app" / "config" / "parameters.yml").exists()
        assert (workdir / "public" / ".htaccess").exists()

    def test_install_with_composer_file_option(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        _make_project(tmp_path, web_dir="public")
        composer = tmp_path / "composer.json"
        composer.write_text(json.dumps({"extra": {"symfony-web-dir": "public"}}))

        result = runner.invoke(cli, ["install", "--composer-file", str(composer)])

        assert result.exit_code == 0
        assert (tmp_path / "public" / ".htaccess").exists()

    def test_install_second_run_skips(self, runner: CliRunner, workdir: Path) -> None:
        _make_project(workdir)

        runner.invoke(cli, ["install"])
        result = runner.invoke(cli, ["install"])

        assert result.exit_code == 0
        assert "All live files already exist" in result.output

    def test_explicit_dirs_override_config(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        _make_project(tmp_path, web_dir="htdocs")
        config = tmp_path / "provision.yaml"
        config.write_text(yaml.safe_dump({"web_dir": "public"}))

        result = runner.invoke(
            cli,
            [
                "htaccess",
                "--config",
                str(config),
                "--web-dir",
                str(tmp_path / "htdocs"),
            ],
        )

        assert result.exit_code == 0
        assert (tmp_path / "htdocs" / ".htaccess").exists()

    def test_invalid_config_fails(self, runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "provision.yaml"
        config.write_text("- not a mapping\n")

        result = runner.invoke(cli, ["install", "--config", str(config)])

        assert result.exit_code == 1
        assert "mapping" in result.output

    @pytest.mark.parametrize("command", ["install", "status"])
    def test_unreadable_composer_file_is_reported(
        self, runner: CliRunner, workdir: Path, command: str
    ) -> None:
        """A composer.json that cannot be read gives an error message."""
        (workdir / "composer.json").mkdir()

        result = runner.invoke(cli, [command])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert not isinstance(result.exception, OSError)

    def test_status_writes_nothing(self, runner: CliRunner, workdir: Path) -> None:
        _make_project(workdir)

        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 0
        assert "Provisioning status" in result.output
        assert not (workdir / "app" / "config" / "parameters.yml").exists()
        assert not (workdir / "web" / ".htaccess").exists()

    def test_status_without_templates(self, runner: CliRunner, workdir: Path) -> None:
        result = runner.invoke(cli, ["status"])

        assert result.exit_code == 0
        assert "Provisioning status" in result.output
