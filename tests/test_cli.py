"""End-to-end tests for the avm command surface."""

import os
from unittest.mock import MagicMock, patch

import pytest
import requests
import yaml

from avmcli import __version__
from avmcli.cli.cli import run_cli
from avmcli.core.errors import InstallError

REGISTRY_DOCUMENT = {
    "dist-tags": {"latest": "11.0.0", "beta": "11.0.0-beta.8"},
    "versions": {"10.0.0": {}, "11.0.0": {}, "11.0.0-beta.8": {}},
}


@pytest.fixture
def config_file(tmp_path, config):
    path = tmp_path / "avm.yaml"
    path.write_text(yaml.dump(config))
    return str(path)


@pytest.fixture
def registry():
    response = MagicMock()
    response.json.return_value = REGISTRY_DOCUMENT
    with patch("avmcli.core.registry.requests.get", return_value=response) as mock_get:
        yield mock_get


def fake_install(config):
    """Replacement for Installer.install that lays out the binary on disk."""

    def _install(self, version):
        version_dir = os.path.join(config["options"]["versions_dir"], version)
        os.makedirs(version_dir, exist_ok=True)
        binary = os.path.join(version_dir, "amplify")
        with open(binary, "w") as f:
            f.write("binary")
        return binary

    return _install


class TestVersionAndHelp:
    def test_version_flag(self, capsys):
        run_cli(["--version"])
        assert __version__ in capsys.readouterr().out

    def test_no_command_exits_non_zero(self, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli([])
        assert exc.value.code == 1


class TestDispatch:
    def test_install_subcommand_dispatches(self, config_file):
        with patch("avmcli.cli.cli.install_version") as mock_install:
            run_cli(["--config", config_file, "install", "11"])

        mock_install.assert_called_once()
        assert mock_install.call_args[0][1] == "11"

    def test_use_subcommand_dispatches(self, config_file):
        with patch("avmcli.cli.cli.use_version") as mock_use:
            run_cli(["--config", config_file, "use", "beta", "-y"])

        mock_use.assert_called_once()
        assert mock_use.call_args[0][1] == "beta"
        assert mock_use.call_args[1] == {"assume_yes": True}

    def test_version_positional_does_not_trigger_version_flag(self, config_file, capsys):
        with patch("avmcli.cli.cli.install_version"):
            run_cli(["--config", config_file, "install", "11"])
        assert "AVM v" not in capsys.readouterr().out


class TestInstallCommand:
    def test_install_resolves_range(self, config_file, config, registry, capsys):
        with patch(
            "avmcli.core.installer.Installer.install", autospec=True,
            side_effect=fake_install(config),
        ) as mock_install:
            run_cli(["--config", config_file, "install", "11"])

        assert mock_install.call_args[0][1] == "11.0.0"
        assert "Installed @aws-amplify/cli@11.0.0" in capsys.readouterr().out

    def test_invalid_version_fails_before_network(self, config_file, registry, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli(["--config", config_file, "install", "not a version!"])

        assert exc.value.code == 1
        assert "version must be a valid semver string" in capsys.readouterr().err
        registry.assert_not_called()

    def test_unknown_version(self, config_file, registry, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli(["--config", config_file, "install", "99"])

        assert exc.value.code == 1
        assert "version not found" in capsys.readouterr().err

    def test_registry_down(self, config_file, capsys):
        with patch(
            "avmcli.core.registry.requests.get",
            side_effect=requests.ConnectionError("offline"),
        ):
            with pytest.raises(SystemExit) as exc:
                run_cli(["--config", config_file, "install", "latest"])

        assert exc.value.code == 1
        assert "Failed to fetch @aws-amplify/cli" in capsys.readouterr().err

    def test_install_error_shows_cause_in_debug(self, config_file, registry, capsys):
        error = InstallError(
            "Failed to install @aws-amplify/cli@11.0.0", cause=OSError("disk full")
        )
        with patch("avmcli.core.installer.Installer.install", side_effect=error):
            with pytest.raises(SystemExit) as exc:
                run_cli(["--config", config_file, "install", "latest", "--debug"])

        assert exc.value.code == 1
        err = capsys.readouterr().err
        assert "Failed to install @aws-amplify/cli@11.0.0" in err
        assert "disk full" in err

    def test_install_error_hides_cause_without_debug(self, config_file, registry, capsys):
        error = InstallError(
            "Failed to install @aws-amplify/cli@11.0.0", cause=OSError("disk full")
        )
        with patch("avmcli.core.installer.Installer.install", side_effect=error):
            with pytest.raises(SystemExit):
                run_cli(["--config", config_file, "install", "latest"])

        assert "disk full" not in capsys.readouterr().err


class TestUseCommand:
    def test_use_installed_version(self, config_file, config, installed, registry, capsys):
        binary = installed("11.0.0-beta.8")

        run_cli(["--config", config_file, "use", "beta"])

        active = os.path.join(config["options"]["bin_dir"], "amplify")
        assert os.path.realpath(active) == os.path.realpath(binary)
        assert "Now using @aws-amplify/cli@11.0.0-beta.8" in capsys.readouterr().out

    def test_use_prompts_and_installs(self, config_file, config, registry, capsys):
        with patch("builtins.input", return_value="") as mock_input, patch(
            "avmcli.core.installer.Installer.install", autospec=True,
            side_effect=fake_install(config),
        ):
            run_cli(["--config", config_file, "use", "10"])

        assert "is not installed. Install now?" in mock_input.call_args[0][0]
        assert "Now using @aws-amplify/cli@10.0.0" in capsys.readouterr().out

    def test_use_declined_is_clean_exit(self, config_file, config, registry, capsys):
        with patch("builtins.input", return_value="n") as mock_input, patch(
            "avmcli.core.installer.Installer.install"
        ) as mock_install:
            # returns normally: declining is not an error
            run_cli(["--config", config_file, "use", "10.0.0"])

        mock_input.assert_called_once()
        assert "@aws-amplify/cli@10.0.0 is not installed" in mock_input.call_args[0][0]
        mock_install.assert_not_called()
        assert not os.path.lexists(os.path.join(config["options"]["bin_dir"], "amplify"))
        captured = capsys.readouterr()
        assert "Now using" not in captured.out
        assert captured.err == ""

    def test_use_gives_up_after_invalid_answers(self, config_file, config, registry):
        with patch("builtins.input", return_value="perhaps") as mock_input, patch(
            "avmcli.core.installer.Installer.install"
        ) as mock_install:
            run_cli(["--config", config_file, "use", "10.0.0"])

        assert mock_input.call_count == 3
        mock_install.assert_not_called()
        assert not os.path.lexists(os.path.join(config["options"]["bin_dir"], "amplify"))

    def test_use_yes_skips_prompt(self, config_file, config, registry, capsys):
        with patch("builtins.input") as mock_input, patch(
            "avmcli.core.installer.Installer.install", autospec=True,
            side_effect=fake_install(config),
        ) as mock_install:
            run_cli(["--config", config_file, "use", "latest", "--yes"])

        mock_input.assert_not_called()
        assert mock_install.call_args[0][1] == "11.0.0"
        active = os.path.join(config["options"]["bin_dir"], "amplify")
        binary = os.path.join(config["options"]["versions_dir"], "11.0.0", "amplify")
        assert os.path.realpath(active) == os.path.realpath(binary)
        assert "Now using @aws-amplify/cli@11.0.0" in capsys.readouterr().out

    def test_symlink_failure(self, config_file, installed, registry, capsys):
        installed("11.0.0")
        with patch("avmcli.core.switcher.os.symlink", side_effect=OSError("nope")):
            with pytest.raises(SystemExit) as exc:
                run_cli(["--config", config_file, "use", "11.0.0"])

        assert exc.value.code == 1
        assert "Failed to create symlink" in capsys.readouterr().err


class TestInfoCommands:
    def test_bin(self, config_file, config, capsys):
        run_cli(["--config", config_file, "bin"])
        assert capsys.readouterr().out.strip() == config["options"]["bin_dir"]

    def test_list_empty(self, config_file, capsys):
        run_cli(["--config", config_file, "list"])
        assert "No versions installed" in capsys.readouterr().out

    def test_list_marks_active(self, config_file, manager, installed, capsys):
        installed("10.0.0")
        installed("11.0.0")
        manager.switch_to("11.0.0")

        run_cli(["--config", config_file, "list"])

        out = capsys.readouterr().out
        assert "Installed versions:" in out
        assert "\t10.0.0" in out
        assert "11.0.0 (active)" in out

    def test_current(self, config_file, manager, installed, capsys):
        installed("10.0.0")
        manager.switch_to("10.0.0")

        run_cli(["--config", config_file, "current"])

        assert capsys.readouterr().out.strip() == "10.0.0"

    def test_current_none(self, config_file, capsys):
        run_cli(["--config", config_file, "current"])
        assert "No version is active" in capsys.readouterr().out

    def test_missing_config_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli(["--config", str(tmp_path / "nope.yaml"), "list"])

        assert exc.value.code == 1
        assert "Config file not found" in capsys.readouterr().err


def test_init_creates_user_config(tmp_path, monkeypatch, capsys):
    from avmcli.utils import config as config_module

    monkeypatch.setattr(config_module, "get_real_home", lambda: str(tmp_path))

    run_cli(["init"])
    run_cli(["init"])

    out = capsys.readouterr().out
    assert "Created default config file" in out
    assert "Config file already exists" in out
    assert (tmp_path / ".config" / "avm" / "avm.yaml").is_file()
