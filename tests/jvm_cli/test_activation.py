"""Tests for activation and JAVA_HOME handling."""

from __future__ import annotations

import os
from unittest.mock import Mock, patch

import pytest

from jvm_cli.activation import EffectKind, WindowsMachineEnvironment, activate, export_command
from jvm_cli.errors import BuildNotFoundError, PrivilegedOperationError
from jvm_cli.registry.models import BuildIdentifier

posix_only = pytest.mark.skipif(os.name == "nt", reason="symlink pointer is POSIX only")


class TestExportCommand:
    def test_posix_default(self):
        assert export_command("JAVA_HOME", "/home/u/.jvm/current", "/bin/bash") == (
            'export JAVA_HOME="/home/u/.jvm/current"'
        )

    def test_fish(self):
        assert export_command("JAVA_HOME", "/x", "/usr/bin/fish") == 'set -gx JAVA_HOME "/x"'

    def test_powershell(self):
        assert export_command("JAVA_HOME", "C:\\x", "pwsh") == '$env:JAVA_HOME = "C:\\x"'

    def test_unknown_shell_uses_export(self, monkeypatch):
        monkeypatch.delenv("SHELL", raising=False)
        assert export_command("JAVA_HOME", "/x").startswith("export ")


@posix_only
class TestActivate:
    def test_shell_effect_points_at_current_link(self, store, make_build):
        make_build("jdk-17.0.1")

        effect = activate(store, BuildIdentifier.parse("jdk-17.0.1"), shell="zsh")

        assert effect.kind is EffectKind.SHELL
        assert effect.value == str(store.current_link)
        assert effect.command == f'export JAVA_HOME="{store.current_link}"'
        assert store.get_active().name == "jdk-17.0.1"

    def test_activating_active_build_again(self, store, make_build):
        make_build("jdk-17.0.1")
        build = BuildIdentifier.parse("jdk-17.0.1")

        first = activate(store, build, shell="bash")
        second = activate(store, build, shell="bash")

        assert first == second
        assert store.get_active() == build

    def test_missing_build(self, store):
        with pytest.raises(BuildNotFoundError):
            activate(store, BuildIdentifier.parse("jdk-99"))

    def test_privileged_success(self, store, make_build):
        build_dir = make_build("jdk-21.0.0")
        privileged = Mock()
        privileged.describe.return_value = "setx /M JAVA_HOME ..."

        effect = activate(store, BuildIdentifier.parse("jdk-21.0.0"), privileged=privileged)

        assert effect.kind is EffectKind.PERSISTED
        assert effect.succeeded
        privileged.set_variable.assert_called_once_with("JAVA_HOME", str(build_dir))

    def test_privileged_failure_is_reported_not_raised(self, store, make_build):
        make_build("jdk-21.0.0")
        privileged = Mock()
        privileged.describe.return_value = "setx /M JAVA_HOME ..."
        privileged.set_variable.side_effect = PrivilegedOperationError("access denied")

        effect = activate(store, BuildIdentifier.parse("jdk-21.0.0"), privileged=privileged)

        assert effect.kind is EffectKind.PERSISTED
        assert effect.succeeded is False
        assert effect.message == "access denied"
        assert effect.command == "setx /M JAVA_HOME ..."
        assert store.get_active().name == "jdk-21.0.0"


class TestWindowsMachineEnvironment:
    def test_describe(self):
        env = WindowsMachineEnvironment()
        assert env.describe("JAVA_HOME", "C:\\jdk") == 'setx /M JAVA_HOME "C:\\jdk"'

    def test_build_command_elevates(self):
        command = WindowsMachineEnvironment().build_command("JAVA_HOME", "C:\\jdk")
        assert command[0] == "powershell"
        assert "-Verb RunAs" in command[-1]
        assert 'setx /M JAVA_HOME "C:\\jdk"' in command[-1]

    def test_nonzero_exit_raises(self):
        env = WindowsMachineEnvironment()
        with patch("jvm_cli.activation.environment.subprocess.run") as mock_run:
            mock_run.return_value = Mock(returncode=1, stderr="Access is denied.", stdout="")
            with pytest.raises(PrivilegedOperationError, match="Access is denied"):
                env.set_variable("JAVA_HOME", "C:\\jdk")

    def test_success(self):
        env = WindowsMachineEnvironment()
        with patch("jvm_cli.activation.environment.subprocess.run") as mock_run:
            mock_run.return_value = Mock(returncode=0, stderr="", stdout="SUCCESS")
            env.set_variable("JAVA_HOME", "C:\\jdk")
        mock_run.assert_called_once()

    def test_missing_powershell(self):
        env = WindowsMachineEnvironment()
        with patch("jvm_cli.activation.environment.subprocess.run", side_effect=FileNotFoundError("powershell")):
            with pytest.raises(PrivilegedOperationError, match="Failed to run setx"):
                env.set_variable("JAVA_HOME", "C:\\jdk")
