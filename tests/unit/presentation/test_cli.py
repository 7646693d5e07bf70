"""Unit tests for the gatehouse CLI."""

import os
from unittest.mock import patch

from typer.testing import CliRunner

from gatehouse.presentation.cli.app import app
from gatehouse_auth import JWTService, KeyPair

runner = CliRunner()


class TestKeysGenerate:
    """Tests for `gatehouse keys generate`."""

    def test_writes_usable_key_pair(self, tmp_path):
        result = runner.invoke(app, ["keys", "generate", "--out-dir", str(tmp_path)])

        assert result.exit_code == 0, result.output
        keys = KeyPair.from_files(
            tmp_path / "private_key.pem",
            tmp_path / "public_key.pem",
        )
        service = JWTService(keys)
        token = service.generate_token("acc-1")
        assert service.validate_token(token.token).sub == "acc-1"

    def test_private_key_is_owner_only(self, tmp_path):
        runner.invoke(app, ["keys", "generate", "--out-dir", str(tmp_path)])

        assert (tmp_path / "private_key.pem").stat().st_mode & 0o777 == 0o600

    def test_refuses_to_overwrite(self, tmp_path):
        runner.invoke(app, ["keys", "generate", "--out-dir", str(tmp_path)])
        original = (tmp_path / "private_key.pem").read_bytes()

        result = runner.invoke(app, ["keys", "generate", "--out-dir", str(tmp_path)])

        assert result.exit_code == 1
        assert (tmp_path / "private_key.pem").read_bytes() == original

    def test_force_overwrites(self, tmp_path):
        runner.invoke(app, ["keys", "generate", "--out-dir", str(tmp_path)])
        original = (tmp_path / "private_key.pem").read_bytes()

        result = runner.invoke(
            app,
            ["keys", "generate", "--out-dir", str(tmp_path), "--force"],
        )

        assert result.exit_code == 0
        assert (tmp_path / "private_key.pem").read_bytes() != original

    def test_private_key_is_created_owner_only(self, tmp_path):
        """The key file never exists with wider permissions, even briefly."""
        private_path = tmp_path / "private_key.pem"
        private_path.write_bytes(b"old")
        private_path.chmod(0o644)

        with patch("gatehouse.presentation.cli.app.os.open", wraps=os.open) as os_open:
            result = runner.invoke(
                app,
                ["keys", "generate", "--out-dir", str(tmp_path), "--force"],
            )

        assert result.exit_code == 0, result.output
        modes = [c.args[2] for c in os_open.call_args_list if c.args[0] == private_path]
        assert modes == [0o600]
        assert private_path.stat().st_mode & 0o777 == 0o600


class TestServe:
    def test_runs_app_factory_with_uvicorn(self, monkeypatch):
        monkeypatch.setenv("API_HOST", "0.0.0.0")
        monkeypatch.setenv("API_PORT", "9001")

        with patch("gatehouse.presentation.cli.app.uvicorn.run") as run:
            result = runner.invoke(app, ["serve"])

        assert result.exit_code == 0, result.output
        run.assert_called_once()
        args, kwargs = run.call_args
        assert args == ("gatehouse.presentation.api.app:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["host"] == "0.0.0.0"
        assert kwargs["port"] == 9001

    def test_options_override_settings(self):
        with patch("gatehouse.presentation.cli.app.uvicorn.run") as run:
            runner.invoke(app, ["serve", "--host", "127.0.0.2", "--port", "7000"])

        assert run.call_args.kwargs["host"] == "127.0.0.2"
        assert run.call_args.kwargs["port"] == 7000
