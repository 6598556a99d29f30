"""End-to-end CLI tests against a temporary data directory."""

import json
import re

import pytest
from click.testing import CliRunner

from labstock.infrastructure.cli.main import cli

ID_PATTERN = r"[0-9a-f-]{36}"


@pytest.fixture
def env(tmp_path):
    return {
        "LABSTOCK_DATA_DIR": str(tmp_path),
        "LABSTOCK_JWT_SECRET": "cli-test-secret-with-enough-length",
        "LABSTOCK_BCRYPT_ROUNDS": "4",
    }


def _run(runner, env, *args, token=None):
    run_env = dict(env)
    if token is not None:
        run_env["LABSTOCK_TOKEN"] = token
    return runner.invoke(cli, list(args), env=run_env)


def _login(runner, env, first, last, password):
    result = _run(
        runner, env, "auth", "login",
        "--first-name", first, "--last-name", last, "--password", password,
    )
    assert result.exit_code == 0, result.output
    return result.output.strip().splitlines()[-1]


def _id(output, prefix):
    match = re.search(prefix + r"\s*(" + ID_PATTERN + ")", output)
    assert match, output
    return match.group(1)


@pytest.fixture
def admin_token(env):
    runner = CliRunner()
    result = _run(
        runner, env, "user", "init-admin",
        "--first-name", "Grace", "--last-name", "Hopper", "--password", "admin-pw",
    )
    assert result.exit_code == 0, result.output
    return _login(runner, env, "Grace", "Hopper", "admin-pw")


class TestCli:

    def test_init_admin_only_once(self, env, admin_token):
        result = _run(
            CliRunner(), env, "user", "init-admin",
            "--first-name", "Eve", "--last-name", "X", "--password", "pw",
        )
        assert result.exit_code != 0
        assert "Users already exist" in result.output

    def test_bad_login(self, env, admin_token):
        result = _run(
            CliRunner(), env, "auth", "login",
            "--first-name", "Grace", "--last-name", "Hopper", "--password", "nope",
        )
        assert result.exit_code != 0
        assert "User not found or password incorrect" in result.output

    def test_commands_require_token(self, env, admin_token):
        result = _run(CliRunner(), env, "inventory", "show")
        assert result.exit_code != 0
        assert "Authentication required" in result.output

    def test_whoami(self, env, admin_token):
        result = _run(CliRunner(), env, "auth", "whoami", token=admin_token)
        assert result.exit_code == 0, result.output
        assert "Grace Hopper (admin)" in result.output

    def test_borrow_and_return_cycle(self, env, admin_token, tmp_path):
        runner = CliRunner()

        result = _run(
            runner, env, "user", "add",
            "--first-name", "Ada", "--last-name", "Lovelace",
            "--role", "user", "--password", "ada-pw",
            token=admin_token,
        )
        assert result.exit_code == 0, result.output
        ada_token = _login(runner, env, "Ada", "Lovelace", "ada-pw")

        result = _run(
            runner, env, "inventory", "add",
            "--name", "Arduino Uno", "--category", "Electronics", "--quantity", "10",
            token=admin_token,
        )
        assert result.exit_code == 0, result.output
        item_id = _id(result.output, r"id=")

        result = _run(
            runner, env, "request", "create",
            "--item", item_id, "--quantity", "3", "--reason", "robot arm",
            token=ada_token,
        )
        assert result.exit_code == 0, result.output
        request_id = _id(result.output, r"Request")

        result = _run(
            runner, env, "request", "review", "--id", request_id,
            "--action", "approve", "--return-type", "admin_check",
            token=ada_token,
        )
        assert result.exit_code != 0
        assert "not allowed" in result.output

        result = _run(
            runner, env, "request", "review", "--id", request_id,
            "--action", "approve", "--return-type", "admin_check",
            token=admin_token,
        )
        assert result.exit_code == 0, result.output
        assert "status=approved" in result.output

        result = _run(runner, env, "request", "return", "--id", request_id, token=ada_token)
        assert result.exit_code == 0, result.output
        assert "awaiting return confirmation" in result.output

        inventory = json.loads((tmp_path / "inventory.json").read_text())
        assert inventory[0]["quantity"] == 7

        result = _run(
            runner, env, "request", "confirm-return", "--id", request_id,
            token=admin_token,
        )
        assert result.exit_code == 0, result.output

        inventory = json.loads((tmp_path / "inventory.json").read_text())
        assert inventory[0]["quantity"] == 10
        [stored] = json.loads((tmp_path / "requests.json").read_text())
        assert stored["returnStatus"] == "returned"

        result = _run(runner, env, "log", "show", "--action", "RETURN_CONFIRM", token=admin_token)
        assert result.exit_code == 0, result.output
        assert "Return confirmed: Arduino Uno" in result.output

    def test_overdraw_is_reported(self, env, admin_token):
        runner = CliRunner()
        result = _run(
            runner, env, "inventory", "add",
            "--name", "Servo", "--category", "Electronics", "--quantity", "1",
            token=admin_token,
        )
        item_id = _id(result.output, r"id=")

        result = _run(
            runner, env, "request", "create", "--item", item_id, "--quantity", "5",
            token=admin_token,
        )
        assert result.exit_code != 0
        assert "Insufficient stock" in result.output

    def test_corrupt_store_gives_generic_error(self, env, admin_token, tmp_path):
        (tmp_path / "inventory.json").write_text("[{", encoding="utf-8")
        result = _run(CliRunner(), env, "inventory", "show", token=admin_token)
        assert result.exit_code != 0
        assert "internal error" in result.output
