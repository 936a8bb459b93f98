"""Unit tests for BaseCLIClient.

Tests cover:
- Process execution (argv, stdin encoding, child environment)
- Missing executable and spawn failures
- Non-zero exit classification and stderr truncation
- Output decoding and JSON shape checks
- Base64 document encoding

Architecture:
- subprocess.run patched with unittest.mock
- Minimal subclass standing in for a concrete CLI client
"""

import base64
import json
import subprocess
from unittest.mock import patch

import pytest

from secretspec.core.constants import STDERR_MAX_LENGTH
from secretspec.core.enums import ErrorCode
from secretspec.core.result import Failure, Success
from secretspec.domain.errors import (
    ProviderCommandError,
    ProviderInvalidResponseError,
    ProviderToolNotFoundError,
)
from secretspec.infrastructure.providers.base_cli_client import BaseCLIClient
from tests.utils.fake_bitwarden_cli import SUBPROCESS_RUN


class VaultCLI(BaseCLIClient):
    display_name = "Vault CLI (vault)"
    install_guidance = "Install it with: brew install vault"

    def __init__(self, extra_env=None):
        super().__init__(executable="vault", tool_name="vault", provider_name="vault")
        self._extra_env = extra_env or {}

    def _child_env(self):
        return self._extra_env


def completed(returncode=0, stdout=b"", stderr=b""):
    return subprocess.CompletedProcess(
        args=["vault"], returncode=returncode, stdout=stdout, stderr=stderr
    )


@pytest.mark.unit
class TestRun:
    """Test process execution."""

    def test_success_returns_stdout(self):
        """Test stdout is decoded on exit status 0."""
        with patch(SUBPROCESS_RUN, return_value=completed(stdout=b"ok\n")) as run:
            result = VaultCLI()._run(["status"], operation="status")

        assert result == Success(value="ok\n")
        assert run.call_args.args[0] == ["vault", "status"]
        assert run.call_args.kwargs["capture_output"] is True
        assert run.call_args.kwargs["input"] is None

    def test_stdin_is_encoded(self):
        """Test stdin text is passed as UTF-8 bytes."""
        with patch(SUBPROCESS_RUN, return_value=completed()) as run:
            VaultCLI()._run(["write"], operation="write", stdin="héllo")

        assert run.call_args.kwargs["input"] == "héllo".encode()

    def test_child_env_merged_over_parent(self):
        """Test the child environment extends the parent's."""
        with (
            patch.dict("os.environ", {"PARENT_ONLY": "1", "SHARED": "parent"}),
            patch(SUBPROCESS_RUN, return_value=completed()) as run,
        ):
            VaultCLI(extra_env={"SHARED": "child"})._run(["x"], operation="x")

        env = run.call_args.kwargs["env"]
        assert env["PARENT_ONLY"] == "1"
        assert env["SHARED"] == "child"

    def test_missing_executable(self):
        """Test FileNotFoundError becomes a tool-not-found error with guidance."""
        with patch(SUBPROCESS_RUN, side_effect=FileNotFoundError("vault")):
            result = VaultCLI()._run(["status"], operation="status")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ProviderToolNotFoundError)
        assert result.error.code == ErrorCode.PROVIDER_TOOL_NOT_FOUND
        assert result.error.executable == "vault"
        assert result.error.message.startswith("Vault CLI (vault) is not installed.")
        assert "brew install vault" in result.error.message

    def test_spawn_failure(self):
        """Test other OSErrors become command errors."""
        with patch(SUBPROCESS_RUN, side_effect=PermissionError("denied")):
            result = VaultCLI()._run(["status"], operation="status")

        assert isinstance(result.error, ProviderCommandError)
        assert "Failed to run vault" in result.error.message

    def test_non_zero_exit(self):
        """Test a failing process yields a command error with stderr."""
        with patch(
            SUBPROCESS_RUN, return_value=completed(returncode=2, stderr=b"boom\n")
        ):
            result = VaultCLI()._run(["status"], operation="status")

        assert isinstance(result.error, ProviderCommandError)
        assert result.error.message == "boom"
        assert result.error.exit_code == 2
        assert result.error.details == {"operation": "status"}

    def test_non_zero_exit_without_stderr(self):
        """Test an empty stderr still produces a readable message."""
        with patch(SUBPROCESS_RUN, return_value=completed(returncode=3)):
            result = VaultCLI()._run(["status"], operation="status")

        assert result.error.message == "vault exited with status 3"

    def test_stderr_truncated(self):
        """Test stored stderr is capped."""
        stderr = b"x" * (STDERR_MAX_LENGTH * 2)
        with patch(SUBPROCESS_RUN, return_value=completed(returncode=1, stderr=stderr)):
            result = VaultCLI()._run(["status"], operation="status")

        assert len(result.error.stderr) == STDERR_MAX_LENGTH

    def test_non_utf8_stdout(self):
        """Test invalid UTF-8 output is an invalid-response error."""
        with patch(SUBPROCESS_RUN, return_value=completed(stdout=b"\xff\xfe")):
            result = VaultCLI()._run(["status"], operation="status")

        assert isinstance(result.error, ProviderInvalidResponseError)
        assert result.error.code == ErrorCode.PROVIDER_RESPONSE_INVALID


@pytest.mark.unit
class TestJsonParsing:
    """Test JSON helpers."""

    def test_object(self):
        """Test a JSON object is returned as a dict."""
        with patch(SUBPROCESS_RUN, return_value=completed(stdout=b'{"a": 1}')):
            result = VaultCLI()._run_json_object(["get"], operation="get")

        assert result == Success(value={"a": 1})

    def test_list(self):
        """Test a JSON array is returned as a list."""
        with patch(SUBPROCESS_RUN, return_value=completed(stdout=b"[1, 2]")):
            result = VaultCLI()._run_json_list(["list"], operation="list")

        assert result == Success(value=[1, 2])

    def test_invalid_json(self):
        """Test malformed JSON is an invalid-response error."""
        with patch(SUBPROCESS_RUN, return_value=completed(stdout=b"not json")):
            result = VaultCLI()._run_json_list(["list"], operation="list")

        assert isinstance(result.error, ProviderInvalidResponseError)
        assert result.error.message.startswith("Invalid JSON from Vault CLI (vault)")
        assert result.error.response_body == "not json"

    def test_object_expected(self):
        """Test an array where an object is expected is rejected."""
        with patch(SUBPROCESS_RUN, return_value=completed(stdout=b"[]")):
            result = VaultCLI()._run_json_object(["get"], operation="get")

        assert isinstance(result.error, ProviderInvalidResponseError)
        assert "Expected a JSON object" in result.error.message

    def test_list_expected(self):
        """Test an object where an array is expected is rejected."""
        with patch(SUBPROCESS_RUN, return_value=completed(stdout=b"{}")):
            result = VaultCLI()._run_json_list(["list"], operation="list")

        assert isinstance(result.error, ProviderInvalidResponseError)
        assert "Expected a JSON array" in result.error.message

    def test_failure_propagates_before_parsing(self):
        """Test a failed process is not parsed."""
        with patch(SUBPROCESS_RUN, return_value=completed(returncode=1, stdout=b"[]")):
            result = VaultCLI()._run_json_list(["list"], operation="list")

        assert isinstance(result.error, ProviderCommandError)


@pytest.mark.unit
class TestEncodeDocument:
    """Test encode_document()."""

    def test_base64_of_compact_utf8_json(self):
        """Test the document decodes back to the same JSON."""
        document = {"name": "KEY", "value": "pässwörd ✓", "nested": {"a": [1]}}

        encoded = BaseCLIClient.encode_document(document)
        raw = base64.b64decode(encoded).decode("utf-8")

        assert json.loads(raw) == document
        assert "✓" in raw
        assert ", " not in raw
