"""Base client for provider command-line tools.

This module provides a base class for clients that drive a backend's native
CLI as a subprocess. It handles:
- Process execution with optional stdin and extra environment
- Missing-executable detection with installation guidance
- Exit status and stderr classification into ProviderError types
- Strict UTF-8 decoding and JSON parsing of stdout
- Structured logging with tool context (never argument values)

Subclasses only need to:
1. Provide install guidance and the child environment
2. Override ``_classify_failure`` to rewrite recognized stderr patterns

Calls block until the process exits. There is no timeout: cancellation
belongs to whoever supervises the calling process.

Architecture:
    - Infrastructure layer (adapter for external processes)
    - Uses subprocess from the standard library
    - Returns Result types (no exceptions for backend errors)
"""

import base64
import json
import os
import subprocess
from collections.abc import Mapping, Sequence
from typing import Any

import structlog

from secretspec.core.constants import STDERR_MAX_LENGTH
from secretspec.core.enums import ErrorCode
from secretspec.core.result import Failure, Result, Success
from secretspec.domain.errors import (
    ProviderCommandError,
    ProviderError,
    ProviderInvalidResponseError,
    ProviderToolNotFoundError,
)


class BaseCLIClient:
    """Base class for CLI-driven provider clients.

    Attributes:
        _executable: Executable name or path.
        _tool_name: Short tool name used in log events (``bw``, ``bws``).
        _provider_name: Provider identifier for error messages.
        _logger: Structured logger with tool context.

    Example:
        >>> class VaultCLI(BaseCLIClient):
        ...     def list_entries(self):
        ...         return self._run_json_list(["list"], operation="list_entries")
    """

    install_guidance: str = ""
    """Multi-line installation instructions appended to tool-not-found errors."""

    display_name: str = "CLI"
    """Human-readable tool name (``Bitwarden CLI (bw)``)."""

    def __init__(
        self,
        *,
        executable: str,
        tool_name: str,
        provider_name: str,
    ) -> None:
        """Initialize base CLI client.

        Args:
            executable: Executable name or path passed to the OS.
            tool_name: Short tool name for log events.
            provider_name: Provider identifier (e.g., "bitwarden").
        """
        self._executable = executable
        self._tool_name = tool_name
        self._provider_name = provider_name
        self._logger = structlog.get_logger(f"{tool_name}_cli")

    def _child_env(self) -> Mapping[str, str]:
        """Extra environment variables for the child process."""
        return {}

    def _run(
        self,
        args: Sequence[str],
        *,
        operation: str,
        stdin: str | None = None,
    ) -> Result[str, ProviderError]:
        """Execute the tool and return its decoded stdout.

        Args:
            args: Arguments after the executable.
            operation: Operation name for logging.
            stdin: Text written to the process's standard input.

        Returns:
            Success(str): Decoded stdout on exit status 0.
            Failure(ProviderToolNotFoundError): Executable missing.
            Failure(ProviderError): Non-zero exit, classified by
                ``_classify_failure``.
            Failure(ProviderInvalidResponseError): stdout is not UTF-8.
        """
        argv = [self._executable, *args]
        env = {**os.environ, **self._child_env()}

        self._logger.debug(
            f"{self._tool_name}_cli_started",
            operation=operation,
            subcommand=" ".join(args[:2]),
        )

        try:
            completed = subprocess.run(
                argv,
                input=stdin.encode("utf-8") if stdin is not None else None,
                capture_output=True,
                env=env,
                check=False,
            )
        except FileNotFoundError:
            self._logger.warning(
                f"{self._tool_name}_cli_not_installed",
                operation=operation,
                executable=self._executable,
            )
            return Failure(error=self._tool_not_found())
        except OSError as e:
            self._logger.error(
                f"{self._tool_name}_cli_spawn_failed",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderCommandError(
                    code=ErrorCode.PROVIDER_COMMAND_FAILED,
                    message=f"Failed to run {self._executable}: {e}",
                    provider_name=self._provider_name,
                    details={"operation": operation},
                )
            )

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace")
            self._logger.warning(
                f"{self._tool_name}_cli_failed",
                operation=operation,
                exit_code=completed.returncode,
            )
            return Failure(
                error=self._classify_failure(
                    stderr=stderr,
                    exit_code=completed.returncode,
                    operation=operation,
                )
            )

        try:
            stdout = completed.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            self._logger.error(
                f"{self._tool_name}_cli_invalid_utf8",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_RESPONSE_INVALID,
                    message=f"{self.display_name} returned non-UTF-8 output: {e}",
                    provider_name=self._provider_name,
                    details={"operation": operation},
                )
            )

        self._logger.debug(
            f"{self._tool_name}_cli_succeeded",
            operation=operation,
        )
        return Success(value=stdout)

    def _classify_failure(
        self,
        *,
        stderr: str,
        exit_code: int,
        operation: str,
    ) -> ProviderError:
        """Map a non-zero exit into a ProviderError.

        The default is a generic command error carrying the raw stderr.
        Subclasses rewrite recognized patterns into actionable errors.

        Args:
            stderr: Decoded stderr text.
            exit_code: Process exit status.
            operation: Operation name.

        Returns:
            ProviderError: Classified error.
        """
        return self._command_error(
            message=stderr.strip() or f"{self._executable} exited with status {exit_code}",
            stderr=stderr,
            exit_code=exit_code,
            operation=operation,
        )

    def _command_error(
        self,
        *,
        message: str,
        stderr: str,
        exit_code: int | None,
        operation: str,
    ) -> ProviderCommandError:
        return ProviderCommandError(
            code=ErrorCode.PROVIDER_COMMAND_FAILED,
            message=message,
            provider_name=self._provider_name,
            exit_code=exit_code,
            stderr=stderr[:STDERR_MAX_LENGTH],
            details={"operation": operation},
        )

    def _tool_not_found(self) -> ProviderToolNotFoundError:
        message = f"{self.display_name} is not installed."
        if self.install_guidance:
            message = f"{message}\n\n{self.install_guidance}"
        return ProviderToolNotFoundError(
            code=ErrorCode.PROVIDER_TOOL_NOT_FOUND,
            message=message,
            provider_name=self._provider_name,
            executable=self._executable,
        )

    def _parse_json(
        self,
        output: str,
        operation: str,
    ) -> Result[Any, ProviderError]:
        """Parse stdout as JSON.

        Args:
            output: Decoded stdout.
            operation: Operation name for logging.

        Returns:
            Success(Any): Parsed JSON value.
            Failure(ProviderInvalidResponseError): Malformed JSON.
        """
        try:
            return Success(value=json.loads(output))
        except json.JSONDecodeError as e:
            self._logger.error(
                f"{self._tool_name}_cli_invalid_json",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=self._invalid_response(
                    f"Invalid JSON from {self.display_name}: {e}", output, operation
                )
            )

    def _run_json_object(
        self,
        args: Sequence[str],
        *,
        operation: str,
        stdin: str | None = None,
    ) -> Result[dict[str, Any], ProviderError]:
        """Execute the tool and parse stdout as a JSON object."""
        run_result = self._run(args, operation=operation, stdin=stdin)
        if isinstance(run_result, Failure):
            return run_result
        output = run_result.value

        parse_result = self._parse_json(output, operation)
        if isinstance(parse_result, Failure):
            return parse_result
        data = parse_result.value

        if not isinstance(data, dict):
            self._logger.warning(
                f"{self._tool_name}_cli_unexpected_format",
                operation=operation,
                data_type=type(data).__name__,
            )
            return Failure(
                error=self._invalid_response(
                    f"Expected a JSON object from {self.display_name}",
                    output,
                    operation,
                )
            )
        return Success(value=data)

    def _run_json_list(
        self,
        args: Sequence[str],
        *,
        operation: str,
    ) -> Result[list[Any], ProviderError]:
        """Execute the tool and parse stdout as a JSON array."""
        run_result = self._run(args, operation=operation)
        if isinstance(run_result, Failure):
            return run_result
        output = run_result.value

        parse_result = self._parse_json(output, operation)
        if isinstance(parse_result, Failure):
            return parse_result
        data = parse_result.value

        if not isinstance(data, list):
            self._logger.warning(
                f"{self._tool_name}_cli_unexpected_format",
                operation=operation,
                data_type=type(data).__name__,
            )
            return Failure(
                error=self._invalid_response(
                    f"Expected a JSON array from {self.display_name}",
                    output,
                    operation,
                )
            )

        self._logger.debug(
            f"{self._tool_name}_cli_listed",
            operation=operation,
            count=len(data),
        )
        return Success(value=data)

    def _invalid_response(
        self, message: str, output: str, operation: str
    ) -> ProviderInvalidResponseError:
        return ProviderInvalidResponseError(
            code=ErrorCode.PROVIDER_RESPONSE_INVALID,
            message=message,
            provider_name=self._provider_name,
            response_body=output[:STDERR_MAX_LENGTH],
            details={"operation": operation},
        )

    @staticmethod
    def encode_document(document: Mapping[str, Any]) -> str:
        """Encode a JSON document as base64 for ``create``/``edit`` stdin.

        Args:
            document: JSON-serializable document.

        Returns:
            str: Base64 of the compact UTF-8 JSON.
        """
        raw = json.dumps(document, ensure_ascii=False, separators=(",", ":"))
        return base64.b64encode(raw.encode("utf-8")).decode("ascii")
