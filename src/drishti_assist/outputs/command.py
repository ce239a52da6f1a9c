"""
Command outputs - drive external programs as collaborators.

Runs a configured shell command with the payload passed as environment
variables, e.g.:

    outputs:
      speech:
        type: command
        exec: 'espeak-ng -v "$SPEECH_LANGUAGE" "$SPEECH_TEXT"'
      haptics:
        type: command
        exec: ./buzz.sh
        timeout_seconds: 2

Speech is fire-and-forget (Popen) and stop() terminates the running process.
Haptic and router commands run to completion under a timeout.
"""

import logging
import os
import subprocess
from typing import Any

from ..models import HapticPattern, VoiceParams
from . import HapticOutput, Router, SpeechOutput

logger = logging.getLogger(__name__)

# Default timeout for blocking commands (seconds)
DEFAULT_TIMEOUT = 5


def _build_env(values: dict[str, Any]) -> dict[str, str]:
    """Current environment plus the non-None payload values."""
    env = os.environ.copy()
    for key, value in values.items():
        if value is not None:
            env[key] = str(value)
    return env


def run_command(exec_path: str, values: dict[str, Any], timeout: float) -> tuple[bool, str | None]:
    """
    Execute a command with payload values as environment variables.

    Returns:
        (success, error_message) tuple
    """
    try:
        result = subprocess.run(
            exec_path,
            shell=True,
            timeout=timeout,
            capture_output=True,
            text=True,
            env=_build_env(values),
        )
    except subprocess.TimeoutExpired:
        error_msg = f"Command timed out after {timeout}s"
        logger.error(error_msg)
        return False, error_msg

    if result.returncode == 0:
        if result.stdout:
            logger.debug(f"Command stdout: {result.stdout.strip()}")
        return True, None

    error_msg = f"Command failed with code {result.returncode}"
    if result.stderr:
        error_msg += f": {result.stderr.strip()}"
    logger.error(error_msg)
    return False, error_msg


def _require_exec(config: dict[str, Any]) -> str:
    exec_path = config.get("exec")
    if not exec_path:
        raise ValueError("No 'exec' specified in command output config")
    return exec_path


class CommandSpeech(SpeechOutput):
    """Speech backed by an external TTS command."""

    def __init__(self, config: dict[str, Any]):
        self._exec = _require_exec(config)
        self._process: subprocess.Popen | None = None

    def speak(self, text: str, params: VoiceParams) -> None:
        env = _build_env(
            {
                "SPEECH_TEXT": text,
                "SPEECH_LANGUAGE": params.language_tag,
                "SPEECH_RATE": params.rate,
                "SPEECH_PITCH": params.pitch,
            }
        )
        self._process = subprocess.Popen(
            self._exec,
            shell=True,
            env=env,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
        logger.debug(f"Speech command started (pid {self._process.pid})")

    def stop(self) -> None:
        if self._process is None:
            return
        if self._process.poll() is None:
            self._process.terminate()
            try:
                self._process.wait(timeout=1)
            except subprocess.TimeoutExpired:
                self._process.kill()
        self._process = None


class CommandHaptics(HapticOutput):
    """Haptics backed by an external command; HAPTIC_PATTERN carries the pattern."""

    def __init__(self, config: dict[str, Any]):
        self._exec = _require_exec(config)
        self._timeout = config.get("timeout_seconds", DEFAULT_TIMEOUT)

    def pulse(self, pattern: HapticPattern) -> None:
        ok, error = run_command(self._exec, {"HAPTIC_PATTERN": pattern.value}, self._timeout)
        if not ok:
            raise RuntimeError(error)


class CommandRouter(Router):
    """Router backed by an external command; DESTINATION carries the target."""

    def __init__(self, config: dict[str, Any]):
        self._exec = _require_exec(config)
        self._timeout = config.get("timeout_seconds", DEFAULT_TIMEOUT)

    def go_to(self, destination: str) -> None:
        ok, error = run_command(self._exec, {"DESTINATION": destination}, self._timeout)
        if not ok:
            raise RuntimeError(error)
