"""
Rewriting raw report text with an external LLM command-line tool.

Claude Code is tried first with a fixed time limit; if it fails or hangs the
Gemini CLI is tried once. Callers get None when neither produced output and
should show the raw data instead.
"""

import shutil
import subprocess
import sys
from pathlib import Path

from core.config import CLAUDE_FALLBACK_PATHS, LLM_TIMEOUT_SECONDS

ERROR_MARKERS = ("execution error", "failed", "invalid", "exception")


def find_claude() -> str | None:
    """Locate the claude executable on PATH or in its local install dir."""
    found = shutil.which("claude")
    if found:
        return found
    for candidate in CLAUDE_FALLBACK_PATHS:
        if Path(candidate).is_file():
            return str(candidate)
    return None


def run_cli(command: list[str], input_text: str | None, timeout: float) -> str | None:
    """
    Run a CLI and return its stripped stdout.

    Returns None on a non-zero exit, empty output, timeout or missing binary.
    subprocess.run kills the child when the timeout expires.
    """
    try:
        result = subprocess.run(
            command,
            input=input_text,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        print(f"{command[0]} did not finish within {timeout}s", file=sys.stderr)
        return None
    except FileNotFoundError:
        return None

    if result.returncode != 0:
        print(f"{command[0]} exited with status {result.returncode}", file=sys.stderr)
        return None
    output = result.stdout.strip()
    return output or None


def looks_like_error(output: str, expected_marker: str | None = None) -> bool:
    """
    Heuristic for CLI output that is an error message rather than a report.

    Output mentioning the expected marker (e.g. 'REPORT') is never treated as
    an error.
    """
    lowered = output.lower()
    if expected_marker and expected_marker.lower() in lowered:
        return False
    return any(marker in lowered for marker in ERROR_MARKERS)


def format_with_llm(
    raw_data: str,
    prompt: str,
    fallback_prompt: str | None = None,
    timeout: float = LLM_TIMEOUT_SECONDS,
    expected_marker: str | None = None,
    check_errors: bool = False,
) -> str | None:
    """
    Rewrite raw_data with Claude, falling back to Gemini once.

    With check_errors, output that reads like a CLI error message (see
    looks_like_error) is treated as a failure.
    """

    def usable(result: str | None) -> bool:
        if not result:
            return False
        return not (check_errors and looks_like_error(result, expected_marker))

    claude = find_claude()
    if claude:
        print(f"Processing with Claude at {claude}...", file=sys.stderr)
        result = run_cli([claude, "-p", f"{prompt}\n\n{raw_data}"], None, timeout)
        if usable(result):
            return result
        print("Claude did not produce a usable response", file=sys.stderr)
    else:
        print("Claude CLI not found", file=sys.stderr)

    gemini = shutil.which("gemini")
    if not gemini:
        print("Gemini CLI not found either", file=sys.stderr)
        return None

    print("Trying Gemini as fallback...", file=sys.stderr)
    result = run_cli([gemini, "-p", fallback_prompt or prompt, "-y"], raw_data, timeout)
    if usable(result):
        return result
    return None
