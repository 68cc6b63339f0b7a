# osascript.py - run AppleScript or JavaScript (JXA) through /usr/bin/osascript
from __future__ import annotations

import enum
import logging
import os
from typing import List, Optional, Sequence

from external_runner import run_captured

__all__ = (
    "Language",
    "OSAScriptError",
    "CommandFailedError",
    "ScriptError",
    "OSAScript",
    "run",
)

logger = logging.getLogger(__name__)

DEFAULT_OSASCRIPT_PATH = "/usr/bin/osascript"
OSASCRIPT_PATH_ENV = "OSASCRIPT_PATH"


class Language(enum.Enum):
    APPLESCRIPT = "AppleScript"
    JAVASCRIPT = "JavaScript"

    @property
    def parameter(self) -> str:
        """Value passed to osascript's -l flag."""
        return self.value

    @classmethod
    def parse(cls, text: str) -> "Language":
        key = text.strip().lower()
        for language, aliases in _LANGUAGE_ALIASES.items():
            if key in aliases:
                return language
        raise ValueError(f"unknown language: {text!r} (expected AppleScript or JavaScript)")


_LANGUAGE_ALIASES = {
    Language.APPLESCRIPT: ("applescript", "as"),
    Language.JAVASCRIPT: ("javascript", "js", "jxa"),
}


class OSAScriptError(Exception):
    """Base class for osascript failures. Raised bare when the cause is unknown."""

    def __init__(self, message: str = "something went wrong"):
        super().__init__(message)
        self.message = message


class CommandFailedError(OSAScriptError):
    """The interpreter binary could not be run; carries its exit code.
    detail is the launch failure reason, e.g. "...: command not found"."""

    def __init__(self, status_code: int, detail: str = ""):
        super().__init__(f"command exit with code: {status_code}")
        self.status_code = status_code
        self.detail = detail


class ScriptError(OSAScriptError):
    """The interpreter ran and failed. message is its stderr text, or a
    synthesized description when it wrote nothing there. The synthesized form is
    "<binary> invocation failed: exit:<status>" for a non-zero exit and
    "<binary> invocation failed: signal:<signum>" when the child was killed."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = returncode


def default_osascript_path() -> str:
    return os.environ.get(OSASCRIPT_PATH_ENV) or DEFAULT_OSASCRIPT_PATH


class OSAScript:
    def __init__(self, osascript_path: Optional[str] = None):
        self.osascript_path = osascript_path or default_osascript_path()

    def __repr__(self) -> str:
        return f"OSAScript({self.osascript_path!r})"

    @property
    def name(self) -> str:
        return os.path.basename(self.osascript_path)

    def build_command(
        self,
        script: str,
        arguments: Sequence[str] = (),
        language: Language = Language.APPLESCRIPT,
    ) -> List[str]:
        argv = [self.osascript_path, "-l", language.parameter, "-e", script]
        if arguments:
            argv.extend(arguments)
        return argv

    def run(
        self,
        script: str,
        arguments: Sequence[str] = (),
        language: Language = Language.APPLESCRIPT,
    ) -> str:
        """Run a script and return its standard output.

        Args:
            script: The script source text.
            arguments: Passed as a list of strings to the script's `run` handler.
            language: Language of the script.

        Raises:
            ScriptError: osascript exited non-zero or was killed.
            CommandFailedError: osascript could not be launched.
            OSAScriptError: spawning failed for any other reason.
        """
        argv = self.build_command(script, arguments, language)
        logger.debug(f"run: language={language.parameter} arguments={list(arguments)}")

        try:
            result = run_captured(argv)
        except OSError as e:
            logger.debug(f"spawn of {self.osascript_path} failed: {e}")
            raise OSAScriptError() from e

        if not result.launched:
            logger.debug(result.stderr.rstrip())
            raise CommandFailedError(result.returncode, result.stderr.strip())

        if result.ok:
            return result.stdout

        if result.stderr.strip():
            raise ScriptError(result.stderr, result.returncode)

        if result.signal is not None:
            problem = f"signal:{result.signal}"
        else:
            problem = f"exit:{result.returncode}"
        raise ScriptError(f"{self.name} invocation failed: {problem}", result.returncode)


def run(
    script: str,
    arguments: Sequence[str] = (),
    language: Language = Language.APPLESCRIPT,
) -> str:
    return OSAScript().run(script, arguments, language)
