"""Running external commands (editor, grep, selector, plugins)."""

from __future__ import annotations

import logging
import os
import re
import shlex
import subprocess
import sys
from typing import Mapping, Protocol, Sequence

logger = logging.getLogger(__name__)

_VAR_RE = re.compile(r"\$\{([^}]*)\}|\$([A-Za-z0-9_]+)")


class CommandError(RuntimeError):
    """Raised when an external command fails to launch or exits non-zero."""


class CommandRunner(Protocol):
    """Callable running ``argv`` and returning captured stdout (or ``""``)."""

    def __call__(
        self,
        argv: Sequence[str],
        *,
        input: str | None = None,
        capture: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> str:  # pragma: no cover - Protocol
        """Run the command to completion."""


class SubprocessRunner:
    """Run commands with ``subprocess``, inheriting the terminal by default.

    Standard input is only replaced when ``input`` is given and standard output
    is only captured when ``capture`` is set, so editors and pagers keep
    talking to the user's terminal.
    """

    def __call__(
        self,
        argv: Sequence[str],
        *,
        input: str | None = None,
        capture: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> str:
        args = list(argv)
        logger.debug("Running %s", args)
        merged_env = None
        if env is not None:
            merged_env = {**os.environ, **env}
        try:
            process = subprocess.run(
                args,
                input=input,
                stdout=subprocess.PIPE if capture else None,
                text=True,
                env=merged_env,
                check=False,
            )
        except OSError as exc:
            raise CommandError(f"Failed to run {args[0]}: {exc}") from exc
        if process.returncode != 0:
            raise CommandError(
                f"{args[0]} {' '.join(args[1:])} failed (exit {process.returncode})"
            )
        return process.stdout or ""


def shell_argv(command: str) -> list[str]:
    """Wrap ``command`` so the platform shell interprets it."""

    if sys.platform == "win32":
        return ["cmd", "/c", command]
    return ["sh", "-c", command]


def quote_file(path: str) -> str:
    if sys.platform == "win32":
        return '"' + path.replace('"', '""') + '"'
    return shlex.quote(path)


def expand_command(
    template: str,
    *,
    files: Sequence[str] = (),
    pattern: str = "",
    memo_dir: str = "",
    env: Mapping[str, str] | None = None,
) -> str:
    """Substitute ``${FILES}``, ``${PATTERN}`` and ``${DIR}`` in ``template``.

    Any other variable is looked up in the environment. When the template
    references no variable at all, the quoted files are appended to it.
    """

    environ = os.environ if env is None else env
    quoted = " ".join(quote_file(str(f)) for f in files)
    has_var = False

    def _lookup(match: re.Match[str]) -> str:
        nonlocal has_var
        has_var = True
        name = match.group(1) if match.group(1) is not None else match.group(2)
        if name == "FILES":
            return quoted
        if name == "PATTERN":
            return pattern
        if name == "DIR":
            return memo_dir
        return environ.get(name, "")

    command = _VAR_RE.sub(_lookup, template)
    if not has_var and quoted:
        command = f"{command} {quoted}"
    return command
