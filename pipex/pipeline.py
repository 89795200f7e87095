"""Running a chain of commands connected by pipes."""

from __future__ import annotations

import contextlib
import os
import subprocess
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TextIO

from .command import Command
from .heredoc import read_heredoc
from .paths import CommandNotFoundError, resolve_command

FAILURE_EXIT_CODE = 1


class PipelineError(Exception):
    """Raised when the pipeline itself cannot be set up."""

    def __init__(self, message: str, exit_code: int = FAILURE_EXIT_CODE) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = exit_code


class _StageError(Exception):
    """A single stage could not be started; the others still run."""


@dataclass
class _Stage:
    process: subprocess.Popen | None = None
    status: int = 0


def exit_status(returncode: int) -> int:
    """Turn a subprocess return code into a shell-style status.

    A process killed by a signal reports the signal number.
    """
    return -returncode if returncode < 0 else returncode


def _report(message: str) -> None:
    sys.stderr.write(message + "\n")
    sys.stderr.flush()


def _open_input(path: str) -> int:
    try:
        return os.open(path, os.O_RDONLY)
    except OSError as error:
        raise _StageError(f"{path}: {error.strerror}") from error


def _open_output(path: str, append: bool) -> int:
    if append:
        flags = os.O_WRONLY | os.O_CREAT | os.O_APPEND
    else:
        flags = os.O_WRONLY | os.O_CREAT
        if path and os.access(path, os.W_OK):
            with contextlib.suppress(OSError):
                os.unlink(path)
    try:
        return os.open(path, flags, 0o644)
    except OSError as error:
        raise _StageError(f"{path}: {error.strerror}") from error


def _start_stage(
    command: Command,
    input_fd: int | None,
    output_fd: int | None,
    environment: Mapping[str, str],
    here_doc: bool,
    first: bool,
) -> _Stage:
    opened: list[int] = []
    try:
        stdin_target: int | None = input_fd
        stdout_target: int | None = output_fd
        if command.infile is not None:
            if here_doc and first:
                stdin_target = subprocess.PIPE
            else:
                stdin_target = _open_input(command.infile)
                opened.append(stdin_target)
        if command.outfile is not None:
            stdout_target = _open_output(command.outfile, append=here_doc)
            opened.append(stdout_target)
        binary = resolve_command(command.argv, environment)
        process = subprocess.Popen(
            command.argv,
            executable=binary,
            stdin=stdin_target,
            stdout=stdout_target,
            env=dict(environment),
        )
    except CommandNotFoundError as error:
        _report(error.message)
        return _Stage(status=error.exit_code)
    except _StageError as error:
        _report(str(error))
        return _Stage(status=FAILURE_EXIT_CODE)
    except OSError as error:
        _report(f"{command.argv[0]}: {error.strerror}")
        return _Stage(status=FAILURE_EXIT_CODE)
    finally:
        for fd in opened:
            os.close(fd)
    return _Stage(process=process)


def _feed(stage: _Stage, text: str) -> None:
    process = stage.process
    if process is None or process.stdin is None:
        return
    try:
        process.stdin.write(text.encode("utf-8", "surrogateescape"))
    except BrokenPipeError:
        pass
    finally:
        with contextlib.suppress(BrokenPipeError):
            process.stdin.close()


def _wait_all(stages: Sequence[_Stage]) -> int:
    status = 0
    for stage in stages:
        if stage.process is None:
            status = stage.status
            continue
        if stage.process.stdin is not None and not stage.process.stdin.closed:
            with contextlib.suppress(BrokenPipeError):
                stage.process.stdin.close()
        status = exit_status(stage.process.wait())
    return status


def run_pipeline(
    commands: Sequence[Command],
    env: Mapping[str, str] | None = None,
    here_doc_limiter: str | None = None,
    stdin: TextIO | None = None,
) -> int:
    """Run ``commands`` connected by pipes and return the last one's status.

    With ``here_doc_limiter`` set, the first command reads the lines of
    ``stdin`` up to the limiter and the output file is appended to rather
    than replaced. A stage that cannot start is reported on standard error
    and the rest of the pipeline runs on.
    """
    commands = list(commands)
    if not commands:
        raise ValueError("a pipeline needs at least one command")
    environment = dict(os.environ if env is None else env)
    here_doc = here_doc_limiter is not None
    here_doc_text = None
    if here_doc and commands[0].infile is not None:
        here_doc_text = read_heredoc(here_doc_limiter, stdin)

    stages: list[_Stage] = []
    pending_read: int | None = None
    last = len(commands) - 1
    try:
        for index, command in enumerate(commands):
            input_fd, pending_read = pending_read, None
            output_fd = None
            try:
                if index < last:
                    try:
                        pending_read, output_fd = os.pipe()
                    except OSError as error:
                        raise PipelineError(f"pipe: {error.strerror}") from error
                stages.append(
                    _start_stage(
                        command,
                        input_fd,
                        output_fd,
                        environment,
                        here_doc,
                        first=index == 0,
                    )
                )
            finally:
                for fd in (input_fd, output_fd):
                    if fd is not None:
                        os.close(fd)
    except BaseException:
        if pending_read is not None:
            os.close(pending_read)
        _wait_all(stages)
        raise

    if here_doc_text is not None:
        _feed(stages[0], here_doc_text)
    return _wait_all(stages)