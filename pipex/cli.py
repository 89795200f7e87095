"""Command-line entry point."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence

from .command import build_commands
from .pipeline import PipelineError, run_pipeline

HERE_DOC = "here_doc"
USAGE = (
    "please use the format:\n"
    './pipex infile "cmd1" ... "cmdx" outfile\n'
    './pipex here_doc LIMIT "cmd1" ... "cmdx" outfile\n'
)


def main(argv: Sequence[str] | None = None) -> int:
    """Run ``infile cmd1 ... cmdN outfile`` or ``here_doc LIMIT cmd1 ... outfile``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 4:
        sys.stdout.write(USAGE)
        sys.stdout.flush()
        return 1
    if args[0] == HERE_DOC:
        limiter: str | None = args[1]
        commands = build_commands(len(args) - 3, args)
    else:
        limiter = None
        commands = build_commands(len(args) - 2, ["pipex", *args])
    try:
        return run_pipeline(commands, os.environ, limiter, sys.stdin)
    except PipelineError as error:
        sys.stderr.write(error.message + "\n")
        return error.exit_code


if __name__ == "__main__":
    sys.exit(main())