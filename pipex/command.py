"""Building the list of commands that make up a pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass
class Command:
    """One stage of a pipeline.

    Only the first stage reads from ``infile`` and only the last one writes
    to ``outfile``; the others talk through pipes.
    """

    argv: list[str] = field(default_factory=list)
    infile: str | None = None
    outfile: str | None = None


def split_words(text: str, separator: str) -> list[str]:
    """Split ``text`` on ``separator``, dropping empty words."""
    if not separator:
        raise ValueError("separator must not be empty")
    return [word for word in text.split(separator) if word]


def build_commands(count: int, argv: Sequence[str]) -> list[Command]:
    """Build ``count`` commands from an argument vector.

    ``argv[1]`` is the input file, ``argv[2]`` to ``argv[count + 1]`` are the
    command lines and ``argv[count + 2]`` is the output file.
    """
    if count < 1:
        raise ValueError("at least one command is required")
    if len(argv) < count + 3:
        raise ValueError(
            f"expected {count + 3} arguments for {count} commands, got {len(argv)}"
        )
    commands = []
    for position, line in enumerate(argv[2 : count + 2]):
        commands.append(
            Command(
                argv=split_words(line, " "),
                infile=argv[1] if position == 0 else None,
                outfile=argv[count + 2] if position == count - 1 else None,
            )
        )
    return commands