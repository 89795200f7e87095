# pipex

`pipex` runs a chain of commands joined by pipes, the way a shell pipeline
with redirections does. The first command reads from a file, or from a
here-document typed on standard input. The last command writes to a file.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Usage

Read from a file and write to a file:

```
pipex infile "cmd1" "cmd2" ... "cmdN" outfile
```

This behaves like the shell line:

```
< infile cmd1 | cmd2 | ... | cmdN > outfile
```

Read a here-document from standard input up to a line that holds only
`LIMIT`, and append the output to a file:

```
pipex here_doc LIMIT "cmd1" ... "cmdN" outfile
```

This behaves like the shell line:

```
cmd1 << LIMIT | cmd2 | ... | cmdN >> outfile
```

The here-document also ends at the end of standard input. The limiter line
itself is not passed on.

### Behaviour

- Each command string is split on spaces; empty words are dropped.
- A command name is first looked up in the directories of `PATH`. If no
  match is found there, the name itself is used when it points at an
  executable file.
- When a command cannot be resolved, `pipex` prints a message on standard
  error: `<name>: command not found` for a name without a `/`, or
  `<name>: <reason>` for a path. That stage gets status 127; the other
  stages still run.
- If the input file cannot be opened, or the output file cannot be created,
  the error is printed on standard error and that stage gets status 1.
- In file mode an outfile that already exists and is writable is removed and
  created again. In here-document mode the output is appended to it.
- The exit status of `pipex` is the status of the last command in the chain.
  If that command was killed by a signal, the status is the signal number.
- With fewer than four arguments, `pipex` prints the usage text on standard
  output and exits with status 1.

### What it does not do

`pipex` is not a shell. It does no quoting, no globbing, no variable
expansion and no redirections other than the input file or here-document of
the first command and the output file of the last.

## Library use

The pieces can also be used from Python:

- `pipex.command.build_commands(count, argv)` turns an argument list
  (`argv[1]` the input file, then `count` command lines, then the output
  file) into `Command` objects with `argv`, `infile` and `outfile`.
  `pipex.command.split_words(text, separator)` does the word splitting.
- `pipex.paths.get_path(env)` lists the `PATH` directories,
  `pipex.paths.find_binary(directories, name)` searches them, and
  `pipex.paths.resolve_command(argv, env)` finds the executable for a
  command or raises `CommandNotFoundError`.
- `pipex.heredoc.read_heredoc(limiter, stream)` collects here-document input;
  `pipex.heredoc.read_line(stream)` reads one line.
- `pipex.pipeline.run_pipeline(commands, env, here_doc_limiter, stdin)` runs
  the chain and returns the final exit status. It raises `PipelineError` when
  a pipe cannot be created. `pipex.pipeline.exit_status(returncode)` maps a
  subprocess return code to a shell-style status.
- `pipex.cli.main(argv)` is the command-line entry point.