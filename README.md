# minishell

A small interactive shell. It reads a line, splits it into tokens, checks the
syntax, builds a command tree and runs it.

## Features

- Simple commands, looked up in the directories listed in `PATH`
- Pipelines: `ls | grep py | wc -l`. The status of a pipeline is the status
  of its last stage.
- Logical operators: `make && echo ok`, `false || echo fallback`. Their status
  is 0 or 1.
- Parenthesised groups run as a subshell: `(cd build && pwd)`. Changes to the
  environment and to the working directory made inside the group do not
  outlive it.
- Redirections: `<`, `>`, `>>` and here-documents with `<<`. A here-document
  reads lines at a `> ` prompt until a line equal to the delimiter, or end of
  input.
- Builtins: `echo` (with `-n`), `cd`, `pwd`, `env`, `export`, `unset`, `exit`

The prompt shows the last component of the current directory, in bold cyan,
followed by a space.

Syntax errors are reported and the line is not run. The checks cover
unmatched quotes, unmatched or empty parentheses, a redirection not followed
by a word, and a `|`, `&&` or `||` without a word or a parenthesis on each
side. An error is printed as, for example:

```
Error: Unmatched quotes
Syntax error in command
```

A command that is found in no `PATH` directory is reported as
`minishell: NAME: command not found`.

## Installation

```
pip install .
```

## Usage

Start the shell:

```
minishell
```

Type commands at the prompt. Press Ctrl-D on an empty line to leave, with
status 0. The `exit` builtin leaves the shell with status 1.

```
project echo hello > greeting.txt
project cat < greeting.txt | wc -c
6
project false || echo recovered
recovered
```

### Builtins

- `echo [-n] WORD...` writes its words separated by spaces; `-n` as the first
  word leaves out the final newline.
- `cd DIR` changes the working directory.
- `pwd` writes the working directory.
- `env` writes every variable that has a value as `NAME=value`.
- `export` with no argument lists the environment, sorted, as
  `declare -x NAME=value`. With an argument it adds that entry, or replaces
  the entry of the same name when the argument holds a `=`.
- `unset NAME` removes every entry called `NAME`.
- `exit` leaves the shell.

`export` and `unset` look only at their first argument.

## What the shell does not do

The lexer is deliberately simple, and several things a full shell offers are
absent:

- A word is made only of letters, digits, `_`, `-` and `.`. Every other
  character that is not an operator, a redirection, a parenthesis or a quote
  is dropped, so `/`, `=`, `*` and `~` never reach a command: `cd /tmp` runs
  as `cd tmp`, and `export A=1` adds a bare `A`.
- Quotes are only checked for balance; they do not group words, and the text
  between them is split like any other.
- There is no variable expansion: `$HOME` gives the word `HOME`, and `$?` is
  not replaced by the last status.
- `;`, `\` and `#` have no effect on how a line runs.
- There is no job control and no signal handling.

An empty line prints `Failed to create AST` and runs nothing.

## Using it from Python

The parts of the shell can be used on their own:

```python
from minishell.parser import parse_input
from minishell.tree import format_ast

tree = parse_input("ls -l | grep py && echo done")
print(format_ast(tree, 0))
```

prints

```
AND &&
  PIPE |
    COMMAND: ls -l
    COMMAND: grep py
  COMMAND: echo done
```

- `minishell.lexer.tokenize` turns a line into a list of `Token`s, and
  `minishell.parser.format_tokens` renders them.
- `minishell.syntax.check_syntax` raises `ShellSyntaxError` when the tokens
  are not well formed.
- `minishell.parser.parse_input` tokenizes, checks and parses a line; it
  raises `ParseError` when no tree can be built.
- `minishell.executor.Executor` runs a parsed tree against a
  `minishell.state.ShellState` and returns the exit status.
- `minishell.cli.run_line` parses and runs one line with a given state and
  executor.

## Running the tests

```
pip install .[test]
pytest
```