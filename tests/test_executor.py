import os

import pytest

from minishell.builtins import ShellExit
from minishell.executor import Executor
from minishell.parser import parse_input
from minishell.paths import get_paths
from minishell.state import ShellState, copy_env
from minishell.tree import Node, NodeType, command_node, subshell_node


@pytest.fixture
def state():
    return ShellState(envp=copy_env(os.environ), paths=get_paths())


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def run(state, line, **kwargs):
    return Executor(state, **kwargs).execute(parse_input(line))


def test_true_and_false_statuses(state):
    assert run(state, "true") == 0
    assert run(state, "false") == 1


@pytest.mark.parametrize(
    "line, expected",
    [
        ("true && true", 0),
        ("true && false", 1),
        ("false && true", 1),
        ("false || true", 0),
        ("false || false", 1),
        ("true || false", 0),
    ],
)
def test_logical_operators(state, line, expected):
    assert run(state, line) == expected


def test_and_short_circuits(state, workdir):
    assert run(state, "false && echo hi > out.txt") == 1
    assert not (workdir / "out.txt").exists()


def test_or_short_circuits(state, workdir):
    assert run(state, "true || echo hi > out.txt") == 0
    assert not (workdir / "out.txt").exists()


def test_builtin_echo_redirected(state, workdir):
    assert run(state, "echo hi > out.txt") == 0
    assert (workdir / "out.txt").read_text() == "hi\n"


def test_append_redirection(state, workdir):
    assert run(state, "echo one > out.txt") == 0
    assert run(state, "echo two >> out.txt") == 0
    assert (workdir / "out.txt").read_text() == "one\ntwo\n"


def test_pipeline_passes_output(state, workdir):
    assert run(state, "echo hello | cat > out.txt") == 0
    assert (workdir / "out.txt").read_text() == "hello\n"


def test_pipeline_status_is_last_stage(state):
    assert run(state, "true | false") == 1
    assert run(state, "false | true") == 0


def test_pipeline_with_logical_stage(state, workdir):
    assert run(state, "(true && echo x) | cat > out.txt") == 0
    assert (workdir / "out.txt").read_text() == "x\n"


def test_executor_stdout_descriptor(state, workdir):
    target = workdir / "captured.txt"
    fd = os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    try:
        assert run(state, "echo abc | cat", stdout=fd) == 0
    finally:
        os.close(fd)
    assert target.read_text() == "abc\n"


def test_command_not_found(state, capsys):
    assert run(state, "nosuchcommandxyz") == 1
    assert "nosuchcommandxyz: command not found" in capsys.readouterr().err


def test_missing_input_file(state, workdir):
    assert run(state, "cat < missing.txt") == 1


def test_heredoc_feeds_command(state, workdir):
    lines = iter(["a", "b", "EOF"])
    status = run(state, "cat << EOF > out.txt", read_line=lambda prompt: next(lines))
    assert status == 0
    assert (workdir / "out.txt").read_text() == "a\nb\n"


def test_export_changes_state(state):
    assert run(state, "export FOO") == 0
    assert "FOO" in state.envp


def test_subshell_keeps_environment(state):
    executor = Executor(state)
    status = executor.run_subshell(subshell_node(command_node(["export", "FOO"])))
    assert status == 0
    assert "FOO" not in state.envp


def test_subshell_restores_directory(state, workdir):
    inner = workdir / "inner"
    inner.mkdir()
    executor = Executor(state)
    assert executor.execute(subshell_node(command_node(["cd", str(inner)]))) == 0
    assert os.getcwd() == str(workdir)


def test_subshell_exit_becomes_status(state):
    executor = Executor(state)
    assert executor.run_subshell(subshell_node(command_node(["exit"]))) == 1


def test_empty_subshell_fails(state):
    assert Executor(state).run_subshell(subshell_node(None)) == 1


def test_exit_raises(state):
    with pytest.raises(ShellExit) as info:
        run(state, "exit")
    assert info.value.status == 1


def test_unknown_node_type_fails(state):
    assert Executor(state).execute(Node(NodeType.REDIR_IN, file="x")) == 1


def test_run_pipeline_without_children(state):
    assert Executor(state).run_pipeline([]) == 1