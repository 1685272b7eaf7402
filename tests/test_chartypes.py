import pytest

from minishell.chartypes import (
    find_word_len,
    is_command_char,
    is_operator,
    is_parenthesis,
    is_quote,
    is_redirection,
    is_space,
    is_special_character,
)


@pytest.mark.parametrize("c", ["\t", "\n", "\v", "\f", " "])
def test_is_space_accepts_blanks(c):
    assert is_space(c)


@pytest.mark.parametrize("c", ["\r", "a", "", "_"])
def test_is_space_rejects_others(c):
    assert not is_space(c)


@pytest.mark.parametrize("c", ["'", '"'])
def test_is_quote(c):
    assert is_quote(c)
    assert not is_command_char(c)


def test_is_quote_rejects_backtick():
    assert not is_quote("`")


@pytest.mark.parametrize("c", ["<", ">"])
def test_is_redirection(c):
    assert is_redirection(c)
    assert not is_operator(c)


@pytest.mark.parametrize("c", ["&", "|", ";"])
def test_is_operator(c):
    assert is_operator(c)
    assert not is_redirection(c)


@pytest.mark.parametrize("c", ["a", "z", "A", "Z", "0", "9", "_", "-", "."])
def test_is_command_char_accepts(c):
    assert is_command_char(c)


@pytest.mark.parametrize("c", ["/", "=", "?", "*", " ", "", "$", "é"])
def test_is_command_char_rejects(c):
    assert not is_command_char(c)


@pytest.mark.parametrize("c", ["(", ")"])
def test_is_parenthesis(c):
    assert is_parenthesis(c)
    assert not is_parenthesis("[")


@pytest.mark.parametrize("c", ["$", "\\", "#", "\n", "\0"])
def test_is_special_character(c):
    assert is_special_character(c)


def test_is_special_character_rejects_other():
    assert not is_special_character("?")
    assert not is_special_character("")


def test_newline_is_both_space_and_special():
    assert is_space("\n") and is_special_character("\n")


def test_find_word_len_stops_at_space():
    assert find_word_len("echo hello") == len("echo")


def test_find_word_len_stops_at_slash():
    assert find_word_len("usr/bin") == len("usr")


def test_find_word_len_whole_word():
    word = "file-name_1.txt"
    assert find_word_len(word) == len(word)


def test_find_word_len_empty_and_leading_separator():
    assert find_word_len("") == 0
    assert find_word_len("|ls") == 0