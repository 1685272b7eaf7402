import pytest

from minishell.lexer import Token, TokenType, get_token_type, tokenize


def kinds(command):
    return [token.type for token in tokenize(command)]


def contents(command):
    return [token.content for token in tokenize(command)]


def test_token_type_values_fixed_by_header():
    assert tokenize("ls")[0].type == 1
    assert tokenize("|")[0].type == 12
    assert tokenize("><")[0].type == 26


@pytest.mark.parametrize(
    "c, expected",
    [
        ("a", TokenType.WORD),
        ("'", TokenType.QUOTE),
        (">", TokenType.REDIR),
        ("|", TokenType.OPERATOR),
        ("(", TokenType.PARENTHESIS),
        ("$", TokenType.SPECIAL_CHARACTER),
        (" ", TokenType.DEFAULT),
        ("/", TokenType.DEFAULT),
    ],
)
def test_get_token_type(c, expected):
    assert get_token_type(c) is expected


def test_empty_input():
    assert tokenize("") == []
    assert tokenize("   \t ") == []


def test_pipeline():
    assert kinds("ls -la | grep x") == [
        TokenType.WORD,
        TokenType.WORD,
        TokenType.PIPE,
        TokenType.WORD,
        TokenType.WORD,
    ]
    assert contents("ls -la | grep x") == ["ls", "-la", "|", "grep", "x"]


def test_redirections():
    assert kinds("cat << EOF >> out < in > res") == [
        TokenType.WORD,
        TokenType.HEREDOC,
        TokenType.WORD,
        TokenType.REDIR_APPEND,
        TokenType.WORD,
        TokenType.REDIR_IN,
        TokenType.WORD,
        TokenType.REDIR_OUT,
        TokenType.WORD,
    ]


def test_mixed_double_redirection_is_unknown():
    assert tokenize("><") == [Token(TokenType.UNKNOWN, "><")]


def test_logical_operators():
    assert kinds("a && b || c") == [
        TokenType.WORD,
        TokenType.AND,
        TokenType.WORD,
        TokenType.OR,
        TokenType.WORD,
    ]


def test_operator_pairs_and_singles():
    assert tokenize(";") == [Token(TokenType.SEMICOLON, ";")]
    assert tokenize("|;") == [Token(TokenType.UNKNOWN, "|;")]
    assert tokenize("&") == [Token(TokenType.DEFAULT, "&")]


def test_parentheses():
    assert kinds("(ls)") == [
        TokenType.PAREN_OPEN,
        TokenType.WORD,
        TokenType.PAREN_CLOSE,
    ]


def test_quotes_are_single_tokens():
    assert kinds("'x' \"y\"") == [
        TokenType.SINGLE_QUOTE,
        TokenType.WORD,
        TokenType.SINGLE_QUOTE,
        TokenType.DOUBLE_QUOTE,
        TokenType.WORD,
        TokenType.DOUBLE_QUOTE,
    ]


def test_dollar_variants():
    assert tokenize("$HOME") == [
        Token(TokenType.ENV_VAR, "$"),
        Token(TokenType.WORD, "HOME"),
    ]
    assert tokenize("$?") == [Token(TokenType.EXIT_STATUS, "$")]
    assert tokenize("$ ") == [Token(TokenType.UNKNOWN, "$")]


def test_other_specials():
    assert kinds("\\ # \n") == [
        TokenType.ESCAPE,
        TokenType.COMMENT,
        TokenType.NEWLINE,
    ]


def test_unclassified_characters_are_skipped():
    assert contents("ls /tmp") == ["ls", "tmp"]


def test_words_survive_round_trip():
    command = "echo hello world-1 a.b c_d"
    assert "".join(contents(command)) == command.replace(" ", "")


def test_every_token_has_content():
    for token in tokenize("cat < a | (b && c) || d >> e"):
        assert token.content