from minirepl.errors import ErrorLog
from minirepl.lexer import tokenize
from minirepl.tokens import TokenKind


def kinds(source):
    return [t.kind for t in tokenize(source)]


def test_declaration_tokens():
    tokens = tokenize('let x = 10;')
    assert [t.kind for t in tokens] == [
        TokenKind.LET, TokenKind.IDENTIFIER, TokenKind.EQUAL,
        TokenKind.NUMBER, TokenKind.SEMICOLON, TokenKind.EOF,
    ]
    assert tokens[1].literal == 'x'
    assert tokens[3].literal == 10
    assert tokens[-1].lexeme == ''


def test_two_character_operators():
    assert kinds('== != <= >= .. = ! < > .') == [
        TokenKind.EQUAL_EQUAL, TokenKind.NOT_EQUAL, TokenKind.LESS_EQUAL,
        TokenKind.GREATER_EQUAL, TokenKind.DOUBLE_DOT, TokenKind.EQUAL,
        TokenKind.BANG, TokenKind.LESS, TokenKind.GREATER, TokenKind.DOT,
        TokenKind.EOF,
    ]


def test_double_star_is_caret():
    tokens = tokenize('2 ** 3 ^ 4 * 5')
    assert [t.kind for t in tokens[:-1]] == [
        TokenKind.NUMBER, TokenKind.CARET, TokenKind.NUMBER,
        TokenKind.CARET, TokenKind.NUMBER, TokenKind.ASTERISK, TokenKind.NUMBER,
    ]
    assert tokens[1].lexeme == '**'


def test_range_is_not_a_fraction():
    assert kinds('0..3') == [TokenKind.NUMBER, TokenKind.DOUBLE_DOT, TokenKind.NUMBER, TokenKind.EOF]


def test_keywords_and_identifiers():
    tokens = tokenize('let if then else true false and or for in begin end while print letter')
    assert [t.kind for t in tokens[:-1]] == [
        TokenKind.LET, TokenKind.IF, TokenKind.THEN, TokenKind.ELSE,
        TokenKind.TRUE, TokenKind.FALSE, TokenKind.AND, TokenKind.OR,
        TokenKind.FOR, TokenKind.IN, TokenKind.BEGIN, TokenKind.END,
        TokenKind.WHILE, TokenKind.PRINT, TokenKind.IDENTIFIER,
    ]
    assert tokens[-2].literal == 'letter'
    # keywords are case-sensitive
    assert kinds('Print')[0] == TokenKind.IDENTIFIER


def test_underscores_in_numbers():
    tokens = tokenize('1_000 42')
    assert tokens[0].literal == 1000
    assert tokens[0].lexeme == '1_000'
    assert tokens[1].literal == 42


def test_leading_underscore_starts_a_number():
    log = ErrorLog()
    tokens = tokenize('_x', log)
    assert [t.kind for t in tokens] == [TokenKind.IDENTIFIER, TokenKind.EOF]
    assert log.errors == [(1, "at '_'", 'Invalid number literal.')]


def test_number_literal_width_is_limited():
    log = ErrorLog()
    tokens = tokenize('print ' + '9' * 5000 + ';', log)
    assert [t.kind for t in tokens] == [TokenKind.PRINT, TokenKind.SEMICOLON, TokenKind.EOF]
    assert [e[2] for e in log.errors] == ['Invalid number literal.']

    widest = tokenize('9' * 4300)[0]
    assert widest.literal == 10 ** 4300 - 1


def test_string_literal():
    tokens = tokenize('"hello world"')
    assert tokens[0].kind == TokenKind.STRING
    assert tokens[0].literal == 'hello world'
    assert tokens[0].lexeme == '"hello world"'


def test_empty_string_literal():
    tokens = tokenize('""')
    assert tokens[0].kind == TokenKind.STRING
    assert tokens[0].literal == ''


def test_multiline_string_counts_lines():
    tokens = tokenize('"a\nb" x')
    assert tokens[0].literal == 'a\nb'
    assert tokens[0].line == 1
    assert tokens[1].line == 2


def test_unterminated_string_reported_at_start_line():
    log = ErrorLog()
    tokens = tokenize('print 1;\nprint "abc\n\n', log)
    assert log.errors == [(2, 'at end', 'Unterminated string.')]
    assert [t.kind for t in tokens] == [
        TokenKind.PRINT, TokenKind.NUMBER, TokenKind.SEMICOLON,
        TokenKind.PRINT, TokenKind.EOF,
    ]


def test_comments_and_line_numbers():
    tokens = tokenize('let a = 1; // a comment\n// another\nprint a;')
    assert [t.kind for t in tokens] == [
        TokenKind.LET, TokenKind.IDENTIFIER, TokenKind.EQUAL, TokenKind.NUMBER,
        TokenKind.SEMICOLON, TokenKind.PRINT, TokenKind.IDENTIFIER,
        TokenKind.SEMICOLON, TokenKind.EOF,
    ]
    assert tokens[5].line == 3


def test_comment_at_end_of_input():
    assert kinds('print 1; // no newline') == [
        TokenKind.PRINT, TokenKind.NUMBER, TokenKind.SEMICOLON, TokenKind.EOF,
    ]


def test_unexpected_character_does_not_stop_scan():
    log = ErrorLog()
    tokens = tokenize('let @ x;\n#', log)
    assert [t.kind for t in tokens] == [
        TokenKind.LET, TokenKind.IDENTIFIER, TokenKind.SEMICOLON, TokenKind.EOF,
    ]
    assert log.errors == [
        (1, "at '@'", 'Unexpected character.'),
        (2, "at '#'", 'Unexpected character.'),
    ]


def test_empty_source_has_only_eof():
    tokens = tokenize('')
    assert len(tokens) == 1
    assert tokens[0].kind == TokenKind.EOF
    assert tokens[0].line == 1
