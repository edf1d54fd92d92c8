from pl0c.errors import Diagnostics, LEXICAL_ERROR
from pl0c.scanner import scanner, describe, Token


def types(tokens):
    return [t.type for t in tokens]


def test_keywords_symbols_and_literals():
    tokens = scanner("program p; var x; begin x := 10 end")
    assert types(tokens) == [
        'PROGRAM', 'IDENTIFIER', 'SEMICOLON', 'VAR', 'IDENTIFIER', 'SEMICOLON',
        'BEGIN', 'IDENTIFIER', 'ASSIGNMENT', 'INTCONST', 'END', 'ENDOFINPUT']
    assert tokens[1].value == 'p'
    assert tokens[9].value == 10


def test_two_character_operators():
    tokens = scanner("<= <> >= < > =")
    assert types(tokens)[:-1] == ['LESSEQUAL', 'NOTEQUAL', 'GREATEREQUAL', 'LESS', 'GREATER', 'EQUALITY']


def test_keywords_are_case_sensitive():
    tokens = scanner("Begin begin")
    assert types(tokens)[:-1] == ['IDENTIFIER', 'BEGIN']


def test_line_and_column_positions():
    tokens = scanner("program p;\n  var x;")
    var = tokens[3]
    assert (var.type, var.line, var.column) == ('VAR', 2, 3)
    assert (tokens[4].line, tokens[4].column) == (2, 7)


def test_non_ascii_character_is_reported_and_scan_resumes():
    diagnostics = Diagnostics()
    tokens = scanner("x := 1;\ny := 中 + 2", diagnostics)
    errors = [t for t in tokens if t.type == 'LEXICALERROR']
    assert len(errors) == 1
    assert (errors[0].line, errors[0].column) == (2, 6)
    assert 'not an ASCII character' in errors[0].value
    # Scanning carried on after the bad character
    assert types(tokens)[-3:] == ['ADD', 'INTCONST', 'ENDOFINPUT']
    assert [d.kind for d in diagnostics] == [LEXICAL_ERROR]


def test_malformed_literals_become_error_tokens():
    diagnostics = Diagnostics()
    tokens = scanner("12ab a_b : $", diagnostics)
    assert types(tokens) == ['LEXICALERROR'] * 4 + ['ENDOFINPUT']
    messages = [d.message for d in diagnostics]
    assert "'12ab' is not a valid integer literal" in messages[0]
    assert "'_'" in messages[1]
    assert "did you mean ':='?" in messages[2]
    assert "'$' is an unexpected character" in messages[3]


def test_end_marker_always_present():
    assert types(scanner("")) == ['ENDOFINPUT']


def test_describe_uses_source_text():
    assert describe(Token('IDENTIFIER', 'abc', 1, 1)) == 'abc'
    assert describe(Token('SEMICOLON', ';', 1, 1)) == ';'
    assert describe(Token('ENDOFINPUT', None, 1, 1)) == 'end of input'
