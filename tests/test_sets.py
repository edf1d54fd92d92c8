from pl0c.scanner import SYMBOLS
from pl0c.sets import FIRST, FOLLOW, TOKEN_FOLLOW


def test_every_token_type_has_a_follow_entry():
    assert set(SYMBOLS) <= set(TOKEN_FOLLOW)


def test_tables_are_frozen():
    for table in (FIRST, FOLLOW, TOKEN_FOLLOW):
        for value in table.values():
            assert isinstance(value, frozenset)


def test_first_sets():
    assert FIRST['statement'] == {'IDENTIFIER', 'IF', 'WHILE', 'CALL', 'READ', 'WRITE', 'BEGIN'}
    assert FIRST['block'] == {'CONST', 'VAR', 'PROCEDURE', 'BEGIN'}
    assert FIRST['condition'] == FIRST['exp'] | {'ODD'}


def test_identifier_and_integer_keyed_by_tag():
    assert 'IDENTIFIER' in TOKEN_FOLLOW
    assert 'INTCONST' in TOKEN_FOLLOW
    assert 'ASSIGNMENT' in TOKEN_FOLLOW['IDENTIFIER']
    assert 'COMMA' in TOKEN_FOLLOW['INTCONST']


def test_statement_starts_can_follow_a_semicolon():
    # A missing ';' before a statement must not discard the statement's first token
    assert FIRST['statement'] <= TOKEN_FOLLOW['SEMICOLON']


def test_follow_chains():
    assert FOLLOW['exp'] <= FOLLOW['term'] <= FOLLOW['factor']
    assert FIRST['mop'] <= FOLLOW['factor']
    assert FOLLOW['statement'] <= FOLLOW['body']
