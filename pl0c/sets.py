# Error resync sets.
# This file defines the synchronisation sets needed when handling errors:
#   FIRST        - tokens that can begin each non-terminal
#   FOLLOW       - tokens that can come right after each non-terminal
#   TOKEN_FOLLOW - tokens that can come right after each terminal
# Sets hold token types only (an identifier is 'IDENTIFIER' whatever its text).
# Built once at import time and never modified afterwards.


def union(*sets):
    result = set()
    for s in sets:
        result |= s
    return frozenset(result)


# First sets
FIRST = {}
FIRST['program'] = frozenset({'PROGRAM'})
FIRST['const_decl'] = frozenset({'CONST'})
FIRST['var_decl'] = frozenset({'VAR'})
FIRST['proc'] = frozenset({'PROCEDURE'})
FIRST['body'] = frozenset({'BEGIN'})
FIRST['block'] = union(FIRST['const_decl'], FIRST['var_decl'], FIRST['proc'], FIRST['body'])
FIRST['const'] = frozenset({'IDENTIFIER'})
FIRST['statement'] = union({'IDENTIFIER', 'IF', 'WHILE', 'CALL', 'READ', 'WRITE'}, FIRST['body'])
FIRST['factor'] = frozenset({'IDENTIFIER', 'INTCONST', 'LEFTPARENTHESIS'})
FIRST['term'] = FIRST['factor']
FIRST['exp'] = union(FIRST['term'], {'ADD', 'SUBTRACT'})
FIRST['condition'] = union(FIRST['exp'], {'ODD'})
FIRST['lop'] = frozenset({'EQUALITY', 'NOTEQUAL', 'LESS', 'LESSEQUAL', 'GREATER', 'GREATEREQUAL'})
FIRST['aop'] = frozenset({'ADD', 'SUBTRACT'})
FIRST['mop'] = frozenset({'MULTIPLY', 'DIVIDE'})
FIRST['id'] = frozenset({'IDENTIFIER'})
FIRST['integer'] = frozenset({'INTCONST'})

# Follow sets
FOLLOW = {}
FOLLOW['program'] = frozenset({'ENDOFINPUT'})
FOLLOW['proc'] = union(FIRST['body'], {'SEMICOLON'})
FOLLOW['block'] = union({'SEMICOLON', 'PERIOD'}, FOLLOW['program'], FOLLOW['proc'])
FOLLOW['const_decl'] = union(FIRST['var_decl'], FIRST['proc'], FIRST['body'])
FOLLOW['const'] = frozenset({'SEMICOLON', 'COMMA'})
FOLLOW['var_decl'] = union(FIRST['proc'], FIRST['body'])
FOLLOW['statement'] = frozenset({'SEMICOLON', 'END', 'ELSE'})
FOLLOW['body'] = union(FOLLOW['block'], FOLLOW['statement'])
FOLLOW['condition'] = frozenset({'THEN', 'DO'})
FOLLOW['exp'] = union({'RIGHTPARENTHESIS', 'COMMA'}, FOLLOW['statement'], FOLLOW['condition'], FIRST['lop'])
FOLLOW['term'] = union(FOLLOW['exp'], FIRST['aop'])
FOLLOW['factor'] = union(FOLLOW['term'], FIRST['mop'])
FOLLOW['lop'] = FIRST['exp']
FOLLOW['aop'] = FIRST['term']
FOLLOW['mop'] = FIRST['factor']
FOLLOW['id'] = union({'SEMICOLON', 'ASSIGNMENT', 'COMMA', 'LEFTPARENTHESIS', 'RIGHTPARENTHESIS'}, FOLLOW['factor'])
FOLLOW['integer'] = union(FOLLOW['factor'], FOLLOW['const'])

# Follow sets projected onto terminals, keyed by the expected token type
TOKEN_FOLLOW = {
    'PROGRAM': FIRST['id'],
    'CONST': FIRST['id'],
    'VAR': FIRST['id'],
    'PROCEDURE': FIRST['id'],
    'CALL': FIRST['id'],
    'BEGIN': FIRST['statement'],
    'END': FOLLOW['body'],
    'IF': FIRST['condition'],
    'THEN': FIRST['statement'],
    'ELSE': FIRST['statement'],
    'WHILE': FIRST['condition'],
    'DO': FIRST['statement'],
    'READ': frozenset({'LEFTPARENTHESIS'}),
    'WRITE': frozenset({'LEFTPARENTHESIS'}),
    'ODD': FIRST['exp'],
    'ADD': FOLLOW['aop'],
    'SUBTRACT': FOLLOW['aop'],
    'MULTIPLY': FOLLOW['mop'],
    'DIVIDE': FOLLOW['mop'],
    'EQUALITY': FOLLOW['lop'],
    'NOTEQUAL': FOLLOW['lop'],
    'LESS': FOLLOW['lop'],
    'LESSEQUAL': FOLLOW['lop'],
    'GREATER': FOLLOW['lop'],
    'GREATEREQUAL': FOLLOW['lop'],
    'ASSIGNMENT': union(FIRST['exp'], FIRST['integer']),
    'LEFTPARENTHESIS': union(FIRST['exp'], FIRST['id'], {'RIGHTPARENTHESIS'}),
    'RIGHTPARENTHESIS': union({'SEMICOLON'}, FOLLOW['factor'], FOLLOW['statement']),
    'SEMICOLON': union(FIRST['block'], FIRST['statement'], FIRST['proc']),
    'COMMA': union(FIRST['id'], FIRST['exp']),
    'PERIOD': FOLLOW['program'],
    'IDENTIFIER': FOLLOW['id'],
    'INTCONST': FOLLOW['integer'],
    'ENDOFINPUT': frozenset(),
}

# Operator token types mapped to the groups the parser matches on
relational_operators = FIRST['lop']
adding_operators = FIRST['aop']
multiplying_operators = FIRST['mop']
