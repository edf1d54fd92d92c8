############################################################
# Scanner for the PL/0 compiler                            #
# Uses the re module to generate an efficient scanner      #
# Lexical errors are folded into the token stream as       #
# LEXICALERROR tokens instead of stopping the scan         #
############################################################

from typing import NamedTuple  # Used for tuple tokens
import re  # Used for regex

from pl0c.errors import LEXICAL_ERROR


class Token(NamedTuple):  # Tuple class that holds tokens
    type: str
    value: object
    line: int
    column: int


# All keywords of PL/0 (case-sensitive)
KEYWORDS = {
    'program': 'PROGRAM',
    'const': 'CONST',
    'var': 'VAR',
    'procedure': 'PROCEDURE',
    'begin': 'BEGIN',
    'end': 'END',
    'if': 'IF',
    'then': 'THEN',
    'else': 'ELSE',
    'while': 'WHILE',
    'do': 'DO',
    'call': 'CALL',
    'read': 'READ',
    'write': 'WRITE',
    'odd': 'ODD',
}

# Printable form of every token type, used in error messages
SYMBOLS = {
    'ADD': '+',
    'SUBTRACT': '-',
    'MULTIPLY': '*',
    'DIVIDE': '/',
    'EQUALITY': '=',
    'NOTEQUAL': '<>',
    'LESS': '<',
    'LESSEQUAL': '<=',
    'GREATER': '>',
    'GREATEREQUAL': '>=',
    'ASSIGNMENT': ':=',
    'LEFTPARENTHESIS': '(',
    'RIGHTPARENTHESIS': ')',
    'SEMICOLON': ';',
    'COMMA': ',',
    'PERIOD': '.',
    'IDENTIFIER': '<id>',
    'INTCONST': '<integer>',
    'ENDOFINPUT': 'end of input',
}
SYMBOLS.update({tag: word for word, tag in KEYWORDS.items()})

# Regular expression specification (order matters: first match wins)
token_specification = [
    ('BADINTEGER', r'\d+[A-Za-z_]\w*'),  # Digits running into letters
    ('INTCONST', r'\d+'),  # Integer
    ('BADIDENTIFIER', r'[A-Za-z][A-Za-z\d]*_\w*'),  # '_' is not allowed
    ('IDENTIFIER', r'[A-Za-z][A-Za-z\d]*'),  # Identifiers and keywords
    ('ASSIGNMENT', r':='),  # Assignment operator
    ('COLON', r':'),  # Lone colon
    # Relational operators (two character forms first)
    ('LESSEQUAL', r'<='),
    ('NOTEQUAL', r'<>'),
    ('GREATEREQUAL', r'>='),
    ('LESS', r'<'),
    ('GREATER', r'>'),
    ('EQUALITY', r'='),
    # Arithmetic operators
    ('ADD', r'[+]'),
    ('SUBTRACT', r'[-]'),
    ('MULTIPLY', r'[*]'),
    ('DIVIDE', r'[\/]'),
    ('LEFTPARENTHESIS', r'\('),
    ('RIGHTPARENTHESIS', r'\)'),
    ('SEMICOLON', r';'),  # Statement separator
    ('COMMA', r','),
    ('PERIOD', r'\.'),  # Optional end of program
    ('NEWLINE', r'\n'),  # Line endings
    ('SKIP', r'[ \t\r\f\v]+'),  # Skip over spaces and tabs
    ('MISMATCH', r'.'),  # Any other character
]

# Create pattern to be matched (from the previous token specification)
tok_regex = re.compile('|'.join('(?P<%s>%s)' % pair for pair in token_specification), re.ASCII)


def describe(token):
    """Text of a token as it should appear in a diagnostic."""
    if token.type in ('IDENTIFIER', 'INTCONST'):
        return str(token.value)
    return SYMBOLS.get(token.type, token.type)


def lexical_error(kind, value):
    if kind == 'BADINTEGER':
        return f"'{value}' is not a valid integer literal"
    elif kind == 'BADIDENTIFIER':
        return f"'{value}': '_' is not supported for identifier declaration"
    elif kind == 'COLON':
        return "':' is an undefined sign, did you mean ':='?"
    elif not value.isascii():
        return f"'{value}' is not an ASCII character"
    return f"'{value}' is an unexpected character"


# Scanner function that analyzes code to categorize characters
def scanner(code, diagnostics=None):

    # Following variables are used for position attributes in tokens
    line_num = 1
    line_start = 0

    # tokens array
    tokens = []

    # Iterate through code, scanning in each element in turn
    for element in tok_regex.finditer(code):
        kind = element.lastgroup  # lastgroup returns the name of the matched token
        value = element.group()  # group() returns the string matched by the RE
        column = element.start() - line_start + 1
        if kind == 'NEWLINE':  # Move onto next line
            line_start = element.end()  # end() returns the ending position of the match
            line_num += 1  # Iterate position attribute
            continue
        elif kind == 'SKIP':
            continue
        elif kind == 'INTCONST':
            value = int(value)
        elif kind == 'IDENTIFIER' and value in KEYWORDS:
            kind = KEYWORDS[value]
        elif kind in ('BADINTEGER', 'BADIDENTIFIER', 'COLON', 'MISMATCH'):
            # Report now and keep scanning after the offending text
            value = lexical_error(kind, value)
            kind = 'LEXICALERROR'
            if diagnostics is not None:
                diagnostics.report(LEXICAL_ERROR, line_num, column, value)
        tokens.append(Token(kind, value, line_num, column))  # Append token onto tokens array

    # Parser relies on a single end marker
    tokens.append(Token('ENDOFINPUT', None, line_num, len(code) - line_start + 1))

    return tokens  # return tokens array
