############################################################
# PL/0 Parser                                              #
# Parses through the tokens and generates an AST           #
# Predictive recursive descent with panic-mode recovery    #
# driven by the FIRST/FOLLOW sets in sets.py               #
############################################################

# AST nodes
from pl0c.ast import (
    ProgramAST,
    BlockAST,
    ConstDeclAST,
    ConstAST,
    VarDeclAST,
    ProcAST,
    BodyAST,
    AssignAST,
    IfAST,
    WhileAST,
    CallAST,
    CompoundAST,
    ReadAST,
    WriteAST,
    ComparisonAST,
    OddAST,
    ExpAST,
    TermAST,
    IdAST,
    IntegerAST,
    ParenAST)

# Error resynchronisation sets (and operator groups for matching)
from pl0c.sets import (
    FIRST,
    FOLLOW,
    TOKEN_FOLLOW,
    relational_operators,
    adding_operators,
    multiplying_operators,
)

from pl0c.errors import SYNTAX_ERROR
from pl0c.scanner import SYMBOLS, describe


class Parser(object):
    """Builds a ProgramAST from a scanned token list.

    Every parse_* routine returns a node, or None when a required child is
    missing. Errors go to the diagnostics collector and set has_error; the
    parse always runs to the end of the token list.
    """

    def __init__(self, tokens, diagnostics):
        self.tokens = tokens
        self.diagnostics = diagnostics
        self.token_index = 0
        self.has_error = False
        self.recovering = False  # Set after an error, cleared by the next accepted token

    # Returns the lookahead, silently draining lexical errors (the scanner reported them)
    def peek(self):
        while self.tokens[self.token_index].type == 'LEXICALERROR':
            self.has_error = True
            self.token_index += 1
        return self.tokens[self.token_index]

    # Reads in the next token by advancing token index
    def get_token(self):
        token = self.peek()
        # Never move past the end marker
        if token.type != 'ENDOFINPUT':
            self.token_index += 1
        return token

    def error(self, token, message):
        self.has_error = True
        if not self.recovering:
            self.diagnostics.report(SYNTAX_ERROR, token.line, token.column, message)
        self.recovering = True

    # Takes an expected token name as argument, and if the current
    # lookahead matches this, advances the lookahead and returns the token.
    # On a mismatch the offending token is discarded unless it can follow
    # the expected one.
    def accept(self, expected_token):
        token = self.peek()
        if token.type == expected_token:
            self.recovering = False
            return self.get_token()

        self.error(token, f'Expected `{SYMBOLS[expected_token]}`, but got `{describe(token)}`')
        if token.type != 'ENDOFINPUT' and token.type not in TOKEN_FOLLOW[expected_token]:
            self.get_token()
        return None

    # Reports a missing non-terminal; same recovery as accept()
    def expected(self, field, what):
        token = self.peek()
        self.error(token, f'Expected {what}, but got `{describe(token)}`')
        if token.type != 'ENDOFINPUT' and token.type not in FOLLOW[field]:
            self.get_token()
        return None

    # S-Algol Error Recovery;
    # Resynchronises the parser after encountering an error in the
    # input file.
    def synchro(self, augmented_set, follow_beacon_set):
        token = self.peek()
        if token.type in augmented_set:
            return
        full_set = augmented_set | follow_beacon_set
        expected = ', '.join(sorted(f'`{SYMBOLS[t]}`' for t in augmented_set))
        self.error(token, f'Expected one of: {expected}, but got `{describe(token)}`')
        while self.peek().type not in full_set and self.peek().type != 'ENDOFINPUT':
            self.get_token()

    # <id>
    def parse_id(self):
        token = self.accept('IDENTIFIER')
        if token is None:
            return None
        return IdAST(token.value, token.line, token.column)

    # <integer>
    def parse_integer(self):
        token = self.accept('INTCONST')
        if token is None:
            return None
        return IntegerAST(token.value, token.line, token.column)

    # Comma separated identifiers
    def parse_id_list(self):
        ids = [self.parse_id()]
        # Repetition triggered by a ","
        while self.peek().type == 'COMMA':
            self.accept('COMMA')
            ids.append(self.parse_id())
        return tuple(i for i in ids if i is not None)

    # Comma separated expressions
    def parse_exp_list(self):
        exps = [self.parse_exp()]
        while self.peek().type == 'COMMA':
            self.accept('COMMA')
            exps.append(self.parse_exp())
        return exps

    # Recursive-descent implementation of the grammar's productions.
    # <prog> -> program <id> ; <block> [.]
    def parse_program(self):
        self.accept('PROGRAM')
        program_id = self.parse_id()
        self.accept('SEMICOLON')
        block = self.parse_block()

        if self.peek().type == 'PERIOD':
            self.accept('PERIOD')

        # Nothing may follow the program
        token = self.peek()
        if token.type != 'ENDOFINPUT':
            self.error(token, f'Expected `end of input`, but got `{describe(token)}`')

        if program_id is None or block is None:
            return None
        return ProgramAST(program_id, block)

    # <block> -> [<const-decl>][<var-decl>][<proc>]<body>
    def parse_block(self):
        # Synchronise used to recover parsing after error
        self.synchro(FIRST['block'], FOLLOW['block'])

        const_decl = None
        if self.peek().type == 'CONST':
            const_decl = self.parse_const_decl()

        var_decl = None
        if self.peek().type == 'VAR':
            var_decl = self.parse_var_decl()

        proc = None
        if self.peek().type == 'PROCEDURE':
            proc = self.parse_proc()

        body = self.parse_body()
        if body is None:
            return None
        return BlockAST(const_decl, var_decl, proc, body)

    # <const-decl> -> const <const> {, <const>} ;
    def parse_const_decl(self):
        self.accept('CONST')
        constants = [self.parse_const()]
        while self.peek().type == 'COMMA':
            self.accept('COMMA')
            constants.append(self.parse_const())
        self.accept('SEMICOLON')
        return ConstDeclAST(tuple(c for c in constants if c is not None))

    # <const> -> <id> := <integer>
    def parse_const(self):
        const_id = self.parse_id()
        self.accept('ASSIGNMENT')
        integer = self.parse_integer()
        if const_id is None or integer is None:
            return None
        return ConstAST(const_id, integer)

    # <var-decl> -> var <id> {, <id>} ;
    def parse_var_decl(self):
        self.accept('VAR')
        ids = self.parse_id_list()
        self.accept('SEMICOLON')
        return VarDeclAST(ids)

    # <proc> -> procedure <id> [([<id> {, <id>}])] ; <block> {; <proc>} [;]
    def parse_proc(self):
        self.accept('PROCEDURE')
        proc_id = self.parse_id()

        # Implement [] brackets with if statement
        params = ()
        if self.peek().type == 'LEFTPARENTHESIS':
            self.accept('LEFTPARENTHESIS')
            if self.peek().type != 'RIGHTPARENTHESIS':
                params = self.parse_id_list()
            self.accept('RIGHTPARENTHESIS')

        self.accept('SEMICOLON')
        block = self.parse_block()

        # Sibling procedures; a lone ';' before the enclosing body is allowed
        procs = []
        while self.peek().type == 'SEMICOLON':
            self.accept('SEMICOLON')
            if self.peek().type != 'PROCEDURE':
                break
            procs.append(self.parse_proc())

        if proc_id is None or block is None:
            return None
        return ProcAST(proc_id, params, block, tuple(p for p in procs if p is not None))

    # <body> -> begin <statement> {; <statement>} end
    def parse_body(self):
        if self.accept('BEGIN') is None and self.peek().type not in FIRST['statement']:
            return None

        statements = [self.parse_statement()]

        # Check constantly for further statements
        while True:
            token_type = self.peek().type
            if token_type == 'SEMICOLON':
                self.accept('SEMICOLON')
            elif token_type in FIRST['statement']:
                # Missing ';' between two statements
                self.accept('SEMICOLON')
            else:
                break
            statements.append(self.parse_statement())

        # End of block
        self.accept('END')
        return BodyAST(tuple(s for s in statements if s is not None))

    # <statement> -> <id> := <exp>
    #              | if <l-exp> then <statement> [else <statement>]
    #              | while <l-exp> do <statement>
    #              | call <id> ([<exp> {, <exp>}])
    #              | <body>
    #              | read (<id> {, <id>})
    #              | write (<exp> {, <exp>})
    def parse_statement(self):
        self.synchro(FIRST['statement'], FOLLOW['statement'])

        token_type = self.peek().type
        # Assignment starts with a variable
        if token_type == 'IDENTIFIER':
            return self.parse_assignment()
        # IfStatement starts with IF
        elif token_type == 'IF':
            return self.parse_if()
        # WhileStatement starts with WHILE
        elif token_type == 'WHILE':
            return self.parse_while()
        elif token_type == 'CALL':
            return self.parse_call()
        elif token_type == 'BEGIN':
            body = self.parse_body()
            return CompoundAST(body) if body is not None else None
        # ReadStatement starts with READ
        elif token_type == 'READ':
            return self.parse_read()
        # WriteStatement starts with WRITE
        elif token_type == 'WRITE':
            return self.parse_write()
        # Synchronised onto a follower: the statement is missing
        return None

    # Parse assignment
    def parse_assignment(self):
        target = self.parse_id()
        self.accept('ASSIGNMENT')
        exp = self.parse_exp()
        if target is None or exp is None:
            return None
        return AssignAST(target, exp)

    # Parse IF statement
    def parse_if(self):
        self.accept('IF')
        cond = self.parse_condition()
        self.accept('THEN')
        then_statement = self.parse_statement()

        else_statement = None
        if self.peek().type == 'ELSE':
            self.accept('ELSE')
            else_statement = self.parse_statement()

        if cond is None or then_statement is None:
            return None
        return IfAST(cond, then_statement, else_statement)

    # Parse WHILE statement
    def parse_while(self):
        self.accept('WHILE')
        cond = self.parse_condition()
        self.accept('DO')
        statement = self.parse_statement()
        if cond is None or statement is None:
            return None
        return WhileAST(cond, statement)

    # Parse procedure call and its parameters
    def parse_call(self):
        self.accept('CALL')
        callee = self.parse_id()
        self.accept('LEFTPARENTHESIS')
        args = []
        if self.peek().type != 'RIGHTPARENTHESIS':
            args = self.parse_exp_list()
        self.accept('RIGHTPARENTHESIS')
        if callee is None or None in args:
            return None
        return CallAST(callee, tuple(args))

    # Parse READ statement
    def parse_read(self):
        self.accept('READ')
        self.accept('LEFTPARENTHESIS')
        # Read in each variable in turn
        ids = self.parse_id_list()
        self.accept('RIGHTPARENTHESIS')
        if not ids:
            return None
        return ReadAST(ids)

    # Parse WRITE statement
    def parse_write(self):
        self.accept('WRITE')
        self.accept('LEFTPARENTHESIS')
        exps = self.parse_exp_list()
        self.accept('RIGHTPARENTHESIS')
        if None in exps:
            return None
        return WriteAST(tuple(exps))

    # <l-exp> -> <exp> <lop> <exp> | odd <exp>
    def parse_condition(self):
        if self.peek().type == 'ODD':
            self.accept('ODD')
            exp = self.parse_exp()
            return OddAST(exp) if exp is not None else None

        left = self.parse_exp()
        op = None
        if self.peek().type in relational_operators:
            op = self.get_token().type
            self.recovering = False
        else:
            self.expected('lop', 'a relational operator')
        right = self.parse_exp()
        if left is None or op is None or right is None:
            return None
        return ComparisonAST(left, op, right)

    # <exp> -> [+|-] <term> {<aop> <term>}
    def parse_exp(self):
        negative = False
        if self.peek().type in adding_operators:
            negative = self.get_token().type == 'SUBTRACT'

        term = self.parse_term()
        rest = []
        # Check for simple arithmetic +/-
        while self.peek().type in adding_operators:
            op = self.get_token().type
            rest.append((op, self.parse_term()))

        if term is None or any(t is None for _, t in rest):
            return None
        return ExpAST(negative, term, tuple(rest))

    # <term> -> <factor> {<mop> <factor>}
    def parse_term(self):
        factor = self.parse_factor()
        rest = []
        # Check for multiplication or division
        while self.peek().type in multiplying_operators:
            op = self.get_token().type
            rest.append((op, self.parse_factor()))

        if factor is None or any(f is None for _, f in rest):
            return None
        return TermAST(factor, tuple(rest))

    # <factor> -> <id> | <integer> | (<exp>)
    def parse_factor(self):
        token_type = self.peek().type
        if token_type == 'LEFTPARENTHESIS':
            self.accept('LEFTPARENTHESIS')
            exp = self.parse_exp()
            self.accept('RIGHTPARENTHESIS')
            return ParenAST(exp) if exp is not None else None
        elif token_type == 'IDENTIFIER':
            return self.parse_id()
        elif token_type == 'INTCONST':
            return self.parse_integer()
        return self.expected('factor', '<id> / <integer> / (<exp>)')


def parse(tokens, diagnostics):
    """Parses a token list; returns (ast, has_error)."""
    parser = Parser(tokens, diagnostics)
    program = parser.parse_program()
    return program, parser.has_error
