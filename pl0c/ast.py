# Abstract Syntax Tree (AST) objects.
# This file defines classes for different kinds of nodes of an Abstract
# Syntax Tree. The parser creates these nodes bottom-up and each node owns
# its children exclusively (a tree, never a graph). Nodes are immutable
# named tuples; child sequences are tuples and optional parts are None.

import pprint  # For pretty printing of AST
from typing import NamedTuple, Optional, Tuple


# Leaves (carry their source location for diagnostics)
class IdAST(NamedTuple):
    name: str
    line: int
    column: int


class IntegerAST(NamedTuple):
    value: int
    line: int
    column: int


# Expressions
class ExpAST(NamedTuple):
    negative: bool
    term: 'TermAST'
    rest: Tuple[Tuple[str, 'TermAST'], ...] = ()  # (ADD|SUBTRACT, term) pairs


class TermAST(NamedTuple):
    factor: object
    rest: Tuple[Tuple[str, object], ...] = ()  # (MULTIPLY|DIVIDE, factor) pairs


class ParenAST(NamedTuple):
    exp: ExpAST


# Conditions
class ComparisonAST(NamedTuple):
    left: ExpAST
    op: str  # One of the relational operator token types
    right: ExpAST


class OddAST(NamedTuple):
    exp: ExpAST


# Statements
class AssignAST(NamedTuple):
    id: IdAST
    exp: ExpAST


class IfAST(NamedTuple):
    cond: object
    then_statement: object
    else_statement: Optional[object] = None


class WhileAST(NamedTuple):
    cond: object
    statement: object


class CallAST(NamedTuple):
    id: IdAST
    args: Tuple[ExpAST, ...] = ()


class ReadAST(NamedTuple):
    ids: Tuple[IdAST, ...]


class WriteAST(NamedTuple):
    exps: Tuple[ExpAST, ...]


class BodyAST(NamedTuple):
    statements: Tuple[object, ...]


class CompoundAST(NamedTuple):
    body: BodyAST


# Declarations
class ConstAST(NamedTuple):
    id: IdAST
    integer: IntegerAST


class ConstDeclAST(NamedTuple):
    constants: Tuple[ConstAST, ...]


class VarDeclAST(NamedTuple):
    ids: Tuple[IdAST, ...]


class BlockAST(NamedTuple):
    const_decl: Optional[ConstDeclAST]
    var_decl: Optional[VarDeclAST]
    proc: Optional['ProcAST']
    body: BodyAST


class ProcAST(NamedTuple):
    id: IdAST
    params: Tuple[IdAST, ...]
    block: BlockAST
    procs: Tuple['ProcAST', ...] = ()  # Sibling procedures declared after this one


class ProgramAST(NamedTuple):
    id: IdAST
    block: BlockAST


# Flattens the AST into a sexpr-like nested list.
def flatten(ast_node):
    if ast_node is None:
        return None
    elif isinstance(ast_node, IdAST):
        return ['IDENTIFIER', ast_node.name]
    elif isinstance(ast_node, IntegerAST):
        return ['INTCONST', ast_node.value]
    elif isinstance(ast_node, ParenAST):
        return flatten(ast_node.exp)
    elif isinstance(ast_node, TermAST):
        node = flatten(ast_node.factor)
        for op, factor in ast_node.rest:
            node = ['OP', op, node, flatten(factor)]
        return node
    elif isinstance(ast_node, ExpAST):
        node = flatten(ast_node.term)
        if ast_node.negative:
            node = ['NEGATE', node]
        for op, term in ast_node.rest:
            node = ['OP', op, node, flatten(term)]
        return node
    elif isinstance(ast_node, ComparisonAST):
        return ['OP', ast_node.op, flatten(ast_node.left), flatten(ast_node.right)]
    elif isinstance(ast_node, OddAST):
        return ['ODD', flatten(ast_node.exp)]
    elif isinstance(ast_node, AssignAST):
        return ['STORE', ast_node.id.name, flatten(ast_node.exp)]
    elif isinstance(ast_node, IfAST):
        if ast_node.else_statement is None:
            return ['IF', flatten(ast_node.cond), flatten(ast_node.then_statement)]
        return ['IF', flatten(ast_node.cond), 'THEN', flatten(ast_node.then_statement),
                'ELSE', flatten(ast_node.else_statement)]
    elif isinstance(ast_node, WhileAST):
        return ['WHILE', flatten(ast_node.cond), flatten(ast_node.statement)]
    elif isinstance(ast_node, CallAST):
        return ['CALL', ast_node.id.name, [flatten(arg) for arg in ast_node.args]]
    elif isinstance(ast_node, ReadAST):
        return ['READ', [flatten(arg) for arg in ast_node.ids]]
    elif isinstance(ast_node, WriteAST):
        return ['WRITE', [flatten(arg) for arg in ast_node.exps]]
    elif isinstance(ast_node, CompoundAST):
        return flatten(ast_node.body)
    elif isinstance(ast_node, BodyAST):
        return ['BEGIN', [flatten(statement) for statement in ast_node.statements]]
    elif isinstance(ast_node, ConstDeclAST):
        return ['CONST', [[c.id.name, c.integer.value] for c in ast_node.constants]]
    elif isinstance(ast_node, VarDeclAST):
        return ['VAR', [i.name for i in ast_node.ids]]
    elif isinstance(ast_node, BlockAST):
        block = []
        for part in ast_node:
            if part is not None:
                block.append(flatten(part))
        return block
    elif isinstance(ast_node, ProcAST):
        procs = [['PROC', ast_node.id.name, [p.name for p in ast_node.params], flatten(ast_node.block)]]
        for sibling in ast_node.procs:
            procs.extend(flatten(sibling))
        return procs
    elif isinstance(ast_node, ProgramAST):
        return ['PROGRAM', ast_node.id.name, flatten(ast_node.block)]
    else:
        raise TypeError('Unknown type in flatten()')


# Uses pprint to format the nested list in indented fashion
def format_ast(ast):
    pp = pprint.PrettyPrinter(indent=2, compact=True)
    return pp.pformat(flatten(ast))


def pprint_ast(ast, inputFileName, file=None):

    print("=== AST ===", file=file)

    print("PROGRAM \"" + inputFileName + "\"", file=file)

    print(format_ast(ast), file=file)

    print("=== END OF AST ===\n", file=file)
