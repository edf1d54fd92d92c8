# P-code: the instruction set of the PL/0 stack machine.
# An instruction is (op, level, operand): `level` is the number of static
# links to follow at run time, `operand` a literal, frame offset, jump
# target or OPR sub-operation.

from typing import NamedTuple

from pl0c import config

# Opcodes
LIT = 'LIT'  # push literal
OPR = 'OPR'  # arithmetic / relational / io / return
LOD = 'LOD'  # push variable
STO = 'STO'  # pop into variable
CAL = 'CAL'  # call procedure
INT = 'INT'  # move top of stack by operand
JMP = 'JMP'  # unconditional jump
JPC = 'JPC'  # pop, jump if zero
RED = 'RED'  # read integer into variable
WRT = 'WRT'  # pop and print

# OPR sub-operations
RET = 0
NEG = 1
ADD = 2
SUB = 3
MUL = 4
DIV = 5
ODD = 6
EQ = 8
NE = 9
LT = 10
GE = 11
GT = 12
LE = 13
PRT = 14
NL = 15
RD = 16
RDL = 17  # start a new input line

# Operator token types to OPR sub-operations
arithmetic = {
    'ADD': ADD,
    'SUBTRACT': SUB,
    'MULTIPLY': MUL,
    'DIVIDE': DIV,
}

relational = {
    'EQUALITY': EQ,
    'NOTEQUAL': NE,
    'LESS': LT,
    'GREATEREQUAL': GE,
    'GREATER': GT,
    'LESSEQUAL': LE,
}


class Instruction(NamedTuple):
    op: str
    level: int
    operand: int

    def __str__(self):
        return f'{self.op:4} {self.level:4} {self.operand:4}'


def listing(code):
    sep = config.SEP
    lines = ['PCode list:', sep]
    for i, instruction in enumerate(code):
        lines.append(f'{i:4}| {instruction}')
    lines.append(sep)
    return '\n'.join(lines)
