############################################################
# Virtual Machine for PL/0 p-code                          #
# Executes the translator's instruction list against a     #
# fixed-size integer stack. Non-local variables are        #
# reached by following static links through the frames    #
############################################################

import sys

from pl0c import config
from pl0c.errors import StackOverflow, DivisionByZero, InputError, UnknownInstruction
from pl0c.pcode import (
    LIT, OPR, LOD, STO, CAL, INT, JMP, JPC, RED, WRT,
    RET, NEG, ADD, SUB, MUL, DIV, ODD, EQ, NE, LT, GE, GT, LE, PRT, NL, RD, RDL)


def truncating_div(a, b):
    # Rounds toward zero
    quotient = abs(a) // abs(b)
    return -quotient if (a < 0) != (b < 0) else quotient


class VM(object):
    """Stack machine state.

    Frame layout at `base`: dynamic link, static link, return address, then
    parameters and locals. `top` is the index of the next free slot. The
    program frame header (slots 0..2) is all zero, so the program's final
    return sets pc to 0 and stops the machine.
    """

    def __init__(self, code, stack_size=None, stdin=None, stdout=None):
        self.code = code
        self.stack_size = stack_size if stack_size is not None else config.STACK_SIZE
        self.stdin = stdin
        self.stdout = stdout
        self.stack = [0] * self.stack_size
        self.pc = 0
        self.base = 0
        self.top = 0
        self.pending_input = []  # Integers of the current input line not read yet
        self.line_open = False  # A value has been written on the current output line

    # Frame found by following the static link `level` times
    def frame(self, level):
        b = self.base
        while level > 0:
            b = self.stack[b + 1]
            level -= 1
        return b

    def push(self, value):
        if self.top >= self.stack_size:
            raise StackOverflow('stack overflow', self.pc - 1)
        self.stack[self.top] = value
        self.top += 1

    def pop(self):
        self.top -= 1
        return self.stack[self.top]

    def write_value(self, value):
        out = self.stdout if self.stdout is not None else sys.stdout
        if self.line_open:
            out.write(config.WRITE_SEPARATOR)
        out.write(str(value))
        self.line_open = True

    def write_newline(self):
        out = self.stdout if self.stdout is not None else sys.stdout
        out.write('\n')
        out.flush()
        self.line_open = False

    # Every read statement takes one fresh line; surplus integers are dropped
    def read_line(self):
        stream = self.stdin if self.stdin is not None else sys.stdin
        line = stream.readline()
        if line == '':
            raise InputError('unexpected end of input while reading a line', self.pc - 1)
        self.pending_input = line.split()

    def read_value(self):
        if not self.pending_input:
            raise InputError('not enough integers on the input line', self.pc - 1)
        text = self.pending_input.pop(0)
        try:
            return int(text)
        except ValueError:
            raise InputError(f"'{text}' is not an integer", self.pc - 1)

    def operate(self, operation):
        if operation == RET:
            self.top = self.base
            self.pc = self.stack[self.base + 2]
            self.base = self.stack[self.base]
        elif operation == NEG:
            self.stack[self.top - 1] = -self.stack[self.top - 1]
        elif operation == ODD:
            self.stack[self.top - 1] = self.stack[self.top - 1] % 2
        elif operation == PRT:
            self.write_value(self.pop())
        elif operation == NL:
            self.write_newline()
        elif operation == RD:
            self.push(self.read_value())
        elif operation == RDL:
            self.read_line()
        elif operation in (ADD, SUB, MUL, DIV, EQ, NE, LT, GE, GT, LE):
            b = self.pop()
            a = self.pop()
            if operation == ADD:
                result = a + b
            elif operation == SUB:
                result = a - b
            elif operation == MUL:
                result = a * b
            elif operation == DIV:
                if b == 0:
                    raise DivisionByZero('division by zero', self.pc - 1)
                result = truncating_div(a, b)
            elif operation == EQ:
                result = int(a == b)
            elif operation == NE:
                result = int(a != b)
            elif operation == LT:
                result = int(a < b)
            elif operation == GE:
                result = int(a >= b)
            elif operation == GT:
                result = int(a > b)
            else:
                result = int(a <= b)
            self.push(result)
        else:
            raise UnknownInstruction(f'unknown operation OPR {operation}', self.pc - 1)

    def step(self):
        op, level, operand = self.code[self.pc]
        self.pc += 1

        if op == LIT:
            self.push(operand)
        elif op == OPR:
            self.operate(operand)
        elif op == LOD:
            self.push(self.stack[self.frame(level) + operand])
        elif op == STO:
            self.stack[self.frame(level) + operand] = self.pop()
        elif op == CAL:
            if self.top + config.FRAME_HEADER_SIZE > self.stack_size:
                raise StackOverflow('stack overflow', self.pc - 1)
            self.stack[self.top] = self.base  # DL
            self.stack[self.top + 1] = self.frame(level)  # SL
            self.stack[self.top + 2] = self.pc  # RA
            self.base = self.top
            self.pc = operand
        elif op == INT:
            if self.top + operand > self.stack_size:
                raise StackOverflow('stack overflow', self.pc - 1)
            self.top += operand
        elif op == JMP:
            self.pc = operand
        elif op == JPC:
            if self.pop() == 0:
                self.pc = operand
        elif op == RED:
            self.stack[self.frame(level) + operand] = self.read_value()
        elif op == WRT:
            self.write_value(self.pop())
        else:
            raise UnknownInstruction(f'unknown instruction {op}', self.pc - 1)

    def run(self):
        # The program's own frame returns to address 0
        while True:
            self.step()
            if self.pc == 0:
                break
        return self
