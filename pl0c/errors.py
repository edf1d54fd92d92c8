############################################################
# Error reporting for the PL/0 compiler                    #
# Compile-time errors are collected as diagnostics and     #
# never raised; run-time errors are VMError exceptions     #
############################################################

from typing import NamedTuple

# Compile-time error kinds, in pipeline order
LEXICAL_ERROR = "LexicalError"
SYNTAX_ERROR = "SyntaxError"
SEMANTIC_ERROR = "SemanticError"


class Diagnostic(NamedTuple):  # One reported compile-time error
    kind: str
    line: int
    column: int
    message: str

    def __str__(self):
        return f"{self.kind}{{ Line: {self.line}, Col: {self.column} }}\n  | ~~ {self.message}\n"


class Diagnostics(object):
    """Collects the errors of every compile stage.

    When given an output stream each diagnostic is printed as soon as it is
    reported, so the user sees errors in the order they were found.
    """

    def __init__(self, stream=None):
        self.stream = stream
        self.items = []

    def report(self, kind, line, column, message):
        diagnostic = Diagnostic(kind, line, column, message)
        self.items.append(diagnostic)
        if self.stream is not None:
            print(diagnostic, file=self.stream)
        return diagnostic

    def of_kind(self, kind):
        return [d for d in self.items if d.kind == kind]

    @property
    def has_errors(self):
        return len(self.items) > 0

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


# Define virtual machine errors
class VMError(Exception):
    def __init__(self, message, pc=0):
        super().__init__(message)
        self.message = message
        self.pc = pc

    def __str__(self):
        return f"RuntimeError{{ Pc: {self.pc} }}\n  | ~~ {self.message}\n"


class StackOverflow(VMError):
    pass


class DivisionByZero(VMError):
    pass


class InputError(VMError):
    pass


class UnknownInstruction(VMError):
    pass
