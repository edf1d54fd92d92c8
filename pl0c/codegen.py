############################################################
# Code Generator for the PL/0 compiler                     #
# Takes the AST from the parser and generates p-code for   #
# the stack machine in a single pass, checking names as    #
# it goes                                                  #
############################################################

# AST nodes
from pl0c.ast import (
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
    IdAST,
    IntegerAST,
    ParenAST)

from pl0c import config
from pl0c.errors import SEMANTIC_ERROR
from pl0c.pcode import (
    Instruction,
    LIT, OPR, LOD, STO, CAL, INT, JMP, JPC, RED, WRT,
    RET, NEG, ODD, NL, RDL,
    arithmetic,
    relational)
from pl0c.symtab import SymbolTable, CONST, VAR, PROC


class Translator(object):
    """Lowers a ProgramAST to a list of p-code instructions.

    Semantic errors (undefined names, redeclarations, kind and arity
    mismatches) are reported with the identifier's location and translation
    carries on, so one run reports all of them. The generated code must not
    be executed when has_error is set.
    """

    def __init__(self, diagnostics):
        self.diagnostics = diagnostics
        self.reset()

    def reset(self):
        self.code = []
        self.symtab = SymbolTable()
        self.has_error = False
        self.level = 0
        self.address = config.FRAME_HEADER_SIZE
        # Procedures whose entry point is not final yet -> CAL instructions to patch
        self.pending_calls = {}

    def translate(self, program):
        self.reset()
        self.block(program.block)
        return list(self.code)

    # Helpers
    def gen(self, op, level, operand):
        self.code.append(Instruction(op, level, operand))
        return len(self.code) - 1

    def patch(self, index, operand):
        self.code[index] = self.code[index]._replace(operand=operand)

    def error(self, id_ast, message):
        self.has_error = True
        self.diagnostics.report(SEMANTIC_ERROR, id_ast.line, id_ast.column, message)

    def lookup(self, id_ast):
        # Existence must be checked before resolving
        if not self.symtab.is_declared_at_or_above(id_ast.name, self.level):
            self.error(id_ast, f'`{id_ast.name}` is undefined')
            return None
        return self.symtab.resolve_closest(id_ast.name, self.level)

    def resolve_entry(self, proc, entry):
        proc.address = entry
        for index in self.pending_calls.pop(proc, []):
            self.patch(index, entry)

    # Declarations
    def block(self, block, proc=None):
        old_addr = self.address

        # DL - SL - RA, then the parameters
        self.address = config.FRAME_HEADER_SIZE
        if proc is not None:
            self.address += proc.size

        # (jmp, 0, 0) over the nested procedures
        jump = self.gen(JMP, 0, 0)

        if block.const_decl is not None:
            self.const_decl(block.const_decl)
        if block.var_decl is not None:
            self.var_decl(block.var_decl)
        if block.proc is not None:
            self.procedure(block.proc)

        # fix jmp
        entry = len(self.code)
        self.patch(jump, entry)
        if proc is not None:
            self.resolve_entry(proc, entry)

        # allocate
        self.gen(INT, 0, self.address)

        self.body(block.body)

        # end of procedure
        self.gen(OPR, 0, RET)

        self.address = old_addr

    def const_decl(self, const_decl):
        for constant in const_decl.constants:
            name = constant.id.name
            if self.symtab.is_declared_at_this_level(name, self.level):
                self.error(constant.id, f'`{name}` is defined before')
            else:
                self.symtab.declare(CONST, name, self.level, address=self.address,
                                    value=constant.integer.value)

    def var_decl(self, var_decl):
        for var_id in var_decl.ids:
            name = var_id.name
            if self.symtab.is_declared_at_this_level(name, self.level):
                self.error(var_id, f'`{name}` is defined before')
                continue
            self.symtab.declare(VAR, name, self.level, address=self.address)
            self.address += 1

    def procedure(self, proc_ast):
        name = proc_ast.id.name

        # duplicate-definition: skip its body, carry on with the siblings
        if self.symtab.is_declared_at_this_level(name, self.level):
            self.error(proc_ast.id, f'`{name}` is defined before')
        else:
            # Entry is the block's leading JMP until the block patches it
            proc = self.symtab.declare(PROC, name, self.level, address=len(self.code))
            self.pending_calls[proc] = []
            self.level += 1

            # args, right above the frame header
            for index, param in enumerate(proc_ast.params):
                owner = self.symtab.innermost_enclosing_procedure()
                owner.size += 1
                if self.symtab.is_declared_at_this_level(param.name, self.level):
                    self.error(param, f'`{param.name}` is defined before')
                    continue
                self.symtab.declare(VAR, param.name, self.level,
                                    address=config.FRAME_HEADER_SIZE + index)

            self.block(proc_ast.block, proc)

            self.symtab.close_scope(self.level)
            self.level -= 1

        for sibling in proc_ast.procs:
            self.procedure(sibling)

    def body(self, body):
        for statement in body.statements:
            self.statement(statement)

    # Statements
    def statement(self, statement):
        if isinstance(statement, AssignAST):
            self.assignment(statement)
        elif isinstance(statement, IfAST):
            self.if_statement(statement)
        elif isinstance(statement, WhileAST):
            self.while_statement(statement)
        elif isinstance(statement, CallAST):
            self.call(statement)
        elif isinstance(statement, CompoundAST):
            self.body(statement.body)
        elif isinstance(statement, ReadAST):
            self.read(statement)
        elif isinstance(statement, WriteAST):
            self.write(statement)
        else:
            raise TypeError('Unknown statement in translator', statement)

    def assignment(self, statement):
        sym = self.lookup(statement.id)
        if sym is None:
            return

        # assign to non-var
        if sym.kind != VAR:
            self.error(statement.id, f'`{sym.name}` is not a variable')
            return

        self.exp(statement.exp)
        self.gen(STO, self.level - sym.level, sym.address)

    def if_statement(self, statement):
        self.condition(statement.cond)

        # then
        false_jump = self.gen(JPC, 0, 0)
        self.statement(statement.then_statement)

        if statement.else_statement is None:
            self.patch(false_jump, len(self.code))
            return

        # else
        end_jump = self.gen(JMP, 0, 0)
        self.patch(false_jump, len(self.code))
        self.statement(statement.else_statement)
        self.patch(end_jump, len(self.code))

    def while_statement(self, statement):
        start = len(self.code)

        self.condition(statement.cond)

        # jump out if not condition
        exit_jump = self.gen(JPC, 0, 0)
        self.statement(statement.statement)
        # jump back to while
        self.gen(JMP, 0, start)
        self.patch(exit_jump, len(self.code))

    def call(self, statement):
        n_args = len(statement.args)
        sym = self.lookup(statement.id)
        if sym is None:
            return

        # call non-proc
        if sym.kind != PROC:
            self.error(statement.id, f'`{sym.name}` is not a procedure')
            return

        # unmatchable n_args
        if sym.size != n_args:
            self.error(statement.id, f'`{sym.name}` expects {sym.size} args, but received {n_args}')
            return

        # Evaluate the arguments into the parameter slots of the frame CAL builds
        if n_args > 0:
            header = config.FRAME_HEADER_SIZE
            self.gen(INT, 0, header)
            for arg in statement.args:
                self.exp(arg)
            self.gen(INT, 0, -(header + n_args))

        index = self.gen(CAL, self.level - sym.level, sym.address)
        if sym in self.pending_calls:
            self.pending_calls[sym].append(index)

    def read(self, statement):
        # One input line per statement, values taken in order
        self.gen(OPR, 0, RDL)
        for read_id in statement.ids:
            sym = self.lookup(read_id)
            if sym is None:
                continue

            # read to non-var
            if sym.kind != VAR:
                self.error(read_id, f'`{sym.name}` is not a variable')
                continue

            self.gen(RED, self.level - sym.level, sym.address)

    def write(self, statement):
        for exp in statement.exps:
            self.exp(exp)
            self.gen(WRT, 0, 0)
        # println
        self.gen(OPR, 0, NL)

    # Expressions
    def condition(self, cond):
        if isinstance(cond, OddAST):
            self.exp(cond.exp)
            self.gen(OPR, 0, ODD)
        elif isinstance(cond, ComparisonAST):
            self.exp(cond.left)
            self.exp(cond.right)
            self.gen(OPR, 0, relational[cond.op])
        else:
            raise TypeError('Unknown condition in translator', cond)

    def exp(self, exp):
        self.term(exp.term)
        if exp.negative:
            self.gen(OPR, 0, NEG)
        for op, term in exp.rest:
            self.term(term)
            self.gen(OPR, 0, arithmetic[op])

    def term(self, term):
        self.factor(term.factor)
        for op, factor in term.rest:
            self.factor(factor)
            self.gen(OPR, 0, arithmetic[op])

    def factor(self, factor):
        if isinstance(factor, IntegerAST):
            self.gen(LIT, 0, factor.value)
        elif isinstance(factor, ParenAST):
            self.exp(factor.exp)
        elif isinstance(factor, ExpAST):
            self.exp(factor)
        elif isinstance(factor, IdAST):
            sym = self.lookup(factor)
            if sym is None:
                return
            if sym.kind == CONST:
                self.gen(LIT, 0, sym.value)
            elif sym.kind == VAR:
                self.gen(LOD, self.level - sym.level, sym.address)
            else:
                self.error(factor, f'`{sym.name}` is a procedure, only `var` or `const` may appear in an expression')
        else:
            raise TypeError('Unknown factor in translator', factor)


def translate(program, diagnostics):
    """Translates an AST; returns (code, symbol table, has_error)."""
    translator = Translator(diagnostics)
    code = translator.translate(program)
    return code, translator.symtab, translator.has_error
