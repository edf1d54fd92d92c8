# PL/0 Symbol Table
# Declarations are entered into the table as the translator walks the AST.
# The table is one flat list, appended to in declaration order and never
# shrunk. Because an inner scope's rows always come after the rows of the
# scopes enclosing it, scanning from the end finds the innermost visible
# declaration first. Rows of a finished procedure scope are hidden (not
# removed) so later sibling procedures do not see them.

from pl0c import config

# Kinds of symbol table entries
CONST = 'const'
VAR = 'var'
PROC = 'proc'


class Symbol(object):
    def __init__(self, kind, name, level, address=0, value=0, size=0):
        self.kind = kind
        self.name = name
        self.level = level  # Lexical nesting depth, 0 for the program block
        self.address = address  # Frame offset, or first instruction of a procedure
        self.value = value  # Value of a constant
        self.size = size  # Parameter count of a procedure
        self.visible = True

    def __repr__(self):
        return (f'Symbol({self.kind} {self.name!r} lev {self.level} addr {self.address} '
                f'val {self.value} size {self.size})')


class SymbolTable(object):
    def __init__(self):
        self.table = []

    def __len__(self):
        return len(self.table)

    def __iter__(self):
        return iter(self.table)

    def declare(self, kind, name, level, address=0, value=0):
        # The translator checks for redeclaration before calling this
        symbol = Symbol(kind, name, level, address, value)
        self.table.append(symbol)
        return symbol

    def _visible(self):
        return (sym for sym in reversed(self.table) if sym.visible)

    def is_declared_at_this_level(self, name, level):
        return any(sym.name == name and sym.level == level for sym in self._visible())

    def is_declared_at_or_above(self, name, level):
        return any(sym.name == name and sym.level <= level for sym in self._visible())

    def resolve_closest(self, name, level):
        # Must scan in reverse: the innermost declaration was appended last
        for sym in self._visible():
            if sym.name == name and sym.level <= level:
                return sym
        raise KeyError(name)

    def innermost_enclosing_procedure(self):
        for sym in reversed(self.table):
            if sym.kind == PROC:
                return sym
        return None

    def close_scope(self, level):
        for sym in self.table:
            if sym.level >= level:
                sym.visible = False

    def listing(self):
        sep = config.SEP
        lines = ['Symbol Table:', sep,
                 f"{'name':>10} | {'kind':<6} | {'val':<4} | {'level':<6} | {'addr':<4} | {'size':<4}",
                 sep]
        for sym in self.table:
            lines.append(f'{sym.name:>10} | {sym.kind:<6} | {sym.value:<4} | {sym.level:<6} | '
                         f'{sym.address:<4} | {sym.size:<4}')
        lines.append(sep)
        return '\n'.join(lines)
