import pytest

from pl0c.symtab import SymbolTable, CONST, VAR, PROC


@pytest.fixture
def symtab():
    table = SymbolTable()
    table.declare(VAR, 'x', 0, address=3)
    table.declare(CONST, 'k', 0, value=7)
    table.declare(PROC, 'p', 0, address=1)
    table.declare(VAR, 'x', 1, address=3)
    return table


def test_innermost_declaration_wins(symtab):
    assert symtab.resolve_closest('x', 1).level == 1
    assert symtab.resolve_closest('x', 0).level == 0
    assert symtab.resolve_closest('k', 1).value == 7


def test_level_queries(symtab):
    assert symtab.is_declared_at_this_level('x', 1)
    assert not symtab.is_declared_at_this_level('k', 1)
    assert symtab.is_declared_at_or_above('k', 1)
    assert not symtab.is_declared_at_or_above('y', 1)


def test_unknown_name_raises(symtab):
    with pytest.raises(KeyError):
        symtab.resolve_closest('missing', 1)


def test_closed_scope_is_hidden_but_kept(symtab):
    symtab.close_scope(1)
    assert len(symtab) == 4
    assert not symtab.is_declared_at_this_level('x', 1)
    # The outer x shows through again
    assert symtab.resolve_closest('x', 1).level == 0
    assert symtab.resolve_closest('p', 0).kind == PROC


def test_innermost_enclosing_procedure(symtab):
    owner = symtab.innermost_enclosing_procedure()
    assert owner.name == 'p'
    owner.size += 1
    assert symtab.table[2].size == 1
    assert SymbolTable().innermost_enclosing_procedure() is None


def test_listing_has_one_row_per_symbol(symtab):
    lines = symtab.listing().splitlines()
    assert lines[0] == 'Symbol Table:'
    # Title, two separators around the header, trailing separator
    assert len(lines) == 4 + 1 + len(symtab)
    assert [line.split('|')[0].strip() for line in lines[4:-1]] == ['x', 'k', 'p', 'x']
