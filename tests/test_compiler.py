import io
from pathlib import Path

import pytest

from pl0 import main
from pl0c.compiler import compile_source, run_source, compile_file, annotate
from pl0c.errors import LEXICAL_ERROR, SYNTAX_ERROR, SEMANTIC_ERROR

PROGRAMS = Path(__file__).parent / 'programs'


@pytest.mark.parametrize('name, stdin, expected', [
    ('sum.pl0', '', '3\n'),
    ('shadow.pl0', '', '1\n2\n'),
    ('nest.pl0', '', '13 0\n'),
    ('factorial.pl0', '', '120\n'),
    ('gcd.pl0', '12 18\n', '6\n'),
    ('primes.pl0', '', ''.join(f'{p}\n' for p in (2, 3, 5, 7, 11, 13, 17, 19, 23, 29))),
])
def test_sample_programs(name, stdin, expected):
    out = io.StringIO()
    result = run_source((PROGRAMS / name).read_text(), stdin=io.StringIO(stdin), stdout=out)
    assert result.ok, list(result.diagnostics)
    assert out.getvalue() == expected


def test_errors_stop_the_pipeline():
    result = compile_source("program p; var a; begin a := 1 $ end")
    assert not result.ok
    assert result.code is None
    assert [d.kind for d in result.diagnostics] == [LEXICAL_ERROR]

    result = compile_source((PROGRAMS / 'missing_semicolon.pl0').read_text())
    assert result.code is None
    assert result.symtab is None
    assert [d.kind for d in result.diagnostics] == [SYNTAX_ERROR]

    result = compile_source((PROGRAMS / 'semantic_errors.pl0').read_text())
    assert result.code is None
    assert result.symtab is not None
    assert {d.kind for d in result.diagnostics} == {SEMANTIC_ERROR}


def test_program_with_errors_is_not_run():
    out = io.StringIO()
    result = run_source("program p; begin write(y) end", stdout=out)
    assert not result.ok
    assert out.getvalue() == ''


def test_diagnostic_format():
    result = compile_source("program u; begin write(y) end")
    (d,) = result.diagnostics
    assert str(d) == 'SemanticError{ Line: 1, Col: 24 }\n  | ~~ `y` is undefined\n'


def test_annotate_appends_markers():
    source = "line one\nline two"
    result = compile_source("program u; begin write(y) end")
    text = annotate(source, result.diagnostics)
    assert text.splitlines()[0].endswith('<<<< SemanticError: `y` is undefined')
    assert text.splitlines()[1] == 'line two'


def test_usage_without_arguments(capsys):
    assert main([]) == 1
    out = capsys.readouterr().out
    assert 'Usage: python pl0.py <input file>' in out
    assert 'Only the input file is required' in out


def test_missing_input_file(tmp_path):
    out = io.StringIO()
    assert compile_file(str(tmp_path / 'nope.pl0'), stdout=out) == 1
    assert 'does not appear to exist' in out.getvalue()


def test_compile_file_writes_list_and_code(tmp_path):
    list_file = tmp_path / 'sum.list'
    code_file = tmp_path / 'sum.code'
    out = io.StringIO()
    status = compile_file(str(PROGRAMS / 'sum.pl0'), str(list_file), str(code_file), stdout=out)
    assert status == 0

    report = out.getvalue()
    assert 'No errors detected in source code.' in report
    assert '=== AST ===' in report
    assert 'Symbol Table:' in report
    assert '=== PROGRAM OUTPUT ===\n3\n=== END OF PROGRAM OUTPUT ===' in report
    assert report.rstrip().endswith('=== End of Compiler Report ===')

    assert list_file.read_text() == (PROGRAMS / 'sum.pl0').read_text()
    assert code_file.read_text().startswith('PCode list:\n')


def test_compile_file_with_errors(tmp_path):
    list_file = tmp_path / 'bad.list'
    out = io.StringIO()
    status = compile_file(str(PROGRAMS / 'semantic_errors.pl0'), str(list_file), stdout=out)
    assert status == 1

    report = out.getvalue()
    assert report.count('SemanticError{') == 5
    assert '5 error(s) were detected in source code.' in report
    assert '=== PROGRAM OUTPUT ===' not in report

    lines = list_file.read_text().splitlines()
    assert '<<<< SemanticError: `x` is defined before' in lines[2]
    assert sum('<<<<' in line for line in lines) == 5


def test_runtime_error_exit_status(tmp_path):
    source = tmp_path / 'div.pl0'
    source.write_text("program d; var a; begin a := 0; write(5 / a) end\n")
    out = io.StringIO()
    assert compile_file(str(source), stdout=out) == 2
    assert 'RuntimeError{ Pc: ' in out.getvalue()


def test_main_passes_file_names(tmp_path, capsys):
    code_file = tmp_path / 'out.code'
    assert main([str(PROGRAMS / 'factorial.pl0'), str(tmp_path / 'out.list'), str(code_file)]) == 0
    assert '120' in capsys.readouterr().out
    assert code_file.exists()
