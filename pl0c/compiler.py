############################################################
# PL/0 compiler pipeline                                   #
# Scanner -> Parser -> Translator -> Virtual Machine       #
# Each stage runs to completion; any error flag stops the  #
# pipeline before the next stage                           #
############################################################

import sys  # Default output stream
from typing import NamedTuple, Optional
from timeit import default_timer as timer  # Tracking compile time

from pl0c import config
from pl0c.ast import pprint_ast
from pl0c.codegen import translate
from pl0c.errors import Diagnostics, VMError
from pl0c.parse import parse
from pl0c.pcode import listing
from pl0c.scanner import scanner
from pl0c.vm import VM


class CompileResult(NamedTuple):
    ast: object
    code: Optional[list]  # None when any stage reported an error
    symtab: object
    diagnostics: Diagnostics

    @property
    def ok(self):
        return self.code is not None


def compile_source(source, diagnostics=None):
    """Runs the front end and the translator over a source string."""
    if diagnostics is None:
        diagnostics = Diagnostics()

    tokens = scanner(source, diagnostics)

    ast, has_error = parse(tokens, diagnostics)
    if has_error or diagnostics.has_errors:
        return CompileResult(ast, None, None, diagnostics)

    code, symtab, has_error = translate(ast, diagnostics)
    if has_error:
        return CompileResult(ast, None, symtab, diagnostics)

    return CompileResult(ast, code, symtab, diagnostics)


def run_source(source, stdin=None, stdout=None, stack_size=None):
    """Compiles and, when it compiled cleanly, executes a program."""
    result = compile_source(source)
    if result.ok:
        VM(result.code, stack_size=stack_size, stdin=stdin, stdout=stdout).run()
    return result


# Source lines with each diagnostic appended to the line it refers to
def annotate(source, diagnostics):
    line_data = source.splitlines()
    for d in diagnostics:
        index = max(d.line, 1) - 1
        while len(line_data) <= index:
            line_data.append('')
        line_data[index] += f'{config.LIST_MARKER}{d.kind}: {d.message}'
    return '\n'.join(line_data) + '\n'


def compile_file(inputFileName, listFileName=None, codeFileName=None, stdin=None, stdout=None):
    """Main compiler entry point, called from pl0.py. Returns an exit status."""
    out = stdout if stdout is not None else sys.stdout

    # Begin tracking time
    start = timer()

    try:
        with open(inputFileName, 'r') as inputFile:
            source = inputFile.read()
    except OSError:
        print("Error. Input File does not appear to exist.", file=out)
        return 1

    # Diagnostics are printed as soon as they are found
    result = compile_source(source, Diagnostics(stream=out))

    # Write to list file (errors inserted at their lines)
    if listFileName is not None:
        with open(listFileName, 'w') as listFile:
            listFile.write(annotate(source, result.diagnostics))

    print("\n=== Compiler Report ===", file=out)

    status = 0
    # Catch errors and notify user
    if not result.ok:
        print(f"{len(result.diagnostics)} error(s) were detected in source code.", file=out)
        print("=== ERRORS PRESENT ===\nProgram not to be executed till issues resolved!\n", file=out)
        status = 1
    else:
        print("No errors detected in source code.\n", file=out)

        # Print AST, code and symbol table (in a nice way)
        pprint_ast(result.ast, inputFileName, file=out)
        print(listing(result.code), file=out)
        print(file=out)
        print(result.symtab.listing(), file=out)
        print(file=out)

        # Write to code file
        if codeFileName is not None:
            with open(codeFileName, 'w') as codeFile:
                codeFile.write(listing(result.code) + '\n')

        print('=== PROGRAM OUTPUT ===', file=out)
        try:
            VM(result.code, stdin=stdin, stdout=out).run()
        except VMError as e:
            print(e, file=out)
            status = 2
        print('=== END OF PROGRAM OUTPUT ===\n', file=out)

    # Calculate and display compile time
    end = timer()
    print("Compile/Program Time: " + str(end - start) + "s\n", file=out)

    # End of program
    print("=== End of Compiler Report ===", file=out)
    return status
