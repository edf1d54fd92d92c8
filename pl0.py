############################################################
# Main Program entry point                                 #
# Calls compile_file() from the pl0c package to compile    #
# and run a PL/0 program                                   #
############################################################

import sys
from pl0c.compiler import compile_file


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    # If number of CLI arguments don't match print usage
    # Else begin compilation
    if 1 <= len(args) <= 3:
        return compile_file(*args)  # Begin compiling
    print('Usage: python pl0.py <input file> [list file] [code file]\n'
          ' Only the input file is required; the list and code files are optional.\n'
          ' Example: python pl0.py tests/programs/sum.pl0')
    return 1


if __name__ == "__main__":
    sys.exit(main())
