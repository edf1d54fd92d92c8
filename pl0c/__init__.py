# PL/0 compiler: scanner, parser, translator and p-code virtual machine
