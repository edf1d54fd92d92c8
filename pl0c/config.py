############################################################
# Global settings for the PL/0 compiler                    #
# Values are read when used, so the driver (or a test)     #
# may override them before compiling/running               #
############################################################

# Number of integer slots in the virtual machine's stack
STACK_SIZE = 1024

# DL - SL - RA slots at the base of every call frame
FRAME_HEADER_SIZE = 3

# Printed between the values of one write(...) statement
WRITE_SEPARATOR = " "

# Separator line for report sections
SEP = "=" * 60

# Marker used when inserting diagnostics into the list file
LIST_MARKER = "     <<<< "
