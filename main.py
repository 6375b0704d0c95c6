from rich.pretty import pprint

from simpleargs import *

__prog__ = "copy"

program = Program(usage="copy [-v] -i <file> [-o <file>] [pattern]")
program.argument("-i", "--input", description="file to read").requires_value().single_value().require()
program.argument("-o", "--output", description="file to write").default("out.txt")
program.argument("-v", "--verbose", description="chatty output").help("Print every copied line.")
program.argument("pattern", description="only copy matching lines").takes_value()


if __name__ == '__main__':
    try:
        program.parse()
    except InvalidInputError as fault:
        program.report(fault)
        raise SystemExit(2)

    if not (program.program_help_requested or program.argument_help_requested):
        pprint(list(program))
