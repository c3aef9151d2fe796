"""
This is an interpreter for the Gorth programming language.

{0}

For example:

    gorth program.gorth

will run program.gorth if possible, or else try to explain why not.

    gorth program.gorth -s -d

will insist the stack ends up empty, and show the stack around every step.
"""
import sys, argparse, time
from pathlib import Path

SUFFIX = ".gorth"

def stack_size(text:str) -> int:
	n = int(text)
	if n < 0: raise argparse.ArgumentTypeError("the stack size cannot be negative: %d" % n)
	return n

parser = argparse.ArgumentParser(
	prog="gorth",
	description="Interpreter for the Gorth stack-based programming language.",
)
parser.add_argument("program", help="try examples/hello_world.gorth for example.")
parser.add_argument('-d', "--debug", action="store_true", help="Show the stack before and after every token.")
parser.add_argument('-s', "--strict", action="store_true", help="Complain if anything is left on the stack at the end.")
parser.add_argument('-m', "--max-stack", type=stack_size, default=None, metavar="N", help="Limit the stack to N items.")
parser.add_argument('-c', "--check", action="store_true", help="Read the program but do not actually execute it.")

def run(args) -> int:
	from .diagnostics import Report, GorthError, Tracer
	from .front_end import read_program, tokenize
	from .executive import Engine
	from .stacking import MAX_STACK_SIZE
	report = Report(verbose=args.debug)
	path = Path(args.program)
	if path.suffix != SUFFIX:
		print("File %s is not a %s file" % (path, SUFFIX), file=sys.stderr)
		return 1
	try: text = read_program(path)
	except OSError as ex:
		print("Something went pear-shaped while trying to read %s: %s" % (path, ex.strerror or ex), file=sys.stderr)
		return 1
	report.read(path, text)
	try:
		tokens, variables = tokenize(text)
		if args.check:
			print("Looks plausible to me.", file=sys.stderr)
			return 0
		max_stack = MAX_STACK_SIZE if args.max_stack is None else args.max_stack
		tracer = Tracer(report.source)
		engine = Engine(args.debug, args.strict, variables=variables, max_stack=max_stack, observer=tracer)
		if args.debug: tracer.bookend("start", engine.snapshot())
		start = time.perf_counter()
		engine.execute(tokens)
		elapsed = time.perf_counter() - start
	except GorthError as ex:
		report.issue(ex)
		print("Program simulation failed", file=sys.stderr)
		report.complain_to_console()
		return 1
	if args.debug: tracer.bookend("end", engine.snapshot())
	report.info("Program simulation completed in %f seconds" % elapsed)
	return 0

def main(argv=None):
	argv = sys.argv[1:] if argv is None else argv
	if argv:
		return run(parser.parse_args(argv))
	else:
		print(__doc__.strip().format(parser.format_usage()))
		return 0

if __name__ == '__main__':
	sys.exit(main())
