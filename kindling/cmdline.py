"""
This is an interpreter for the Kindling scripting language.

{0}

For example:

    kindling program.kl

will run program.kl if possible, or else try to explain why not.

    kindling -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="kindling",
	description="Interpreter for the Kindling scripting language.",
)
parser.add_argument("program", help="path to a script, such as hello.kl")
parser.add_argument('-c', "--check", action="store_true", help="Check the program's syntax but do not actually execute the program.")
parser.add_argument('-p', "--pretty", action="store_true", help="Print the program in canonical layout instead of running it.")
parser.add_argument('-v', "--verbose", action="count", help="Say what's happening on the way.")
parser.add_argument('-t', "--by-time", action="store_true", help="Run ready deferred tasks earliest-first rather than in the order they were deferred.")
parser.add_argument("--virtual-time", action="store_true", help="Let deferred tasks wait on a simulated clock rather than the real one.")

def run(args):
	from .diagnostics import Report, KindlingError
	from .tree_walker.executive import Engine
	from .tree_walker.scheduler import ManualClock
	path = Path(args.program)
	report = Report(verbose=args.verbose, filename=str(path))
	clock = ManualClock() if args.virtual_time else None
	engine = Engine(clock=clock, by_time=args.by_time, report=report)
	try: text = path.read_text()
	except OSError as ex:
		print("Could not read %s: %s" % (path, ex.strerror or ex), file=sys.stderr)
		return 1
	if args.check or args.pretty:
		try: program = engine.parse(text)
		except KindlingError as ex:
			report.error(ex)
			report.complain_to_console()
			return 1
		report.complain_to_console()
		if args.pretty:
			from .pretty import unparse
			print(unparse(program), end="")
		else:
			print("Looks plausible to me.", file=sys.stderr)
		return
	outcome = engine.run(text)
	report.complain_to_console()
	if not outcome.ok:
		return 1

def main():
	if len(sys.argv) > 1:
		sys.exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
