"""
This is an interpreter for a small imperative scripting language.

{0}

For example:

    plc program.plc

will run program.plc if possible, or else try to explain why not.

    plc -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="plc",
	description="Interpreter for a small imperative scripting language.",
)
parser.add_argument("program", help="try zoo/ok/hello.plc for example.")
parser.add_argument('-c', "--check", action="count", help="Check the program verbosely but do not actually execute the program.")
parser.add_argument('-v', "--verbose", action="store_true", help="Report progress through each stage.")

def run(args):
	from .diagnostics import Report
	from .pipeline import Program, Yuck
	report = Report(verbose=args.check or args.verbose)
	try:
		program = Program.from_file(Path.cwd() / args.program, report)
		if args.check:
			print("Looks plausible to me.", file=sys.stderr)
		else:
			program.run()
	except Yuck:
		assert report.sick()
		report.complain_to_console()
		return 1
	except OSError as ex:
		print("Could not read %s: %s" % (args.program, ex.strerror), file=sys.stderr)
		return 1
	return 0

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
