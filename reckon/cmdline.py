"""
This evaluates arithmetic expressions from the command line.

{0}

For example:

    reckon "2 ** 3 ** 2" -t int

prints 512, and

    reckon -m -D x=0.5 "sin(x) ** 2 + cos(x) ** 2"

prints something very close to 1.0. Put -- before an expression that starts with a minus sign.

    reckon -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="reckon",
	description="Evaluate arithmetic expressions in a chosen numeric type.",
)
parser.add_argument("expression", nargs="*", help="expressions to evaluate, one result per line.")
parser.add_argument('-t', "--type", default="double", help="int8, int16, int32 (int), int64 (long), float32 (float), or float64 (double, the default).")
parser.add_argument('-D', "--define", action="append", default=[], metavar="NAME=EXPR", help="Define a variable before evaluating anything. May repeat.")
parser.add_argument('-m', "--math", action="store_true", help="Register the usual math functions and constants.")
parser.add_argument('-f', "--file", type=Path, help="Also evaluate each line of this file. Blank lines and #-comments are skipped.")
parser.add_argument('-v', "--verbose", action="count", help="Say more about what is going on, on stderr.")
parser.add_argument("--max-issues", type=int, default=10, help="Give up after this many errors.")

def run(args):
	from . import numeric, library
	from .diagnostics import Report, TooManyIssues, ExpressionError
	from .evaluator import Calculator
	try: numeric_type = numeric.lookup(args.type)
	except KeyError:
		parser.error("unknown numeric type %r"%args.type)
	report = Report(verbose=args.verbose, max_issues=args.max_issues)
	calculator = Calculator(numeric_type)
	report.info("Evaluating in", numeric_type)
	if args.math:
		library.install_math(calculator)
		report.info("Registered:", ", ".join(calculator.symbols.names()))
	try:
		for definition in args.define:
			name, _, text = definition.partition("=")
			try: calculator.set(name.strip(), calculator.evaluate(text))
			except ValueError as ex:
				report.issue(_as_expression_error(ex, text), "In the definition of %r:"%name)
		for where, text in _each_expression(args):
			try: value = calculator.evaluate(text)
			except ExpressionError as ex: report.issue(ex, where)
			else: print(numeric_type.render(value))
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	if report.sick():
		report.complain_to_console()
		return 1
	return 0

def _as_expression_error(ex, text):
	from .diagnostics import ExpressionError
	if isinstance(ex, ExpressionError): return ex
	return ExpressionError(str(ex), None, text)

def _each_expression(args):
	for index, text in enumerate(args.expression, 1):
		yield "Argument %d:"%index, text
	if args.file is not None:
		with open(args.file, "r", encoding="utf-8") as fh:
			for row, line in enumerate(fh, 1):
				text = line.strip()
				if text and not text.startswith("#"):
					yield "%s line %d:"%(args.file, row), text

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
