"""
Everything that can go wrong while scanning, parsing, or reducing an expression
comes out as an ExpressionError. There is just the one type:
callers who care about the kind of trouble look at the message, which always
begins with one of the category prefixes below.

The Report class is for collaborators (like the command line) that evaluate
a batch of expressions and want to present all the trouble at the end.
"""
import sys, random
from typing import Optional
from boozetools.support.failureprone import SourceText, illustration

SYNTAX = "Syntax error"
TYPE = "Type error"
RUNTIME = "Runtime error"
CAPACITY = "Capacity error"

_CATEGORIES = {SYNTAX:"syntax", TYPE:"type", RUNTIME:"runtime", CAPACITY:"capacity"}

class TooManyIssues(Exception):
	pass

class Fault(Exception):
	"""
	Raised from places that know what went wrong but not where.
	The evaluator catches these and re-raises them as an ExpressionError
	pointing at the offending token.
	"""
	def __init__(self, category:str, detail:str):
		super().__init__(category, detail)
		self.category, self.detail = category, detail

class ExpressionError(ValueError):
	""" The one error type. Position is a character offset into the expression, if known. """
	def __init__(self, message:str, position:Optional[int]=None, expression:Optional[str]=None, width:int=1):
		super().__init__(message, position, expression)
		self.message = message
		self.position = position
		self.expression = expression
		self.width = max(1, width)

	def __str__(self): return self.message

	def category(self) -> str:
		return categorize(self)

	def illustrate(self, caption:str="here") -> str:
		""" The message, then the offending line of the expression with a caret under the trouble. """
		if self.expression is None or self.position is None:
			return self.message
		source = SourceText(self.expression)
		row, col = source.find_row_col(self.position)
		single_line = source.line_of_text(row)
		picture = illustration(single_line, col, self.width, prefix=' >>> ', caption=caption)
		return self.message + "\n" + picture

def complaint(category:str, detail:str, expression:Optional[str]=None, position:Optional[int]=None, width:int=1) -> ExpressionError:
	return ExpressionError("%s: %s"%(category, detail), position, expression, width)

def categorize(error:ExpressionError) -> str:
	""" Recover the broad kind of an error from its message: syntax, type, runtime, capacity, or unknown. """
	head = str(error).partition(":")[0]
	return _CATEGORIES.get(head, "unknown")

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]
	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', 'Drat',
		'Fiddlesticks', 'Good Grief', "Great Scott", 'Nuts', 'Rats',
	]
	resignations = [
		'That did not add up.',
		'The arithmetic has failed me.',
		'I cannot make these numbers behave.',
	]
	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects the errors from a batch of evaluations, for presentation all at once. """
	issues : list[tuple[str, ExpressionError]]

	def __init__(self, *, verbose:int=0, max_issues=10):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._max_issues = max_issues
		self.issues = []

	def ok(self): return not self.issues
	def sick(self): return bool(self.issues)

	def issue(self, error:ExpressionError, where:str=""):
		self.issues.append((where, error))
		if len(self.issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self.issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self.issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self.issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

def _bemoan(issues):
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for where, error in issues:
		print("  -"*20, file=sys.stderr)
		if where:
			print(where, file=sys.stderr)
		print(error.illustrate(), file=sys.stderr)
	sys.stderr.flush()
