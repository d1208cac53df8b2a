"""
Recursive descent over the token stream, folding values as it goes.

There is no syntax tree. A primary (literal, name, call, parenthesized
sub-expression, or unary operation) produces a value the moment it is parsed,
and each run of binary operators between primaries is folded by a Reducer.
The parser therefore IS the evaluator.

Grammar, from tightest to loosest binding:

	primary:  number | name | name ( expr ) | ( expr ) | + primary | - primary | ~ primary
	**        (right-associative)
	* / %
	+ -
	<< >>
	&
	^
	|

Operators the numeric type does not support are refused as soon as they are read.
"""
from typing import Optional
from . import numeric
from .diagnostics import Fault, ExpressionError, SYNTAX, TYPE, RUNTIME, CAPACITY, complaint
from .numeric import NumericType
from .reducer import Reducer, BINDING
from .scanner import Scanner, Token, NUMBER, NAME, OPERATOR, LPAREN, RPAREN, COMMA, END
from .symbols import SymbolTable, Variable, Function

# Parentheses, unary operators, and calls each nest one primary deeper.
# A nested call costs five stack frames, so this stays well inside the
# interpreter's default recursion limit.
MAX_NESTING = 100

class Calculator:
	"""
	Evaluates expressions in one numeric type, against its own symbol table.
	Not safe to share between threads: use one per thread, lock around it, or clone a template.
	"""

	def __init__(self, numeric_type:NumericType=numeric.DEFAULT, symbols:Optional[SymbolTable]=None):
		self.numeric = numeric_type
		if symbols is None:
			symbols = SymbolTable(numeric_type)
		if symbols.numeric is not numeric_type:
			raise ValueError("Symbol table is for %s, not %s"%(symbols.numeric, numeric_type))
		self.symbols = symbols

	def set(self, name:str, value):
		""" Register a variable value, or a single-argument function if `value` is callable. """
		self.symbols.set(name, value)

	def get(self, name:str):
		return self.symbols.get(name)

	def resolve(self, name:str):
		return self.symbols.resolve(name)

	def clone(self) -> "Calculator":
		""" A separate calculator that starts out knowing everything this one does. """
		return Calculator(self.numeric, self.symbols.copy())

	def evaluate(self, text:str):
		return _Evaluation(self.numeric, self.symbols, text).run()

def evaluate(text:str, numeric_type:NumericType=numeric.DEFAULT):
	""" One-shot evaluation with an empty symbol table. """
	return Calculator(numeric_type).evaluate(text)


class _Evaluation:
	""" The state of reading one expression. """

	def __init__(self, numeric_type:NumericType, symbols:SymbolTable, text:str):
		self.numeric = numeric_type
		self.symbols = symbols
		self.text = text
		self.scanner = Scanner(text)
		self.depth = 0

	def run(self):
		first = self.scanner.peek()
		if first.kind == END:
			raise self._error(SYNTAX, "empty expression", first)
		value = self.expression()
		token = self.scanner.peek()
		if token.kind == RPAREN:
			raise self._error(SYNTAX, "unmatched ')'", token)
		if token.kind != END:
			raise self._unexpected(token)
		return value

	def expression(self):
		reducer = Reducer(self._apply)
		reducer.operand(self.primary())
		while True:
			token = self.scanner.peek()
			if token.kind != OPERATOR or token.text not in BINDING:
				return reducer.result()
			self.scanner.next()
			self._check_supported(token)
			reducer.operator(token.text, token)
			reducer.operand(self.primary())

	def primary(self):
		self.depth += 1
		try: return self._primary()
		finally: self.depth -= 1

	def _primary(self):
		token = self.scanner.next()
		if self.depth > MAX_NESTING:
			raise self._error(CAPACITY, "expression nested too deeply", token)
		kind = token.kind
		if kind == NUMBER:
			return self._literal(token)
		if kind == NAME:
			return self._name(token)
		if kind == LPAREN:
			value = self.expression()
			self._close(token)
			return value
		if kind == OPERATOR and token.text in numeric.UNARY:
			self._check_supported(token)
			operand = self.primary()
			method = getattr(self.numeric, numeric.UNARY[token.text])
			return method(operand)
		if kind == END:
			raise self._error(SYNTAX, "missing operand at end of expression", token)
		raise self._unexpected(token)

	def _literal(self, token:Token):
		try: return self.numeric.literal(token.text, token.form)
		except Fault as ex: raise self._error(ex.category, ex.detail, token) from None

	def _name(self, token:Token):
		name = token.text
		entry = self.symbols.resolve(name)
		if self.scanner.peek().kind == LPAREN:
			opening = self.scanner.next()
			if isinstance(entry, Function):
				return self._call(token, entry, opening)
			elif entry is None:
				raise self._error(RUNTIME, "Undefined function '%s'"%name, token)
			else:
				raise self._error(RUNTIME, "'%s' is a variable, not a function"%name, token)
		if isinstance(entry, Variable):
			return entry.value
		elif entry is None:
			raise self._error(RUNTIME, "Undefined variable '%s'"%name, token)
		else:
			raise self._error(RUNTIME, "'%s' is a function; call it as %s(...)"%(name, name), token)

	def _call(self, token:Token, entry:Function, opening:Token):
		if self.scanner.peek().kind == RPAREN:
			raise self._arity(token)
		argument = self.expression()
		if self.scanner.peek().kind == COMMA:
			raise self._arity(token)
		self._close(opening)
		try: return self.numeric.accept(entry.fn(argument))
		except Fault as ex:
			detail = "function '%s': %s"%(token.text, ex.detail)
			raise self._error(ex.category, detail, token) from None

	def _close(self, opening:Token):
		token = self.scanner.next()
		if token.kind == RPAREN:
			return
		if token.kind == END:
			raise self._error(SYNTAX, "missing ')' to match this '('", opening)
		raise self._unexpected(token)

	def _check_supported(self, token:Token):
		if not self.numeric.supports(token.text):
			detail = "operator '%s' needs an integral type, not %s"%(token.text, self.numeric)
			raise self._error(TYPE, detail, token)

	def _apply(self, glyph:str, lhs, rhs, token:Token):
		method = getattr(self.numeric, numeric.BINARY[glyph])
		try: return method(lhs, rhs)
		except Fault as ex: raise self._error(ex.category, ex.detail, token) from None

	def _arity(self, token:Token) -> ExpressionError:
		return self._error(SYNTAX, "function '%s' takes exactly one argument"%token.text, token)

	def _unexpected(self, token:Token) -> ExpressionError:
		return self._error(SYNTAX, "unexpected token %s"%token.describe(), token)

	def _error(self, category:str, detail:str, token:Token) -> ExpressionError:
		return complaint(category, detail, self.text, token.start, token.width())
