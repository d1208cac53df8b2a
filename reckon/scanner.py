"""
Lexical analysis: chop expression text into tokens, one at a time, on demand.

The patterns compile (once, on first use) into a DFA by way of booze-tools.
Scanning is longest-match; where two patterns match the same text, the one
declared first wins. That is how a well-formed number beats the catch-all
"malformed number" patterns declared after it, while anything longer than a
well-formed number (say, "1..2" or "1e+") falls to the catch-all.
"""
from typing import NamedTuple, Optional
from boozetools.scanning.miniscan import Definition
from boozetools.scanning.engine import IterableScanner
from .diagnostics import ExpressionError, SYNTAX, complaint
from .numeric import DECIMAL, HEX, SCIENTIFIC

NUMBER = "number"
NAME = "name"
OPERATOR = "operator"
LPAREN = "("
RPAREN = ")"
COMMA = ","
END = "<END>"

MALFORMED = "malformed"
STRAY = "stray"

class Token(NamedTuple):
	kind: str
	text: str
	start: int
	form: Optional[str] = None   # Only numbers have a form.

	def width(self): return max(1, len(self.text))

	def describe(self):
		return "end of expression" if self.kind == END else repr(self.text)

class Lexicon(Definition):
	def on_stuck(self, yy:IterableScanner):
		# Keep going; the Scanner complains when (and if) this token gets pulled.
		yy.token(STRAY, Token(STRAY, yy.match(), yy.left))

def _token(kind:str, form:str=None):
	def action(yy:IterableScanner):
		yy.token(kind, Token(kind, yy.match(), yy.left, form))
	return action

LEXICON = Lexicon("Arithmetic Expressions")

LEXICON.ignore(r'\s+')
LEXICON.on(r'0[xX]{xdigit}+')(_token(NUMBER, HEX))
LEXICON.on(r'\d+(\.\d*)?|\.\d+')(_token(NUMBER, DECIMAL))
LEXICON.on(r'(\d+(\.\d*)?|\.\d+)[eE][+\-]?\d+')(_token(NUMBER, SCIENTIFIC))
LEXICON.on(r'0[xX]\w*')(_token(MALFORMED))
LEXICON.on(r'[\d.]+([eE][+\-]?\d*)?')(_token(MALFORMED))
LEXICON.on(r'{alpha}{word}*')(_token(NAME))
LEXICON.on(r'\*\*|<<|>>|[+\-*/%\|\^\&~]')(_token(OPERATOR))
LEXICON.on(r'\(')(_token(LPAREN))
LEXICON.on(r'\)')(_token(RPAREN))
LEXICON.on(r',')(_token(COMMA))


class Scanner:
	"""
	Pulls tokens from the text as the parser asks for them, with one token of look-ahead.
	Once the text runs out, every request answers END.
	"""
	def __init__(self, text:str):
		self.text = text
		self._each = iter(LEXICON.scan(text))
		self._ahead = None

	def peek(self) -> Token:
		if self._ahead is None:
			self._ahead = self._pull()
		return self._ahead

	def next(self) -> Token:
		token = self.peek()
		self._ahead = None
		return token

	def _pull(self) -> Token:
		try: kind, token = next(self._each)
		except StopIteration: return Token(END, "", len(self.text))
		if kind == MALFORMED:
			raise self.error(SYNTAX, "malformed number %s"%token.text, token)
		if kind == STRAY:
			raise self.error(SYNTAX, "unexpected character %r"%token.text, token)
		return token

	def error(self, category:str, detail:str, token:Token) -> ExpressionError:
		return complaint(category, detail, self.text, token.start, token.width())

def tokenize(text:str) -> list[Token]:
	""" The whole token stream, END included. Mainly for tests and curiosity. """
	scanner = Scanner(text)
	tokens = [scanner.next()]
	while tokens[-1].kind != END:
		tokens.append(scanner.next())
	return tokens
