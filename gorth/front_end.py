"""
Turn program text into a token stream.

The scanner does the splitting and classifying: quoted spans stay whole
(within one line); everything else breaks on white-space.
The interesting part is that declarations (/name value def) get resolved right here,
so the front-end hands over a variable table along with the tokens.
"""
from enum import Enum, auto
from pathlib import Path
from typing import Iterator, NamedTuple, Optional
from boozetools.scanning import miniscan
from boozetools.scanning.engine import IterableScanner
from . import ontology, syntax
from .ontology import Value
from .space import VariableTable
from .diagnostics import InvalidToken, VariableRedeclared, VariableNotDeclared

# Kinds of unit the scanner yields.
LITERAL = "literal"
DECLARATION = "declaration"
USAGE = "usage"
WORD = "word"

class Unit(NamedTuple):
	kind: str
	text: str
	span: slice
	value: Optional[Value] = None

def _unit(yy:IterableScanner, kind:str, value:Value=None):
	yy.token(kind, Unit(kind, yy.match(), yy.slice(), value))

SCANNER = miniscan.Definition("Gorth program text")
SCANNER.ignore(r'\s+')

@SCANNER.on(r'-?\d+')
def scan_integer(yy:IterableScanner):
	n = int(yy.match())
	if not ontology.INT64_MIN <= n <= ontology.INT64_MAX:
		raise InvalidToken("integer literal %s does not fit in 64 bits" % yy.match(), yy.slice())
	_unit(yy, LITERAL, ontology.integer(n))

@SCANNER.on(r'-?\d+\.\d+')
def scan_real(yy:IterableScanner): _unit(yy, LITERAL, ontology.real(float(yy.match())))

# Ranked, so that a closed quote ends the unit even if non-blanks follow.
@SCANNER.on(r'"[^"\n]*"', rank=1)
def scan_short_string(yy:IterableScanner): _unit(yy, LITERAL, ontology.text(yy.match()[1:-1]))

@SCANNER.on(r'true|false')
def scan_flag(yy:IterableScanner): _unit(yy, LITERAL, ontology.flag(yy.match() == "true"))

@SCANNER.on(r'\/[\l_]\w*')
def scan_declaration(yy:IterableScanner): _unit(yy, DECLARATION)

@SCANNER.on(r'_[\l_]\w*')
def scan_usage(yy:IterableScanner): _unit(yy, USAGE)

# Operators, keywords, and garbage. Ties go to the rules above.
@SCANNER.on(r'\S+')
def scan_word(yy:IterableScanner): _unit(yy, WORD)

def split_units(text:str) -> Iterator[Unit]:
	for kind, unit in SCANNER.scan(text):
		yield unit

def strip_comments(text:str) -> str:
	""" Blank out comment lines but keep the line structure, so row/column figures stay honest. """
	return "\n".join("" if line.lstrip().startswith("#") else line for line in text.split("\n"))

def read_program(path:Path) -> str:
	return strip_comments(Path(path).read_text(encoding="utf-8"))

class LexState(Enum):
	NORMAL = auto()
	DECLARING = auto()   # Saw /name; waiting on the first value.
	DECLARED = auto()    # Saw the value; may be closed with def or const.

class Lexer:
	"""
	Carries the declaration state through a single pass over the units.
	The pending slot names the variable being declared (DECLARING)
	or the one most recently completed (DECLARED).
	"""
	def __init__(self):
		self.tokens = []
		self.variables = VariableTable()
		self.state = LexState.NORMAL
		self.pending: Optional[Unit] = None

	def feed(self, unit:Unit):
		if self.state is LexState.DECLARING: return self._initial_value(unit)
		if self.state is LexState.DECLARED:
			if unit.text == syntax.DEFINE: return self._close()
			if unit.text == syntax.CONST:
				self.variables.lookup(self._pending_name()).freeze()
				return self._close()
			self._close()
		self._normal(unit)

	def finish(self):
		if self.state is LexState.DECLARING:
			name = self._pending_name()
			raise InvalidToken("declaration of %s never received a value" % name, self.pending.span)
		self._close()

	def _pending_name(self) -> str:
		return self.pending.text[1:]

	def _close(self):
		self.state = LexState.NORMAL
		self.pending = None

	def _normal(self, unit:Unit):
		if unit.kind == DECLARATION:
			name = unit.text[1:]
			if name in self.variables:
				raise VariableRedeclared("variable %s is already declared" % name, unit.span)
			self.state, self.pending = LexState.DECLARING, unit
		elif unit.kind == LITERAL:
			self.tokens.append(syntax.Literal(unit.value, unit.span))
		elif unit.kind == USAGE:
			name = unit.text[1:]
			if name not in self.variables:
				raise VariableNotDeclared("variable %s is not declared" % name, unit.span)
			self.tokens.append(syntax.Identifier(name, unit.span))
		elif unit.text in (syntax.DEFINE, syntax.CONST):
			raise InvalidToken("%s must directly follow a declared value" % unit.text, unit.span)
		elif unit.text in syntax.OPERATORS:
			self.tokens.append(syntax.Operator(syntax.OPERATORS[unit.text], unit.span))
		else:
			raise InvalidToken("invalid token %s" % unit.text, unit.span)

	def _initial_value(self, unit:Unit):
		if unit.kind != LITERAL:
			pattern = "declaration of %s needs a literal value, not %s"
			raise InvalidToken(pattern % (self._pending_name(), unit.text), unit.span)
		name = self._pending_name()
		span = slice(self.pending.span.start, unit.span.stop)
		self.variables.declare(name, unit.value, span)
		self.tokens.append(syntax.Declaration(name, span))
		self.state = LexState.DECLARED


def tokenize(text:str) -> tuple[list[syntax.Token], VariableTable]:
	""" All or nothing: the first bad unit aborts the whole affair. """
	lexer = Lexer()
	for unit in split_units(text):
		lexer.feed(unit)
	lexer.finish()
	return lexer.tokens, lexer.variables
