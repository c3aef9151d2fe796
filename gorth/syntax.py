"""
The set of tokens the front-end produces and the executive consumes.
Each token remembers the slice of program text it came from, so that
complaints can point at it. Equality ignores that slice.
"""
from enum import Enum, auto
from typing import Optional
from .ontology import Value, show

class OpCode(Enum):
	# Arithmetic
	ADD = auto()
	SUB = auto()
	MUL = auto()
	DIV = auto()
	MOD = auto()
	EXP = auto()
	INC = auto()
	DEC = auto()
	NEG = auto()
	# Stack manipulation
	SWAP = auto()
	DUP = auto()
	DROP = auto()
	DUMP = auto()
	PRINT = auto()
	ROT = auto()
	# Logical
	AND = auto()
	OR = auto()
	NOT = auto()
	EQUAL = auto()
	NOT_EQUAL = auto()
	EQUAL_TYPE = auto()
	# Relational
	GREATER = auto()
	LESS = auto()
	GREATER_EQUAL = auto()
	LESS_EQUAL = auto()
	# Variables
	ASSIGN = auto()

OPERATORS = {
	"+": OpCode.ADD,
	"-": OpCode.SUB,
	"*": OpCode.MUL,
	"/": OpCode.DIV,
	"%": OpCode.MOD,
	"^": OpCode.EXP,
	"++": OpCode.INC,
	"--": OpCode.DEC,
	"neg": OpCode.NEG,
	"swap": OpCode.SWAP,
	"dup": OpCode.DUP,
	"drop": OpCode.DROP,
	"dump": OpCode.DUMP,
	"print": OpCode.PRINT,
	"rot": OpCode.ROT,
	"&&": OpCode.AND,
	"||": OpCode.OR,
	"!": OpCode.NOT,
	"==": OpCode.EQUAL,
	"!=": OpCode.NOT_EQUAL,
	"===": OpCode.EQUAL_TYPE,
	">": OpCode.GREATER,
	"<": OpCode.LESS,
	">=": OpCode.GREATER_EQUAL,
	"<=": OpCode.LESS_EQUAL,
	"=": OpCode.ASSIGN,
}

SPELLING = {code: word for word, code in OPERATORS.items()}

DEFINE = "def"
CONST = "const"

class Token:
	span: Optional[slice] = None

	def _key(self): raise NotImplementedError(type(self))
	def __eq__(self, other):
		return type(self) is type(other) and self._key() == other._key()
	def __hash__(self): return hash((type(self), self._key()))

class Literal(Token):
	def __init__(self, value:Value, span:slice=None):
		assert isinstance(value, Value), value
		self.value, self.span = value, span
	def _key(self): return self.value
	def __repr__(self): return "<lit %s>" % show(self.value)

class Operator(Token):
	def __init__(self, code:OpCode, span:slice=None):
		self.code, self.span = code, span
	def _key(self): return self.code
	def __repr__(self): return "<op %s>" % SPELLING[self.code]

class Identifier(Token):
	""" Stands for a variable; the executive looks the name up only when an operator needs the value. """
	def __init__(self, name:str, span:slice=None):
		assert isinstance(name, str)
		self.name, self.span = name, span
	def _key(self): return self.name
	def __repr__(self): return "<ref _%s>" % self.name
	def __str__(self): return "_" + self.name

class Declaration(Identifier):
	""" Marks where a declaration completed. Nothing gets pushed for it. """
	def __repr__(self): return "<dfn /%s>" % self.name
	def __str__(self): return "/" + self.name

def show_item(item) -> str:
	""" Stack items are either values or identifiers. """
	return str(item) if isinstance(item, Identifier) else show(item)

def show_stack(items) -> str:
	return "[%s]" % ", ".join(map(show_item, items))
