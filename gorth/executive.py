"""
This is the overall control for the run-time: it walks the token stream,
keeps the operand stack, and looks up variables when operators want their values.
"""
from typing import Callable, Iterable, Optional, Sequence
from boozetools.support.foundation import Visitor
from . import runtime, ontology
from .ontology import Value
from .syntax import OpCode, SPELLING, Token, Literal, Operator, Identifier, Declaration
from .space import VariableTable
from .stacking import OperandStack, MAX_STACK_SIZE, ITEM
from .front_end import tokenize
from .diagnostics import GorthError, TypeMismatch, UnknownOperator, UnconsumedStack, ConstReassignment, Tracer

OBSERVER = Callable[[Token, Sequence[ITEM], Sequence[ITEM]], None]

class Engine(Visitor):
	"""
	One engine per program run. It owns its stack and its variable table outright;
	the front-end's table is handed over, not shared.
	"""
	stack: OperandStack
	variables: VariableTable

	def __init__(
			self, debug:bool=False, strict:bool=False, *,
			variables:VariableTable=None,
			max_stack:int=MAX_STACK_SIZE,
			observer:Optional[OBSERVER]=None,
			emit:Callable[[str], None]=print,
	):
		self.debug = debug
		self.strict = strict
		self.stack = OperandStack(max_stack)
		self.variables = VariableTable() if variables is None else variables
		if observer is None and debug: observer = Tracer()
		self.observer = observer
		self.emit = emit

	# The basic stack access that everything else is built from:

	def push(self, item:ITEM): self.stack.push(item)
	def pop(self) -> ITEM: return self.stack.pop()
	def peek(self) -> ITEM: return self.stack.peek()
	def snapshot(self) -> list[ITEM]: return self.stack.snapshot()

	def resolve(self, item:ITEM) -> Value:
		""" Identifiers become whatever their variable holds right now. """
		if isinstance(item, Identifier):
			return self.variables.value_of(item.name, item.span)
		return item

	def fetch(self) -> Value:
		return self.resolve(self.pop())

	# The main loop:

	def execute(self, tokens:Iterable[Token]):
		for token in tokens:
			before = self.snapshot() if self.debug else None
			try:
				self.visit(token)
			except GorthError as ex:
				ex.at(token)
				if ex.stack is None: ex.stack = self.snapshot()
				raise
			if self.debug:
				self.observer(token, before, self.snapshot())
		if self.strict and self.stack:
			raise UnconsumedStack(self.snapshot())

	def visit_Literal(self, token:Literal):
		self.push(token.value)

	def visit_Identifier(self, token:Identifier):
		self.push(token)

	def visit_Declaration(self, token:Declaration):
		self.variables.lookup(token.name, token.span)

	def visit_Operator(self, token:Operator):
		try: semantic = OPERATIONS[token.code]
		except KeyError:
			raise UnknownOperator("unknown operator %r" % (token.code,)) from None
		with self.stack.transaction():
			semantic(self)


###############################################################################
#
#  Each operation gets the engine and does its own popping and pushing.
#

def _binary(fn:Callable[[Value, Value], Value]):
	def operate(engine:Engine):
		rhs = engine.fetch()
		lhs = engine.fetch()
		engine.push(fn(lhs, rhs))
	return operate

def _step(code:OpCode, fn:Callable[[Value], Value]):
	"""
	A literal operand gets a fresh result pushed. A variable operand
	gets updated where it lives, and nothing goes on the stack.
	"""
	def operate(engine:Engine):
		item = engine.pop()
		if isinstance(item, Identifier):
			variable = engine.variables.lookup(item.name, item.span)
			if variable.is_const:
				raise ConstReassignment("cannot apply %s to const variable %s" % (SPELLING[code], item.name), item.span)
			engine.variables.assign(item.name, fn(variable.value), item.span)
		else:
			engine.push(fn(item))
	return operate

def _swap(engine:Engine):
	top = engine.pop()
	under = engine.pop()
	engine.push(top)
	engine.push(under)

def _dup(engine:Engine):
	engine.push(engine.peek())

def _drop(engine:Engine):
	engine.pop()

def _rot(engine:Engine):
	engine.stack.need(3, SPELLING[OpCode.ROT])
	c = engine.pop()
	b = engine.pop()
	a = engine.pop()
	engine.push(b)
	engine.push(c)
	engine.push(a)

def _dump(engine:Engine):
	engine.emit(ontology.render(engine.fetch()))

def _print(engine:Engine):
	engine.emit(ontology.render(engine.resolve(engine.peek())))

def _not(engine:Engine):
	engine.push(runtime.logical_not(engine.fetch()))

def _not_equal(engine:Engine):
	OPERATIONS[OpCode.EQUAL](engine)
	OPERATIONS[OpCode.NOT](engine)

def _assign(engine:Engine):
	value = engine.fetch()
	target = engine.pop()
	if not isinstance(target, Identifier):
		raise TypeMismatch("cannot assign %s to %s, which is not a variable" % (ontology.show(value), ontology.show(target)))
	engine.variables.assign(target.name, value, target.span)

OPERATIONS : dict[OpCode, Callable[[Engine], None]] = {
	**{code: _binary(fn) for code, fn in runtime.ARITHMETIC.items()},
	**{code: _step(code, fn) for code, fn in runtime.STEPS.items()},
	**{code: _binary(fn) for code, fn in runtime.COMPARISONS.items()},
	OpCode.SWAP: _swap,
	OpCode.DUP: _dup,
	OpCode.DROP: _drop,
	OpCode.ROT: _rot,
	OpCode.DUMP: _dump,
	OpCode.PRINT: _print,
	OpCode.NOT: _not,
	OpCode.NOT_EQUAL: _not_equal,
	OpCode.ASSIGN: _assign,
}

assert set(OPERATIONS) == set(OpCode), set(OpCode) - set(OPERATIONS)

###############################################################################

def execute(tokens:Iterable[Token], variables:VariableTable, strict:bool=False, max_stack:int=MAX_STACK_SIZE, **kwargs) -> Engine:
	""" Run a token stream against the table the front-end built; return the engine for inspection. """
	engine = Engine(strict=strict, variables=variables, max_stack=max_stack, **kwargs)
	engine.execute(tokens)
	return engine

def run(source:str, **kwargs) -> Engine:
	tokens, variables = tokenize(source)
	return execute(tokens, variables, **kwargs)
