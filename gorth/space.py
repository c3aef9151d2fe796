"""
Gorth's notion of a name-space: one flat table of variables per program run.
"""
from boozetools.support.symtab import NameSpace, NoSuchSymbol, SymbolAlreadyExists
from .ontology import Kind, Value, show
from .diagnostics import VariableRedeclared, UndeclaredVariable, ConstReassignment, TypeMismatch

class Variable:
	""" The kind is fixed by the first value. Once const, always const. """
	name: str
	kind: Kind
	value: Value
	is_const: bool

	def __init__(self, name:str, value:Value, is_const:bool=False):
		self.name = name
		self.kind = value.kind
		self.value = value
		self.is_const = is_const

	def freeze(self): self.is_const = True

	def __eq__(self, other):
		return isinstance(other, Variable) and (self.name, self.kind, self.value, self.is_const) == (other.name, other.kind, other.value, other.is_const)

	def __repr__(self):
		return "<%s %s:%s = %s>" % ("const" if self.is_const else "var", self.name, self.kind, show(self.value))


class VariableTable(NameSpace[Variable]):
	"""
	Lightly enhanced name-space: it translates the symbol-table complaints
	into Gorth's own error kinds, and it polices assignment.
	"""
	def __init__(self, place="program"):
		super().__init__(place=place)

	def declare(self, name:str, value:Value, span:slice=None) -> Variable:
		variable = Variable(name, value)
		try: self[name] = variable
		except SymbolAlreadyExists:
			raise VariableRedeclared("variable %s is already declared" % name, span) from None
		return variable

	def lookup(self, name:str, span:slice=None) -> Variable:
		try: return self[name]
		except NoSuchSymbol:
			raise UndeclaredVariable("variable %s is not declared" % name, span) from None

	def value_of(self, name:str, span:slice=None) -> Value:
		return self.lookup(name, span).value

	def assign(self, name:str, value:Value, span:slice=None) -> Variable:
		variable = self.lookup(name, span)
		if variable.is_const:
			raise ConstReassignment("cannot reassign const variable %s" % name, span)
		if value.kind is not variable.kind:
			pattern = "cannot assign %s value %s to %s variable %s"
			raise TypeMismatch(pattern % (value.kind, show(value), variable.kind, name), span)
		variable.value = value
		return variable

	def names(self): return self.local.keys()
	def __len__(self): return len(self.local)
