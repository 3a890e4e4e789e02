"""Runtime values produced by the evaluator, and the Environment that binds names to them.

Values are immutable once built. TRUE, FALSE and NULL are created once and shared by every evaluation: compare them
with `is`.
"""

from abc import ABC, abstractmethod


INTEGER = "INTEGER"
BOOLEAN = "BOOLEAN"
NULL_TYPE = "NULL"
FUNCTION = "FUNCTION"
RETURN_VALUE = "RETURN_VALUE"


class Value(ABC):
    """Superclass of all runtime values."""
    __slots__ = ()

    @abstractmethod
    def type(self):
        """Short name of this value's type, used in error messages."""

    @abstractmethod
    def inspect(self):
        """Text shown for this value in the shell."""

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self):
        return f"{type(self).__name__}({self.inspect()})"

    def __str__(self):
        return self.inspect()


class Integer(Value):
    __slots__ = ("value",)

    def __init__(self, value):
        object.__setattr__(self, "value", value)

    def type(self):
        return INTEGER

    def inspect(self):
        return str(self.value)

    def __eq__(self, other):
        return isinstance(other, Integer) and other.value == self.value

    def __hash__(self):
        return hash(self.value)


class Boolean(Value):
    """Only ever instantiated twice, for TRUE and FALSE."""
    __slots__ = ("value",)

    def __init__(self, value):
        object.__setattr__(self, "value", value)

    def type(self):
        return BOOLEAN

    def inspect(self):
        return "true" if self.value else "false"


class Null(Value):
    __slots__ = ()

    def type(self):
        return NULL_TYPE

    def inspect(self):
        return "null"


class ReturnValue(Value):
    """Carries the value of a return statement out of nested blocks. Never escapes a Program or a function call."""
    __slots__ = ("value",)

    def __init__(self, value):
        object.__setattr__(self, "value", value)

    def type(self):
        return RETURN_VALUE

    def inspect(self):
        return self.value.inspect()


class Function(Value):
    """Closure: a FunctionLiteral's parameters and body plus the Environment it was defined in."""
    __slots__ = ("parameters", "body", "env")

    def __init__(self, parameters, body, env):
        object.__setattr__(self, "parameters", tuple(parameters))
        object.__setattr__(self, "body", body)
        object.__setattr__(self, "env", env)

    def type(self):
        return FUNCTION

    def inspect(self):
        params = ", ".join(str(param) for param in self.parameters)
        return f"fn({params}) {{\n{self.body}\n}}"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(value):
    """Maps a Python bool onto the shared TRUE/FALSE instances."""
    return TRUE if value else FALSE


class Environment:
    """Name -> Value bindings for one scope, with a link to the enclosing scope (None at top level)."""

    def __init__(self, outer=None):
        self.store = {}
        self.outer = outer

    @classmethod
    def enclosed(cls, outer):
        """New scope whose lookups fall back to outer. Used for each function call."""
        return cls(outer)

    def get(self, name):
        """Looks name up through the chain of scopes. Returns None if it is unbound everywhere."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name, value):
        """Binds name in this scope (never an outer one) and returns value."""
        self.store[name] = value
        return value

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        return f"Environment(store={self.store}, outer={'...' if self.outer else None})"
