## monkeyfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from .nodes import Identifier, BlockStatement

if TYPE_CHECKING:
    from .environment import Environment


class Object:
    type: ClassVar[str] = ''

    def inspect(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class Integer(Object):
    type: ClassVar[str] = 'INTEGER'
    value: int

    def inspect(self) -> str:
        return str(self.value)


class Boolean(Object):
    type: ClassVar[str] = 'BOOLEAN'
    __slots__ = ('value',)
    _singletons: ClassVar[dict] = {}

    def __new__(cls, value: bool):
        # Exactly two instances ever exist, so `is` can be used for comparisons.
        value = bool(value)
        if value not in cls._singletons:
            self = super().__new__(cls)
            object.__setattr__(self, 'value', value)
            cls._singletons[value] = self
        return cls._singletons[value]

    def __setattr__(self, name, value):
        raise AttributeError("Boolean values are immutable")

    def __repr__(self):
        return f"Boolean({self.value})"

    def inspect(self) -> str:
        return 'true' if self.value else 'false'


class Null(Object):
    type: ClassVar[str] = 'NULL'
    __slots__ = ()
    _singleton: ClassVar['Null | None'] = None

    def __new__(cls):
        if cls._singleton is None:
            cls._singleton = super().__new__(cls)
        return cls._singleton

    def __repr__(self):
        return "NULL"

    def inspect(self) -> str:
        return 'null'


# All checks for these must be done by identity.
TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


@dataclass(frozen=True)
class ReturnValue(Object):
    """Carries a `return`-ed value out of nested blocks up to the enclosing call or program."""
    type: ClassVar[str] = 'RETURN_VALUE'
    value: Object

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(frozen=True)
class Error(Object):
    """Runtime error as a value; once produced, every caller hands it straight back up."""
    type: ClassVar[str] = 'ERROR'
    message: str

    def inspect(self) -> str:
        return f"Error: {self.message}"


@dataclass(eq=False)
class Function(Object):
    type: ClassVar[str] = 'FUNCTION'
    parameters: tuple[Identifier, ...]
    body: BlockStatement
    env: 'Environment' = field(repr=False)

    def inspect(self) -> str:
        return f"fn({', '.join(str(p) for p in self.parameters)}) {self.body}"


def native_bool(value: bool) -> Boolean:
    return TRUE if value else FALSE

def is_abrupt(value: Object | None) -> bool:
    """Errors and pending returns both stop the enclosing expression and travel outward untouched."""
    return isinstance(value, (Error, ReturnValue))

def is_truthy(value: Object | None) -> bool:
    return value is not FALSE and value is not NULL and value is not None
