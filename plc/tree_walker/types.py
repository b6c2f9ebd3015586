"""
This module aims to express an interface agreement
between the evaluator and various kinds of data.

Basic primitive values play themselves:
NIL is None, BOOLEAN is bool, INTEGER is int, DECIMAL is Decimal,
STRING is str, and CHARACTER is the str subclass syntax.Char.
Records and iterables need a little more help; see values.py.
"""
from decimal import Decimal
from typing import Sequence, Union
from ..space import Scope
from ..syntax import Char

NATIVE_DATA = Union[None, bool, int, Decimal, str, Char]

STRICT_VALUE = Union[NATIVE_DATA, "Record", "IntegerIterable"]
ARGS = Sequence[STRICT_VALUE]
ENV = Scope
