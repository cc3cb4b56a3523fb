"""
This module aims to express an interface agreement
between the evaluator and various kinds of data.

Basic values play themselves as the obvious Python objects.
Only functions need classes of their own (see values.py).
"""

from abc import ABC
from typing import Sequence, Union
from ..environment import InnerEnv


class KindlingValue(ABC):
	""" Root for classes that implement specialized run-time data structures """

NATIVE_DATA = Union[None, float, str, bool, list, dict]
VALUE = Union[NATIVE_DATA, KindlingValue]
ARGS = Sequence[VALUE]
ENV = InnerEnv

NULL = "null"
NUMBER = "number"
STRING = "string"
BOOL = "bool"
LIST = "list"
OBJECT = "object"
FUNCTION = "function"
NATIVE = "native"

_KINDS = {
	type(None): NULL,
	float: NUMBER,
	int: NUMBER,
	str: STRING,
	bool: BOOL,
	list: LIST,
	dict: OBJECT,
}

def kind_of(value:VALUE) -> str:
	""" Exactly one kind applies to every value the run-time can produce. """
	try: return _KINDS[type(value)]
	except KeyError: return value.kind()
