"""
The generic machinery that everything needs,
without the specific methods corresponding to particular syntax.
"""

from ..ontology import Phrase
from ..diagnostics import KindlingError
from .types import VALUE, ENV


def evaluate(node:Phrase, frame:ENV) -> VALUE:
	try: fn = EVALUATE[type(node)]
	except KeyError: raise NotImplementedError(type(node), node)
	try: return fn(node, frame)
	except KindlingError as ex:
		raise ex.at(node)

EVALUATE = {}

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["node"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v
