"""
The scanner: a booze-tools miniscan definition which turns text into tokens.

Keywords are scanned as words and then promoted by exact match.
Characters that fit no rule are set aside as strays; scanning carries on.
"""
import re
import sys
from typing import NamedTuple

from boozetools.scanning import miniscan
from boozetools.scanning.engine import IterableScanner
from .ontology import Token

KEYWORDS = frozenset(["let", "const", "var", "if", "else", "while", "print", "function"])

STRAY = "stray"

class _Definition(miniscan.Definition):
	""" Stray characters become tokens of their own instead of jamming the scanner. """
	def on_stuck(self, yy:IterableScanner):
		yy.token(STRAY, yy.slice())

_definition = _Definition("Kindling")

_definition.ignore(r'\s+')
_definition.ignore(r'\/\/.*')

@_definition.on(r'[\l_]\w*')
def scan_word(yy:IterableScanner):
	word = sys.intern(yy.match())
	yy.token(word if word in KEYWORDS else "name", yy.slice())

@_definition.on(r'\d[\d\.]*')
def scan_number(yy:IterableScanner):
	yy.token("number", yy.slice())

@_definition.on(r'"[^"]*"')
def scan_string(yy:IterableScanner):
	yy.token("string", yy.slice())

@_definition.on(r'"[^"]*')
def scan_unterminated_string(yy:IterableScanner):
	# Runs to the end of the text: there is no closing quote to find.
	yy.token("string", yy.slice())

@_definition.on(r'==|&&|\|\||[\+\-\*\/=<>\(\)\{\}\[\];,:]')
def scan_punctuation(yy:IterableScanner):
	yy.token(sys.intern(yy.match()), yy.slice())


class Scan(NamedTuple):
	tokens: list[Token]
	strays: list[Token]

def scan(text:str) -> Scan:
	tokens, strays = [], []
	for kind, where in _definition.scan(text):
		token = Token(kind, text[where], where)
		(strays if kind == STRAY else tokens).append(token)
	return Scan(tokens, strays)

###############################################################################

_NUMERIC_PREFIX = re.compile(r'\d+(\.\d+)?')

def number_value(text:str) -> float:
	"""
	Only the leading digits[.digits] part counts: "1.2.3" reads as 1.2,
	and "7." reads as 7. Malformed numbers are not rejected.
	"""
	return float(_NUMERIC_PREFIX.match(text).group())

def string_value(text:str) -> str:
	""" Strip the quotes; an unterminated string has only the opening one. """
	if len(text) > 1 and text.endswith('"'): return text[1:-1]
	return text[1:]
