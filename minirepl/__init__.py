# minirepl language package
# This package provides a lexer, parser and tree-walking interpreter for
# a small line-oriented scripting language.
from .errors import ErrorLog, ParseError, RuntimeFault
from .environment import Environment
from .interpreter import Interpreter, run_source
from .lexer import tokenize
from .parser import parse
from .tokens import Token, TokenKind

__all__ = [
    'tokenize',
    'parse',
    'run_source',
    'Interpreter',
    'Environment',
    'ErrorLog',
    'ParseError',
    'RuntimeFault',
    'Token',
    'TokenKind',
]
