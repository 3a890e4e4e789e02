"""Sugiru interpreter.

Basic program flow:
    1. Lexer: turns source text into Tokens on demand (sugiru/lang/lexical.py)
    2. Parser: Pratt parser that builds a syntax tree from those tokens, collecting errors instead of stopping at the
       first one (sugiru/lang/parser.py, sugiru/lang/syntax.py)
    3. Evaluator: walks the tree and reduces it to a runtime value; no bytecode (sugiru/lang/evaluator.py)

Session and Shell glue those together for files and the interactive prompt.
"""

from sugiru.lang.evaluator import evaluate
from sugiru.lang.lexical import Lexer
from sugiru.lang.parser import Parser

__all__ = ["Lexer", "Parser", "evaluate"]
