"""
sdb expression debugger package.

This package provides the expression evaluator (:mod:`sdb.expr`) and the small
interactive shell around it.  Use ``python -m sdb`` or the ``sdb`` console
script to launch the shell.
"""

from __future__ import annotations

from .cli import main
from .expr import ExprResult, evaluate, evaluate_expression, init_lexer

__all__ = ["main", "evaluate", "evaluate_expression", "init_lexer", "ExprResult"]
__version__ = "0.1.0"
