# -*- coding: utf-8 -*-

"""
khc: фронтенд учебного языка .kh (лексер, автомат проверки токенов,
таблица символов, проверка if/else).
"""

from .automaton import DFA, NFA, build_automata, nfa_to_dfa
from .conditionals import validate_conditionals
from .errors import (ConditionSyntaxError, DeclarationError, ExpressionError, KhError,
                     LexicalAnalysisError, LexicalError, ScopeUnderflow)
from .expression import evaluate
from .lexer import tokenize
from .pipeline import PipelineResult, run_pipeline
from .symbols import ERROR, SymbolEntry, SymbolTable
from .tokens import Token, TokenKind, classify

__version__ = "0.1.0"
