# -*- coding: utf-8 -*-

"""
весь фронтенд одним вызовом: лексер → автоматы и проверка токенов →
таблица символов → проверка if/else. результат: структура, которую
потом печатает report.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .automaton import DFA, NFA, build_automata
from .conditionals import validate_conditionals
from .errors import ConditionSyntaxError, LexicalAnalysisError, LexicalError
from .lexer import tokenize
from .symbols import SymbolTable
from .tokens import Token

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    tokens: List[Token] = field(default_factory=list)
    lexical_errors: List[LexicalError] = field(default_factory=list)
    nfa: Optional[NFA] = None
    dfa: Optional[DFA] = None
    validations: List[Tuple[str, bool]] = field(default_factory=list)
    symbols: Optional[SymbolTable] = None
    conditionals: int = 0
    syntax_error: Optional[ConditionSyntaxError] = None

    @property
    def lexed(self) -> bool:
        return not self.lexical_errors

    @property
    def tokens_valid(self) -> bool:
        return all(ok for _text, ok in self.validations)

    @property
    def success(self) -> bool:
        return self.lexed and self.tokens_valid and self.syntax_error is None

    def to_dict(self) -> Dict[str, Any]:
        """
        стабильное (без множеств и объектов) представление всех результатов
        """
        out: Dict[str, Any] = {
            "tokens": [{"text": t.text, "kind": t.kind.value, "line": t.line} for t in self.tokens],
            "lexical_errors": [str(e) for e in self.lexical_errors],
        }
        if not self.lexed:
            out["success"] = False
            return out

        out["automata"] = {}
        for auto in (self.nfa, self.dfa):
            s = auto.summary()
            out["automata"][s.name] = {
                "states": s.states,
                "accepting": s.accepting,
                "transitions": [list(t) for t in s.transitions],
            }
        out["validation"] = [{"token": text, "accepted": ok} for text, ok in self.validations]
        out["symbols"] = [
            {"name": e.name, "type": e.declared_type, "scope": e.scope, "value": e.value,
             "memory": e.memory_label, "line": e.line}
            for e in self.symbols
        ]
        out["symbol_errors"] = [str(e) for e in self.symbols.errors]
        out["conditionals"] = {
            "validated": self.conditionals,
            "error": str(self.syntax_error) if self.syntax_error else None,
            "position": self.syntax_error.position if self.syntax_error else None,
        }
        out["success"] = self.success
        return out


def run_pipeline(source: str) -> PipelineResult:
    result = PipelineResult()

    # 1) лексический анализ; при ошибках дальше не идём
    try:
        result.tokens = tokenize(source)
    except LexicalAnalysisError as e:
        logger.info("лексический анализ не пройден, ошибок: %d", len(e.errors))
        result.lexical_errors = e.errors
        return result

    # 2) автоматы по набору написаний и повторная проверка каждого токена
    result.nfa, result.dfa = build_automata(t.text for t in result.tokens)
    result.validations = [(t.text, result.dfa.matches(t.text)) for t in result.tokens]

    # 3) таблица символов (ошибки локальные, не прерывают)
    result.symbols = SymbolTable.build(result.tokens)

    # 4) if/else; останавливается на первой ошибке
    try:
        result.conditionals = validate_conditionals(result.tokens)
    except ConditionSyntaxError as e:
        logger.info("проверка if/else не пройдена: %s", e)
        result.syntax_error = e

    return result
