# -*- coding: utf-8 -*-

"""
таблица символов: проходит поток токенов, отслеживает вложенность
областей видимости, вычисляет инициализаторы и раздаёт адреса M1000, M1001, ...

ошибка в одном объявлении не прерывает построение: значение становится
ERROR, ошибка складывается в SymbolTable.errors.
"""

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal, DecimalException
from typing import Dict, Iterator, List, Sequence, Union

from .errors import DeclarationError, ExpressionError, KhError, ScopeUnderflow
from .expression import evaluate, format_value
from .tokens import ARITHMETIC_CHARS, TYPE_KEYWORDS, Token, TokenKind

logger = logging.getLogger(__name__)

ERROR = "ERROR"
GLOBAL_SCOPE = "global"
MEMORY_BASE = 1000


@dataclass(frozen=True)
class SymbolEntry:
    name: str
    declared_type: str
    scope: str
    value: str
    memory_label: str
    line: int


# =========================================
# результат разбора одного объявления
# =========================================

@dataclass(frozen=True)
class Ok:
    value: str


@dataclass(frozen=True)
class Err:
    error: KhError


DeclarationResult = Union[Ok, Err]


# =========================================
# стек областей видимости
# =========================================

class ScopeStack:
    def __init__(self):
        self._items: List[str] = [GLOBAL_SCOPE]

    @property
    def current(self) -> str:
        return self._items[-1]

    def push(self, scope: str):
        self._items.append(scope)

    def pop(self, index: int = -1) -> str:
        if len(self._items) == 1:
            raise ScopeUnderflow(index)
        return self._items.pop()

    def __len__(self):
        return len(self._items)


@dataclass
class _BuildState:
    scopes: ScopeStack = field(default_factory=ScopeStack)
    counter: int = MEMORY_BASE

    def next_label(self) -> str:
        label = f"M{self.counter}"
        self.counter += 1
        return label


# =========================================
# правая часть объявления
# =========================================

_NUMBER = re.compile(r"\d+(?:\.\d+)?")
_DECIMAL = re.compile(r"\d+\.\d+")
_STRING = re.compile(r"\"[^\"]*\"")
_CHAR = re.compile(r"'[^']'")


def extract_rhs(tokens: Sequence[Token], start: int) -> str:
    """
    склеивает (без пробелов) токены после первого '->' до ';'.
    """
    parts: List[str] = []
    seen_assignment = False
    for tok in tokens[start:]:
        if tok.text == ";":
            break
        if tok.kind is TokenKind.ASSIGNMENT and not seen_assignment:
            seen_assignment = True
        elif seen_assignment:
            parts.append(tok.text)
    return "".join(parts).strip()


def is_arithmetic(value: str) -> bool:
    return any(c.isdigit() for c in value) and any(c in ARITHMETIC_CHARS for c in value)


def is_literal(value: str) -> bool:
    return bool(_NUMBER.fullmatch(value) or _STRING.fullmatch(value)
                or _CHAR.fullmatch(value) or value in ("yes", "no"))


def resolve_value(rhs: str, name: str = "") -> DeclarationResult:
    if is_arithmetic(rhs):
        try:
            return Ok(format_value(evaluate(rhs)))
        except ExpressionError as e:
            return Err(e)
    if is_literal(rhs):
        if _DECIMAL.fullmatch(rhs):
            try:
                return Ok(format_value(Decimal(rhs)))
            except DecimalException:
                return Err(DeclarationError(rhs, name))
        return Ok(rhs)
    return Err(DeclarationError(rhs, name))


# =========================================
# сама таблица
# =========================================

class SymbolTable:
    def __init__(self):
        self.entries: Dict[str, SymbolEntry] = {}
        self.errors: List[KhError] = []

    @classmethod
    def build(cls, tokens: Sequence[Token]) -> "SymbolTable":
        table = cls()
        state = _BuildState()

        for i, tok in enumerate(tokens):
            if tok.text == "{":
                state.scopes.push(f"local_{i}")
            elif tok.text == "}":
                try:
                    state.scopes.pop(i)
                except ScopeUnderflow as e:
                    logger.warning("%s", e)
                    table.errors.append(e)
            elif (tok.kind is TokenKind.KEYWORD and tok.text in TYPE_KEYWORDS
                  and i + 1 < len(tokens) and tokens[i + 1].kind is TokenKind.IDENT):
                table._declare(tokens, i, state)

        logger.debug("таблица символов: записей %d, ошибок %d", len(table.entries), len(table.errors))
        return table

    def _declare(self, tokens: Sequence[Token], i: int, state: _BuildState):
        keyword, ident = tokens[i], tokens[i + 1]
        result = resolve_value(extract_rhs(tokens, i + 2), ident.text)
        if isinstance(result, Ok):
            value = result.value
        else:
            logger.warning("%s", result.error)
            self.errors.append(result.error)
            value = ERROR

        # повторное объявление просто перезаписывает запись
        self.entries[ident.text] = SymbolEntry(
            name=ident.text,
            declared_type=keyword.text,
            scope=state.scopes.current,
            value=value,
            memory_label=state.next_label(),
            line=ident.line,
        )

    def __getitem__(self, name: str) -> SymbolEntry:
        return self.entries[name]

    def __contains__(self, name: str) -> bool:
        return name in self.entries

    def __iter__(self) -> Iterator[SymbolEntry]:
        return iter(self.entries.values())

    def __len__(self):
        return len(self.entries)

    def rows(self) -> List[List[str]]:
        return [[e.name, e.declared_type, e.scope, e.value, e.memory_label, str(e.line)]
                for e in self]
