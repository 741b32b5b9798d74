# -*- coding: utf-8 -*-

"""
проверка структуры if / else if / else.

  if → '(' → условие → ')' → '{' → блок → [else → (if ... | '{' → блок)]

условие проверяется по форме, а не полноценным разбором выражений.
первая же ошибка останавливает проверку (ConditionSyntaxError).
"""

import logging
import re
from typing import List, Sequence

from .errors import ConditionSyntaxError
from .tokens import Token

logger = logging.getLogger(__name__)

_ID = r"[a-z_][a-z0-9_]*"
_NUM = r"\d+(?:\.\d{1,5})?"
_CMP = r"(?:==|!=|<=|>=|<|>)"

CONDITION_SHAPES = [
    re.compile(_ID),                                              # логическая переменная
    re.compile(_ID + r"\s*" + _CMP + r"\s*(?:yes|no|" + _NUM + r")"),
    re.compile(_NUM + r"\s*" + _CMP + r"\s*" + _NUM),
    re.compile(_ID + r"\s*(?:&&|\|\|)\s*" + _ID),
]


EXPECT_OPEN_PAREN = "ожидалась '(' после if"
EXPECT_CLOSE_PAREN = "ожидалась ')' после условия"
EXPECT_OPEN_BRACE = "ожидалась '{' после условия if"
EXPECT_ELSE_BODY = "ожидалась '{' или if после else"
UNMATCHED_BRACE = "незакрытая '{' в блоке if-else"


def is_condition(text: str) -> bool:
    return any(shape.fullmatch(text) for shape in CONDITION_SHAPES)


class ConditionalValidator:
    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tokens
        self.index = 0
        self.validated = 0

    def _text(self, i: int) -> str:
        return self.tokens[i].text if i < len(self.tokens) else ""

    def validate(self) -> int:
        """
        возвращает количество проверенных конструкций if (включая else if)
        """
        while self.index < len(self.tokens):
            if self._text(self.index) == "if":
                self._parse_if()
            else:
                self.index += 1
        return self.validated

    def _parse_branch(self):
        """
        if ( условие ) { блок }; текущий токен: if
        """
        logger.debug("if на токене %d", self.index)

        self.index += 1
        if self._text(self.index) != "(":
            raise ConditionSyntaxError(self.index, EXPECT_OPEN_PAREN)

        self.index += 1
        parts: List[str] = []
        while self.index < len(self.tokens) and self._text(self.index) != ")":
            parts.append(self._text(self.index))
            self.index += 1
        if self.index >= len(self.tokens):
            raise ConditionSyntaxError(self.index, EXPECT_CLOSE_PAREN)

        condition = " ".join(parts)
        if not is_condition(condition):
            raise ConditionSyntaxError(self.index, f"недопустимое условие '{condition}'")

        self.index += 1
        if self._text(self.index) != "{":
            raise ConditionSyntaxError(self.index, EXPECT_OPEN_BRACE)
        self._parse_block()
        self.validated += 1

    def _parse_if(self):
        # по одной ветке цепочки if / else if за итерацию
        while True:
            self._parse_branch()
            if self._text(self.index) != "else":
                return
            self.index += 1
            if self._text(self.index) == "if":
                continue
            if self._text(self.index) == "{":
                self._parse_block()
                return
            raise ConditionSyntaxError(self.index, EXPECT_ELSE_BODY)

    def _parse_block(self):
        # текущий токен уже открывающая '{'
        depth = 1
        self.index += 1
        while self.index < len(self.tokens) and depth > 0:
            text = self._text(self.index)
            if text == "{":
                depth += 1
            elif text == "}":
                depth -= 1
            self.index += 1

        if depth != 0:
            raise ConditionSyntaxError(self.index, UNMATCHED_BRACE)


def validate_conditionals(tokens: Sequence[Token]) -> int:
    return ConditionalValidator(tokens).validate()
