# -*- coding: utf-8 -*-

"""
иерархия ошибок фронтенда. каждая ошибка хранит структурные поля
(позицию, текст) и готовое человекочитаемое сообщение.
"""

from typing import List, Sequence


class KhError(Exception):
    """базовая ошибка всех стадий"""


# =========================================
# лексический анализ
# =========================================

class LexicalError(KhError):
    def __init__(self, token: str, line: int, index: int):
        self.token = token
        self.line = line
        self.index = index
        super().__init__(f"недопустимый токен '{token}' (строка {line}, токен {index})")


class LexicalAnalysisError(KhError):
    """все лексические ошибки прогона разом; токены дальше не передаются"""

    def __init__(self, errors: Sequence[LexicalError]):
        self.errors: List[LexicalError] = list(errors)
        super().__init__(f"лексический анализ не пройден: ошибок {len(self.errors)}")


# =========================================
# таблица символов
# =========================================

class ExpressionError(KhError):
    def __init__(self, expression: str, reason: str = ""):
        self.expression = expression
        self.reason = reason
        msg = f"некорректное арифметическое выражение '{expression}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class DeclarationError(KhError):
    def __init__(self, expression: str, name: str = ""):
        self.expression = expression
        self.name = name
        super().__init__(f"некорректное присваивание '{expression}'"
                         + (f" для '{name}'" if name else ""))


class ScopeUnderflow(KhError):
    def __init__(self, index: int):
        self.index = index
        super().__init__(f"'}}' без открытой области видимости (токен {index})")


# =========================================
# условные конструкции
# =========================================

class ConditionSyntaxError(KhError):
    def __init__(self, position: int, expected: str):
        self.position = position
        self.expected = expected
        super().__init__(f"синтаксическая ошибка: {expected} (токен {position})")
