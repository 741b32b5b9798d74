# -*- coding: utf-8 -*-

"""
токены языка .kh: категории, грамматика лексем и единый классификатор.

классификатор проходит категории строго в порядке приоритета
(Keyword → Identifier → Constant → Literal → BooleanConstant → Operator →
ComparisonOperator → AssignmentOperator → Punctuation) и возвращает первую
подходящую; шаблоны категорий не пересекаются, поэтому одна и та же лексема
не может попасть в два класса.
"""

import enum
import re
from dataclasses import dataclass
from typing import List, Tuple


# =========================================
# базовые типы: категории токенов, структура токена
# =========================================

class TokenKind(enum.Enum):
    KEYWORD     = "Keyword"
    IDENT       = "Identifier"
    CONSTANT    = "Constant"
    LITERAL     = "Literal"
    BOOLEAN     = "Boolean Constant"
    OPERATOR    = "Operator"
    COMPARISON  = "Comparison Operator"
    ASSIGNMENT  = "Assignment Operator"
    PUNCTUATION = "Punctuation"
    UNKNOWN     = "Unknown"


@dataclass(frozen=True)
class Token:
    text: str
    kind: TokenKind
    line: int = 0


# ключевые слова языка; первые четыре объявляют переменные
TYPE_KEYWORDS = ("whole", "fraction", "truth", "character")
KEYWORDS = TYPE_KEYWORDS + ("while", "if", "else", "end", "say")

BOOLEAN_LITERALS = ("yes", "no")


# =========================================
# шаблоны категорий (порядок важен только для сканера)
# =========================================

KEYWORD_RE     = r"(?:" + "|".join(KEYWORDS) + r")"
BOOLEAN_RE     = r"(?:yes|no)"
# идентификатор: только строчные буквы, цифры и '_', без ключевых слов и yes/no
IDENT_RE       = r"(?!(?:" + "|".join(KEYWORDS + BOOLEAN_LITERALS) + r")\b)[a-z_][a-z0-9_]*"
# «похожее на идентификатор» слово: ловим и заглавные, чтобы отвергнуть их явно
WORD_RE        = r"[A-Za-z_][A-Za-z0-9_]*"
NUMBER_RE      = r"\d+(?:\.\d{1,5})?(?:\^\d+(?:\.\d{1,5})?)?"
ASSIGNMENT_RE  = r"->"
OPERATOR_RE    = r"&&|\|\||\+|-|\*|/|%|\^"
COMPARISON_RE  = r"<=|>=|==|!=|<|>"
PUNCTUATION_RE = r"[\[\]{}();:,]"
STRING_RE      = r"\"[^\"]*\""
CHAR_RE        = r"'[^']'"

# символы арифметики (по ним symbol table решает, выражение ли правая часть)
ARITHMETIC_CHARS = "+-*/%^()"


# сканер: одно объединённое выражение, альтернативы в порядке приоритета.
# ключевые слова и yes/no идут раньше общего «слова», '->' раньше '-',
# двухсимвольные сравнения раньше односимвольных.
SCANNER = re.compile(
    r"(?P<keyword>\b" + KEYWORD_RE + r"\b)"
    r"|(?P<boolean>\b" + BOOLEAN_RE + r"\b)"
    r"|(?P<word>\b" + WORD_RE + r"\b)"
    r"|(?P<number>" + NUMBER_RE + r"(?![A-Za-z0-9_]))"
    r"|(?P<assignment>" + ASSIGNMENT_RE + r")"
    r"|(?P<operator>" + OPERATOR_RE + r")"
    r"|(?P<comparison>" + COMPARISON_RE + r")"
    r"|(?P<punctuation>" + PUNCTUATION_RE + r")"
    r"|(?P<string>" + STRING_RE + r")"
    r"|(?P<char>" + CHAR_RE + r")"
)


# приоритетная таблица классификатора: (категория, полный шаблон)
_CLASSES: List[Tuple[TokenKind, "re.Pattern[str]"]] = [
    (TokenKind.KEYWORD,     re.compile(KEYWORD_RE)),
    (TokenKind.IDENT,       re.compile(IDENT_RE)),
    (TokenKind.CONSTANT,    re.compile(NUMBER_RE)),
    (TokenKind.LITERAL,     re.compile(STRING_RE + "|" + CHAR_RE)),
    (TokenKind.BOOLEAN,     re.compile(BOOLEAN_RE)),
    (TokenKind.OPERATOR,    re.compile(OPERATOR_RE)),
    (TokenKind.COMPARISON,  re.compile(COMPARISON_RE)),
    (TokenKind.ASSIGNMENT,  re.compile(ASSIGNMENT_RE)),
    (TokenKind.PUNCTUATION, re.compile(PUNCTUATION_RE)),
]


def classify(text: str) -> TokenKind:
    """
    возвращает категорию лексемы: первая категория, чей шаблон целиком
    совпадает с text; иначе UNKNOWN.
    """
    for kind, pattern in _CLASSES:
        if pattern.fullmatch(text):
            return kind
    return TokenKind.UNKNOWN
