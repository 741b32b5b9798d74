# -*- coding: utf-8 -*-

"""
лексический анализатор .kh: убирает комментарии, построчно режет текст
на токены по объединённому шаблону, всё несовпавшее считает ошибкой.

при хотя бы одной ошибке поднимается LexicalAnalysisError со всем
списком, частичный поток токенов дальше не отдаётся.
"""

import logging
import re
from typing import List, Tuple

from .errors import LexicalAnalysisError, LexicalError
from .tokens import SCANNER, Token, classify

logger = logging.getLogger(__name__)

COMMENTS = re.compile(r"//[^\n]*|/\*[\s\S]*?\*/")


# =========================================
# предобработка: удаление комментариев
# =========================================

def strip_comments(src: str) -> str:
    """
    удаляет // и /* */ комментарии. переводы строк внутри блочного
    комментария сохраняются, чтобы номера строк не съезжали.
    """
    return COMMENTS.sub(lambda m: "\n" * m.group(0).count("\n"), src)


# =========================================
# сканирование одной строки
# =========================================

def _scan_line(line: str, line_no: int, count: int) -> Tuple[List[Token], List[LexicalError]]:
    """
    count: сколько токенов уже принято до этой строки (для нумерации ошибок).
    """
    tokens: List[Token] = []
    errors: List[LexicalError] = []
    last_end = 0

    for m in SCANNER.finditer(line):
        gap = line[last_end:m.start()].strip()
        if gap:
            errors.append(LexicalError(gap, line_no, count + len(tokens) + 1))

        text = m.group(0)
        if m.lastgroup == "word" and text != text.lower():
            # идентификаторы только строчными
            errors.append(LexicalError(text, line_no, count + len(tokens) + 1))
        else:
            tokens.append(Token(text, classify(text), line_no))
        last_end = m.end()

    tail = line[last_end:].strip()
    if tail:
        errors.append(LexicalError(tail, line_no, count + len(tokens) + 1))
    return tokens, errors


def tokenize(src: str) -> List[Token]:
    text = strip_comments(src)

    tokens: List[Token] = []
    errors: List[LexicalError] = []
    for line_no, line in enumerate(text.split("\n"), 1):
        line_tokens, line_errors = _scan_line(line, line_no, len(tokens))
        tokens.extend(line_tokens)
        errors.extend(line_errors)

    if errors:
        for err in errors:
            logger.debug("лексическая ошибка: %s", err)
        raise LexicalAnalysisError(errors)

    logger.debug("токенов: %d", len(tokens))
    return tokens
