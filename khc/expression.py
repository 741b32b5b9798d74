# -*- coding: utf-8 -*-

"""
арифметика для инициализаторов: инфикс → постфикс (сортировочная
станция), затем вычисление на стеке.

приоритеты: ( ) выше всего, затем ^, затем * / %, затем + -. все
левоассоциативны (^ тоже: связывание задаётся только уровнем).
результаты / % ^ округляются до 5 знаков (half-up) сразу, до того как
попадут обратно в стек.
"""

import re
from decimal import ROUND_HALF_UP, Context, Decimal, DecimalException, localcontext
from typing import List

from .errors import ExpressionError

PRECISION = 5
QUANT = Decimal(1).scaleb(-PRECISION)

# промежуточные вычисления; точности с запасом, чтобы большие целые не теряли цифр
ARITHMETIC = Context(prec=50, rounding=ROUND_HALF_UP)

PRECEDENCE = {
    "+": 1, "-": 1,
    "*": 2, "/": 2, "%": 2,
    "^": 3,
}

_PIECES = re.compile(r"\d+(?:\.\d+)?|[()+\-*/%^]|[^()+\-*/%^\d\s]+")
_OPERAND = re.compile(r"\d+(?:\.\d+)?")


def round5(value: Decimal) -> Decimal:
    # точность под размер числа: целая часть + 5 знаков после точки
    digits = max(value.adjusted(), 0) + PRECISION + 1
    ctx = Context(prec=max(digits, ARITHMETIC.prec), rounding=ROUND_HALF_UP)
    return value.quantize(QUANT, context=ctx)

def format_value(value: Decimal) -> str:
    return str(round5(value))


def infix_to_postfix(expression: str) -> List[str]:
    output: List[str] = []
    ops: List[str] = []

    for piece in _PIECES.findall(expression):
        if _OPERAND.fullmatch(piece):
            output.append(piece)
        elif piece == "(":
            ops.append(piece)
        elif piece == ")":
            while ops and ops[-1] != "(":
                output.append(ops.pop())
            if not ops:
                raise ExpressionError(expression, "лишняя ')'")
            ops.pop()
        elif piece in PRECEDENCE:
            while ops and ops[-1] != "(" and PRECEDENCE[ops[-1]] >= PRECEDENCE[piece]:
                output.append(ops.pop())
            ops.append(piece)
        else:
            raise ExpressionError(expression, f"неизвестный операнд '{piece}'")

    while ops:
        op = ops.pop()
        if op == "(":
            raise ExpressionError(expression, "незакрытая '('")
        output.append(op)
    return output


def _apply(op: str, a: Decimal, b: Decimal) -> Decimal:
    if op == "+":
        return a + b
    if op == "-":
        return a - b
    if op == "*":
        return a * b
    if op == "/":
        return round5(a / b)
    if op == "%":
        return round5(a % b)
    if a == 0 and b == 0:
        # 0^0 = 1, как у pow
        return round5(Decimal(1))
    return round5(a ** b)


def evaluate_postfix(postfix: List[str], expression: str = "") -> Decimal:
    stack: List[Decimal] = []
    for piece in postfix:
        if piece in PRECEDENCE:
            if len(stack) < 2:
                raise ExpressionError(expression, f"не хватает операндов для '{piece}'")
            b = stack.pop()
            a = stack.pop()
            try:
                stack.append(_apply(piece, a, b))
            except DecimalException as e:
                raise ExpressionError(expression, f"'{piece}' не вычисляется") from e
        else:
            stack.append(Decimal(piece))

    if len(stack) != 1:
        raise ExpressionError(expression, "лишние операнды")
    return stack[0]


def evaluate(expression: str) -> Decimal:
    """
    вычисляет выражение и возвращает Decimal, округлённый до 5 знаков.
    бросает ExpressionError на любой некорректной записи.
    """
    compact = re.sub(r"\s", "", expression)
    if not compact:
        raise ExpressionError(expression, "пустое выражение")
    postfix = infix_to_postfix(compact)
    with localcontext(ARITHMETIC):
        result = evaluate_postfix(postfix, expression)
    try:
        return round5(result)
    except DecimalException as e:
        raise ExpressionError(expression, "результат вне допустимого диапазона") from e
