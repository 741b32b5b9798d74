# -*- coding: utf-8 -*-

"""
командная строка: python -m khc program.kh [--report report.md] [--graph automaton]
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .pipeline import run_pipeline
from .report import draw_automata, print_report, save_report

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="khc", description="фронтенд учебного языка .kh")
    p.add_argument("source", help="файл с программой (.kh)")
    p.add_argument("--report", metavar="FILE", help="сохранить отчёт в markdown")
    p.add_argument("--graph", metavar="BASENAME", help="сохранить .dot графы nfa и dfa")
    p.add_argument("--render", action="store_true", help="вместе с --graph построить png")
    p.add_argument("--traces", action="store_true", help="печатать трассировку dfa по каждому токену")
    p.add_argument("--json", action="store_true", help="вывести результаты в json вместо таблиц")
    p.add_argument("-v", "--verbose", action="store_true", help="отладочный лог")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(levelname)s %(name)s: %(message)s")

    try:
        with open(args.source, encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        logger.error("не удалось прочитать %s: %s", args.source, e)
        return 2

    result = run_pipeline(source)

    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print_report(result, traces=args.traces)

    if args.report:
        save_report(result, args.report)
    if args.graph and result.lexed:
        draw_automata(result, args.graph, render=args.render)

    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
