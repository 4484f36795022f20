import logging as lg
from pathlib import Path
from typing import List

import pyparsing as pp

import hostasm.sasm.grammar as grammar
from hostasm.common.tokens import Token, Terminator
from hostasm.common.errors import ScanError


def strip_comment(text: str) -> str:
    return text.split(grammar.COMMENT, 1)[0].rstrip()


def scan_line(text: str, lineno: int) -> List[Token]:
    try:
        parsed = grammar.line.parse_string(text, parse_all=True)
    except pp.ParseException as e:
        raise ScanError(e.msg, line=lineno, col=e.col) from e

    tokens: List[Token] = list(parsed)
    tokens.append(Terminator())
    return tokens


def scan(source: str) -> List[Token]:
    tokens: List[Token] = []

    for lineno, text in enumerate(source.splitlines(), start=1):
        body = strip_comment(text)

        if not body.strip():
            continue

        tokens.extend(scan_line(body, lineno))

    lg.debug(f'Scanned {len(tokens)} tokens')
    return tokens


def collect_file(filepath: str | Path) -> List[Token]:
    if isinstance(filepath, str):
        filepath = Path(filepath)

    lg.debug(f'Collecting file {filepath}')
    return scan(filepath.read_text(encoding='utf-8'))
