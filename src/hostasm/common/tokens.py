from dataclasses import dataclass
from typing import Sequence


Number = int | float


@dataclass(frozen=True)
class Instruction:
    name: str


@dataclass(frozen=True)
class RegisterRef:
    name: str


@dataclass(frozen=True)
class Literal:
    value: Number


@dataclass(frozen=True)
class Terminator:
    pass


Token = Instruction | RegisterRef | Literal | Terminator
Tokens = Sequence[Token]


def describe(token: Token) -> str:
    match token:
        case Instruction(name):
            return f'instruction {name}'
        case RegisterRef(name):
            return f'register [{name}]'
        case Literal(value):
            return f'literal {value}'
        case Terminator():
            return 'terminator'
        case _:
            return repr(token)
