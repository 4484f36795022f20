import logging as lg
from enum import Enum
from typing import List, cast

from hostasm.common.tokens import Tokens, Instruction, Terminator, describe
from hostasm.common.errors import (
    ExecutionError, UnexpectedToken, MalformedExpression, HandlerFailure
)
from hostasm.runtime.registers import RegisterStore
from hostasm.runtime.instructions import InstructionTable
from hostasm.runtime.operands import Operand, Arguments, resolve_operand


class State(Enum):
    SCANNING_OPCODE = 'scanning-opcode'
    COLLECTING_OPERANDS = 'collecting-operands'
    DISPATCHING = 'dispatching'
    COMPLETED = 'completed'
    ABORTED = 'aborted'


class Executor():
    state: State
    tokens: Tokens
    position: int           # Current token
    start: int              # Opcode token of the current instruction
    opcode: str | None
    operands: List[Operand]

    def __init__(self, store: RegisterStore, table: InstructionTable):
        self.store = store      # Ref. to the definition's registers
        self.table = table      # Ref. to the definition's instructions
        self.reset([])

    def reset(self, tokens: Tokens):
        self.state = State.SCANNING_OPCODE
        self.tokens = tokens
        self.position = 0
        self.start = 0
        self.opcode = None
        self.operands = []

    def at_end(self) -> bool:
        return self.position >= len(self.tokens)

    # - States - #

    def scan_opcode(self):
        if self.at_end():
            self.state = State.COMPLETED
            return

        token = self.tokens[self.position]

        if not isinstance(token, Instruction):
            raise UnexpectedToken(f'Expected instruction, got {describe(token)}')

        self.opcode = token.name
        self.start = self.position
        self.operands = []
        self.position += 1
        self.state = State.COLLECTING_OPERANDS

    def collect_operand(self):
        if self.at_end():
            raise MalformedExpression(f'Instruction {self.opcode} is not terminated')

        token = self.tokens[self.position]

        if isinstance(token, Terminator):
            self.state = State.DISPATCHING
            return

        if isinstance(token, Instruction):
            raise UnexpectedToken(f'Unexpected {describe(token)} before terminator')

        self.operands.append(resolve_operand(self.store, token))
        self.position += 1

    def dispatch(self):
        handler = self.table.lookup(cast(str, self.opcode))
        args = Arguments(self.operands)

        lg.debug(f'{self.start}: {self.opcode} {args}')

        try:
            handler(args)
        except ExecutionError:
            raise
        except Exception as e:
            raise HandlerFailure(e) from e

        # Skip the terminator
        self.position += 1
        self.opcode = None
        self.operands = []
        self.state = State.SCANNING_OPCODE

    HANDLERS = {
        State.SCANNING_OPCODE: scan_opcode,
        State.COLLECTING_OPERANDS: collect_operand,
        State.DISPATCHING: dispatch
    }

    # -- Implementation -- #

    def fault_position(self) -> int:
        if self.state == State.DISPATCHING:
            return self.start

        return self.position

    def exec_next(self):
        handler = self.HANDLERS[self.state]
        handler(self)

    def run(self, tokens: Tokens):
        self.reset(tokens)

        try:
            while self.state != State.COMPLETED:
                self.exec_next()

        except ExecutionError as e:
            e.locate(self.opcode, self.fault_position())
            self.state = State.ABORTED
            lg.info(f'Execution aborted: {e}')
            raise

        lg.debug(f'Execution completed after {len(tokens)} tokens')
