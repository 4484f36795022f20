import logging as lg
from typing import Mapping

from hostasm.common.tokens import Number, Tokens
from hostasm.common.errors import DefinitionError
from hostasm.runtime.registers import RegisterStore
from hostasm.runtime.instructions import InstructionTable, Handler
from hostasm.runtime.executor import Executor


class Definition:
    '''
    Host-built interpreter: declared registers plus declared instructions.

    Declarations chain, so a host can write

        definition = new_definition() \\
            .declare_register('R1') \\
            .declare_instruction('MOV', mov)

    and then call run() any number of times. Register values persist
    between runs until reset_registers() is called.
    '''

    store: RegisterStore
    table: InstructionTable

    def __init__(self):
        self.store = RegisterStore()
        self.table = InstructionTable()

    @property
    def registers(self) -> Mapping[str, Number]:
        return self.store.snapshot()

    def declare_register(self, name: str) -> 'Definition':
        if not name:
            raise DefinitionError('Register name must not be empty')

        self.store.declare(name)
        return self

    def declare_instruction(self, name: str, handler: Handler) -> 'Definition':
        if not name:
            raise DefinitionError('Instruction name must not be empty')

        self.table.install(name, handler)
        return self

    def reset_registers(self) -> 'Definition':
        self.store.reset()
        return self

    def clone(self) -> 'Definition':
        definition = Definition()
        definition.store = self.store.copy()
        definition.table = self.table.copy()
        return definition

    def run(self, tokens: Tokens):
        Executor(self.store, self.table).run(tokens)

    def debug_dump(self):
        lg.debug('== Definition state dump begin ==')

        for name, value in self.store.values.items():
            lg.debug(f'REGISTER {name} is {value}')

        for name in self.table.names():
            lg.debug(f'INSTRUCTION {name}')

        lg.debug('== Definition state dump end ==')


def new_definition() -> Definition:
    return Definition()
