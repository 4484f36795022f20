import logging as lg
from typing import Callable, Dict, List

from hostasm.common.errors import UnknownInstruction, DefinitionError
from hostasm.runtime.operands import Arguments


Handler = Callable[[Arguments], None]


class InstructionTable:
    handlers: Dict[str, Handler]

    def __init__(self):
        self.handlers = dict()

    def __contains__(self, name: str) -> bool:
        return name in self.handlers

    def install(self, name: str, handler: Handler):
        if not callable(handler):
            raise DefinitionError(f'Handler for {name} is not callable')

        if name in self.handlers:
            lg.debug(f'Replacing handler of {name}')

        self.handlers[name] = handler

    def lookup(self, name: str) -> Handler:
        handler = self.handlers.get(name)

        if handler is None:
            raise UnknownInstruction(name)

        return handler

    def names(self) -> List[str]:
        return sorted(self.handlers)

    def copy(self) -> 'InstructionTable':
        table = InstructionTable()
        table.handlers = dict(self.handlers)
        return table
