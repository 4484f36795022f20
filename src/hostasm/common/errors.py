from typing import Any


class DefinitionError(Exception):
    ''' Invalid register or instruction declaration '''
    pass


class ExecutionError(Exception):
    opcode: str | None
    position: int | None

    def __init__(self, message: str, *, opcode: str | None = None, position: int | None = None):
        super().__init__(message)
        self.message = message
        self.opcode = opcode
        self.position = position

    def locate(self, opcode: str | None, position: int):
        # Innermost location wins
        if self.opcode is None:
            self.opcode = opcode

        if self.position is None:
            self.position = position

        return self

    def __str__(self) -> str:
        where = []

        if self.opcode is not None:
            where.append(f'in {self.opcode}')

        if self.position is not None:
            where.append(f'at token {self.position}')

        if not where:
            return self.message

        return f'{self.message} ({" ".join(where)})'


class UnknownRegister(ExecutionError):
    def __init__(self, name: str, **kwargs):
        super().__init__(f'Unknown register {name}', **kwargs)
        self.name = name


class UnknownInstruction(ExecutionError):
    def __init__(self, name: str, **kwargs):
        super().__init__(f'Unknown instruction {name}', **kwargs)
        self.name = name


class UnexpectedToken(ExecutionError):
    pass


class MalformedExpression(ExecutionError):
    pass


class InvalidMutationTarget(ExecutionError):
    pass


class ArgumentIndexOutOfRange(ExecutionError, IndexError):
    def __init__(self, index: int, count: int, **kwargs):
        super().__init__(f'Argument {index} requested, {count} supplied', **kwargs)
        self.index = index
        self.count = count


class HandlerFailure(ExecutionError):
    payload: Any

    def __init__(self, payload: Any = None, **kwargs):
        super().__init__(f'Handler failed: {payload}', **kwargs)
        self.payload = payload


class ScanError(Exception):
    def __init__(self, message: str, *, line: int | None = None, col: int | None = None):
        self.line = line
        self.col = col
        prefix = ''

        if line is not None and col is not None:
            prefix = f'line {line} col {col}: '

        super().__init__(prefix + str(message))
