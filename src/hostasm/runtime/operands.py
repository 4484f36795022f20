''' Operands as seen by instruction handlers '''

from collections.abc import Sequence
from typing import List, overload

from hostasm.common.tokens import Number, Token, RegisterRef, Literal, describe
from hostasm.common.errors import (
    InvalidMutationTarget, ArgumentIndexOutOfRange, UnexpectedToken
)
from hostasm.runtime.registers import RegisterStore


class Operand:
    ''' Resolved argument, valid for a single handler invocation '''

    name: str | None = None
    is_register: bool = False

    def resolve(self) -> Number:
        raise NotImplementedError()

    def try_modify_register(self, value: Number):
        raise NotImplementedError()


class RegisterOperand(Operand):
    is_register = True

    def __init__(self, name: str, store: RegisterStore):
        self.name = name
        self.store = store

    def resolve(self) -> Number:
        return self.store.get(self.name)

    def try_modify_register(self, value: Number):
        self.store.set(self.name, value)

    def __repr__(self) -> str:
        return f'RegisterOperand({self.name})'


class Immediate(Operand):
    def __init__(self, value: Number):
        self.value = value

    def resolve(self) -> Number:
        return self.value

    def try_modify_register(self, value: Number):
        raise InvalidMutationTarget(f'Cannot write {value} to immediate {self.value}')

    def __repr__(self) -> str:
        return f'Immediate({self.value})'


def resolve_operand(store: RegisterStore, token: Token) -> Operand:
    if isinstance(token, RegisterRef):
        # Fails early with UnknownRegister
        store.get(token.name)
        return RegisterOperand(token.name, store)

    if isinstance(token, Literal):
        return Immediate(token.value)

    raise UnexpectedToken(f'Expected operand, got {describe(token)}')


class Arguments(Sequence):
    '''
    Ordered operands of one invocation.

    Indexing past the supplied operands raises ArgumentIndexOutOfRange
    instead of IndexError, so a handler reading a missing operand aborts
    the run with a typed error.
    '''

    operands: List[Operand]

    def __init__(self, operands: List[Operand]):
        self.operands = operands

    def __len__(self) -> int:
        return len(self.operands)

    @overload
    def __getitem__(self, index: int) -> Operand: ...

    @overload
    def __getitem__(self, index: slice) -> List[Operand]: ...

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self.operands[index]

        count = len(self.operands)

        if not -count <= index < count:
            raise ArgumentIndexOutOfRange(index, count)

        return self.operands[index]

    def __iter__(self):
        return iter(self.operands)

    def values(self) -> List[Number]:
        return [operand.resolve() for operand in self.operands]

    def __repr__(self) -> str:
        return f'Arguments({self.operands})'
