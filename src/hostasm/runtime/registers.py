import logging as lg
from types import MappingProxyType
from typing import Dict, Mapping

from hostasm.common.tokens import Number
from hostasm.common.errors import UnknownRegister


DEFAULT_VALUE = 0


class RegisterStore:
    values: Dict[str, Number]

    def __init__(self):
        self.values = dict()

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def __len__(self) -> int:
        return len(self.values)

    def declare(self, name: str):
        # Re-declaration resets the register
        if name in self.values:
            lg.debug(f'Register {name} redeclared, resetting to {DEFAULT_VALUE}')

        self.values[name] = DEFAULT_VALUE

    def get(self, name: str) -> Number:
        if name not in self.values:
            raise UnknownRegister(name)

        return self.values[name]

    def set(self, name: str, value: Number):
        if name not in self.values:
            raise UnknownRegister(name)

        self.values[name] = value

    def reset(self):
        for name in self.values:
            self.values[name] = DEFAULT_VALUE

    def copy(self) -> 'RegisterStore':
        store = RegisterStore()
        store.values = dict(self.values)
        return store

    def snapshot(self) -> Mapping[str, Number]:
        return MappingProxyType(dict(self.values))
