from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from cityscript.ir import OperationSignature

Handler = Callable[..., object]


class OperationRegistry:
    """
    Holds operation signatures and the handlers bound to them.

    A signature can be declared before its handler is bound; the transpiler
    only needs signatures, the execution engine only needs handlers.
    """

    def __init__(self):
        self._signatures: Dict[str, OperationSignature] = {}
        self._handlers: Dict[str, Handler] = {}

    def declare(self, signature: OperationSignature):
        if signature.name in self._signatures:
            raise ValueError(f"Operation '{signature.name}' already declared.")
        self._signatures[signature.name] = signature

    def bind(self, name: str, handler: Handler):
        if name not in self._signatures:
            raise KeyError(f"Cannot bind handler to undeclared operation '{name}'.")
        if name in self._handlers:
            raise ValueError(f"Operation '{name}' already has a handler.")
        self._handlers[name] = handler

    def register(self, signature: OperationSignature, handler: Handler):
        self.declare(signature)
        self.bind(signature.name, handler)

    def signature(self, name: str) -> Optional[OperationSignature]:
        return self._signatures.get(name)

    def handler(self, name: str) -> Optional[Handler]:
        return self._handlers.get(name)

    @property
    def signatures(self) -> Mapping[str, OperationSignature]:
        return MappingProxyType(self._signatures)

    def names(self) -> List[str]:
        return list(self._signatures)

    def __contains__(self, name: object) -> bool:
        return name in self._signatures

    def __len__(self) -> int:
        return len(self._signatures)
