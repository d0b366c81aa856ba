"""
Equation Set

Symbol table for user-defined constants and functions. Given the key
``f(x,y)=x+y`` the symbol is ``f``, the arguments are ``['x', 'y']``, the
definition is ``x+y`` and the signature is ``f(x,y)`` with no spaces.

Registration order matters: every candidate symbol is validated against all
previously admitted symbols, so the first writer wins.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Mapping, Optional

from .errors import EquationParseError
from .logging_system import LogLevel, log_debug, log_info, log_warning
from .math_string import (
    INDEPENDENT_VARIABLE, INDEPENDENT_VARIABLE_1, INDEPENDENT_VARIABLE_2,
    is_matrix, parse_signature
)


@dataclass
class Symbol:
    """A registered constant (no arguments) or function"""
    name: str
    arguments: List[str]
    definition: str
    metadata: Dict[str, str] = field(default_factory=dict)

    @property
    def signature(self) -> str:
        if self.arguments:
            return f"{self.name}({','.join(self.arguments)})"
        return self.name


def derive_matrix_metadata(arguments: List[str]) -> Dict[str, str]:
    """Independent-variable keys for a matrix-valued definition"""
    if len(arguments) == 1:
        return {INDEPENDENT_VARIABLE: arguments[0]}
    if len(arguments) == 2:
        return {INDEPENDENT_VARIABLE_1: arguments[0],
                INDEPENDENT_VARIABLE_2: arguments[1]}
    return {}


class EquationSet:
    """Ordered registry of symbols with name-collision checking"""

    def __init__(self, symbols_and_definitions: Optional[Mapping[str, str]] = None):
        # insertion order is the registration log
        self._symbols: Dict[str, Symbol] = {}
        if symbols_and_definitions:
            for signature, definition in symbols_and_definitions.items():
                self.add_symbol(signature, definition)
            log_info(f"Loaded {len(self._symbols)} symbols", LogLevel.DETAILED)

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, name) -> bool:
        return self.is_symbol_defined(name)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._symbols))

    def __repr__(self) -> str:
        return f"EquationSet({self.get_all_signatures()})"

    def add_symbol(self, signature: str, definition: str,
                   metadata: Optional[Mapping[str, str]] = None):
        """
        Register ``signature`` with ``definition``.

        ``add_symbol("f(x,y)", "x+y")`` adds ``f`` with arguments ``['x', 'y']``;
        ``add_symbol("a", "1")`` adds the constant ``a``.

        Without metadata the signature is always validated, even if the name is
        already registered, but a re-registration changes nothing. With
        metadata, an already registered name makes the call a no-op.

        Raises:
            EquationParseError: the signature is malformed, an argument is an
                existing symbol, or the name is already a domain variable.
        """
        name, arguments = parse_signature(signature)

        if metadata is not None and name in self._symbols:
            log_debug(f"Symbol '{name}' already defined, ignoring '{signature.strip()}'")
            return

        self._validate(name, arguments)

        if name in self._symbols:
            log_debug(f"Symbol '{name}' already defined, ignoring '{signature.strip()}'")
            return

        symbol_meta: Dict[str, str] = dict(metadata) if metadata is not None else {}
        if is_matrix(definition):
            symbol_meta.update(derive_matrix_metadata(arguments))

        symbol = Symbol(name, list(arguments), definition, symbol_meta)
        self._symbols[name] = symbol
        log_debug(f"Registered {symbol.signature} = {definition}")

    def _validate(self, name: str, arguments: List[str]):
        if name in arguments:
            self._reject(f"{name} can't be used as one of its own arguments", name)

        # argument names must not shadow an existing function
        collisions = [arg for arg in arguments if arg in self._symbols]
        if len(collisions) == 1:
            self._reject(f"{name} has an signature argument {collisions} "
                         f"which is already a defined function", name)
        if len(collisions) > 1:
            self._reject(f"{name} has arguments {collisions} "
                         f"in the signature which are already defined functions", name)

        # the new name must not shadow an existing argument
        if name in self._domain_variable_set():
            self._reject(f"{name} can't be used as a function, "
                         f"it is already defined as a domain variable", name)

    def _reject(self, message: str, name: str):
        log_warning(f"Rejected symbol: {message}")
        raise EquationParseError(message, symbol=name)

    def _domain_variable_set(self) -> set:
        variables = set()
        for symbol in self._symbols.values():
            variables.update(symbol.arguments)
        return variables

    def is_symbol_defined(self, name: Optional[str]) -> bool:
        """False if name is None or not in the symbol list"""
        if name is None:
            return False
        return name in self._symbols

    def get_signature(self, name: str) -> str:
        """
        Reconstruct the signature of a registered symbol, ``f(x,y)`` for a
        function or just ``a`` for a constant.
        """
        symbol = self._symbols.get(name)
        if symbol is None:
            raise KeyError(name)
        return symbol.signature

    def get_arguments(self, name: str) -> Optional[List[str]]:
        symbol = self._symbols.get(name)
        if symbol is None:
            return None
        return list(symbol.arguments)

    def get_definition(self, name: str) -> Optional[str]:
        symbol = self._symbols.get(name)
        if symbol is None:
            return None
        return symbol.definition

    def get_all_domain_variables(self) -> List[str]:
        return sorted(self._domain_variable_set())

    def get_all_signatures(self) -> List[str]:
        return [symbol.signature for symbol in self._symbols.values()]

    def get_all_symbols(self) -> List[str]:
        return list(self._symbols)

    def get_metadata(self, name: str, key: Optional[str] = None):
        """
        Without ``key``, the symbol's metadata as a dict (empty if none was
        stored, never None). With ``key``, that value or None.
        """
        symbol = self._symbols.get(name)
        values = dict(symbol.metadata) if symbol is not None else {}
        if key is None:
            return values
        return values.get(key)
