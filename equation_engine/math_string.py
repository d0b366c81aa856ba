"""
Signature helpers.

A signature is either a bare name (``a``) or a name followed by a
parenthesised argument list (``f(x,y)``). These helpers pull the name and the
argument names out of it and classify definitions as matrix literals.
"""

import re
from typing import List, Tuple

from .errors import EquationParseError

# Metadata keys derived for matrix-valued definitions
INDEPENDENT_VARIABLE = 'independent variable'
INDEPENDENT_VARIABLE_1 = 'independent variable 1'
INDEPENDENT_VARIABLE_2 = 'independent variable 2'

_IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')
_MATRIX = re.compile(r'^\[.*\]$', re.DOTALL)


def get_function_name(signature: str) -> str:
    """``f(x,y)`` -> ``f``, ``a`` -> ``a``"""
    signature = signature.strip()
    paren = signature.find('(')
    if paren == -1:
        return signature
    return signature[:paren].strip()


def get_function_args(signature: str) -> List[str]:
    """``f(x, y)`` -> ``['x', 'y']``; a bare name or ``f()`` gives ``[]``"""
    signature = signature.strip()
    start = signature.find('(')
    if start == -1:
        return []
    end = signature.rfind(')')
    if end == -1:
        end = len(signature)
    inner = signature[start + 1:end].strip()
    if not inner:
        return []
    return [arg.strip() for arg in inner.split(',')]


def parse_signature(signature: str) -> Tuple[str, List[str]]:
    """Validate a signature and split it into its name and argument list."""
    if signature is None:
        raise EquationParseError("signature is missing")

    signature = signature.strip()
    name = get_function_name(signature)
    if not _IDENTIFIER.match(name):
        raise EquationParseError(f"'{name}' is not a valid symbol name in signature '{signature}'",
                                 symbol=name)

    if '(' not in signature:
        if ')' in signature:
            raise EquationParseError(f"unbalanced parentheses in signature '{signature}'", symbol=name)
        return name, []

    if signature.count('(') != 1 or signature.count(')') != 1 or not signature.endswith(')'):
        raise EquationParseError(f"malformed argument list in signature '{signature}'",
                                 symbol=name, offset=signature.find('('))

    args = get_function_args(signature)
    for arg in args:
        if not _IDENTIFIER.match(arg):
            raise EquationParseError(f"{name} has an invalid argument name '{arg}'", symbol=name)

    seen = set()
    for arg in args:
        if arg in seen:
            raise EquationParseError(f"{name} repeats the argument '{arg}'", symbol=name)
        seen.add(arg)

    return name, args


def is_matrix(definition: str) -> bool:
    """True if the definition is a bracketed array literal such as ``[1,2,3]``"""
    if definition is None:
        return False
    return bool(_MATRIX.match(definition.strip()))
