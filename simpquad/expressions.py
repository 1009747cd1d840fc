"""
Formulas from text, e.g. ``"2 * x + 1 / sqrt(x + 1 / 16)"``.

Only arithmetic on ``x``, numeric constants and a small set of numpy
functions is accepted; the formula is checked against an AST whitelist
before it is compiled.
"""
from __future__ import annotations

import ast
import logging

import numpy as np

from .model import Function

logger = logging.getLogger(__name__)

VARIABLE = "x"

NAMESPACE = {
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "exp": np.exp,
    "log": np.log,
    "log10": np.log10,
    "sqrt": np.sqrt,
    "abs": np.abs,
    "sinh": np.sinh,
    "cosh": np.cosh,
    "tanh": np.tanh,
    "arctan": np.arctan,
    "pi": np.pi,
    "e": np.e,
}

_ALLOWED_NODES = (
    ast.Expression, ast.Call, ast.Name, ast.Load, ast.BinOp,
    ast.UnaryOp, ast.operator, ast.unaryop, ast.Constant,
)


def _has_name(node: ast.AST) -> bool:
    return any(isinstance(child, ast.Name) for child in ast.walk(node))


def validate_formula(formula: str) -> bool:
    """Check that ``formula`` only uses whitelisted syntax and names.

    Returns:
        True if the formula is valid, otherwise False
    """
    try:
        tree = ast.parse(formula, mode="eval")
    except SyntaxError:
        return False

    for node in ast.walk(tree):
        if not isinstance(node, _ALLOWED_NODES):
            return False
        if isinstance(node, ast.Name) and node.id != VARIABLE and node.id not in NAMESPACE:
            return False
        if isinstance(node, ast.Constant) and (
                isinstance(node.value, bool) or not isinstance(node.value, (int, float))):
            return False
        # Constant-only powers run in integer arithmetic and can take forever.
        if isinstance(node, ast.BinOp) and isinstance(node.op, ast.Pow) and not _has_name(node):
            return False
        if isinstance(node, ast.Call) and (node.keywords or not isinstance(node.func, ast.Name)):
            return False
    return True


def compile_formula(formula: str) -> Function:
    """Compile ``formula`` into a Function of ``x``.

    ``^`` is accepted as the power operator.

    Raises:
        ValueError: If the formula is not valid
    """
    source = formula.replace("^", "**")
    if not validate_formula(source):
        raise ValueError(f"Invalid formula: {formula!r}")

    code = compile(f"lambda {VARIABLE}: {source}", "<formula>", "eval")
    action = eval(code, {"__builtins__": {}, **NAMESPACE})
    logger.debug("compiled formula %r", source)
    return Function(action)
