"""
Tree-walking interpreter for Iodine.

Evaluates AST nodes against an InterpreterState. Assignment and if
produce the Null value; every other node produces a value.
"""

import logging
from typing import List, Sequence

from .values import (
    Value, NULL_VALUE, bool_val,
    add, subtract, multiply, divide, flip_sign, is_equal, as_type,
)
from ..ast import (
    Node, ConstVal, Arithmetic, UnaryOp, VarAssignment, VariableReference,
    FunctionCall, Comparison, If,
    ArithmeticOp, UnaryOperation,
)
from .context import InterpreterState, Variable
from ..types import DataType
from ..errors import (
    error_undefined_variable,
    error_undefined_function,
    error_assignment_type,
    error_invalid_operation,
)

logger = logging.getLogger(__name__)

_ARITHMETIC = {
    ArithmeticOp.ADD: add,
    ArithmeticOp.SUBTRACT: subtract,
    ArithmeticOp.MULTIPLY: multiply,
    ArithmeticOp.DIVIDE: divide,
}


def evaluate(node: Node, state: InterpreterState) -> Value:
    """Evaluate a single node to produce a Value."""
    if isinstance(node, ConstVal):
        return node.value
    elif isinstance(node, Arithmetic):
        return _eval_arithmetic(node, state)
    elif isinstance(node, UnaryOp):
        return _eval_unary_op(node, state)
    elif isinstance(node, VariableReference):
        return _eval_variable_reference(node, state)
    elif isinstance(node, VarAssignment):
        return _eval_assignment(node, state)
    elif isinstance(node, FunctionCall):
        return _eval_function_call(node, state)
    elif isinstance(node, Comparison):
        return _eval_comparison(node, state)
    elif isinstance(node, If):
        return _eval_if(node, state)
    else:
        raise TypeError(f"Unknown node type: {type(node).__name__}")


def _eval_arithmetic(node: Arithmetic, state: InterpreterState) -> Value:
    left = evaluate(node.left, state)
    right = evaluate(node.right, state)
    return _ARITHMETIC[node.op](left, right)


def _eval_unary_op(node: UnaryOp, state: InterpreterState) -> Value:
    operand = evaluate(node.operand, state)
    if node.op == UnaryOperation.MINUS:
        return flip_sign(operand)
    return operand


def _eval_variable_reference(node: VariableReference, state: InterpreterState) -> Value:
    variable = state.get_variable(node.name)
    if variable is None:
        raise error_undefined_variable(node.name)
    return variable.value


def _eval_assignment(node: VarAssignment, state: InterpreterState) -> Value:
    if node.is_declaration:
        value = as_type(evaluate(node.value, state), node.declared_type)
        state.set_variable(Variable(node.name, node.declared_type, value))
        logger.debug("declared %s %s = %r", node.declared_type, node.name, value)
        return NULL_VALUE

    variable = state.get_variable(node.name)
    if variable is None:
        raise error_undefined_variable(node.name)

    # Reassignment keeps the declared type and never converts
    value = evaluate(node.value, state)
    if value.type != variable.declared_type:
        raise error_assignment_type(node.name, str(variable.declared_type), str(value.type))
    variable.value = value
    return NULL_VALUE


def _eval_function_call(node: FunctionCall, state: InterpreterState) -> Value:
    func = state.get_function(node.name)
    if func is None:
        raise error_undefined_function(node.name)
    if not func.is_builtin:
        raise error_invalid_operation("calling", f"non-builtin function '{node.name}'")
    return func.implementation(node.args, state)


def _eval_comparison(node: Comparison, state: InterpreterState) -> Value:
    lhs = evaluate(node.lhs, state)
    rhs = evaluate(node.rhs, state)
    return bool_val(is_equal(lhs, rhs))


def _eval_if(node: If, state: InterpreterState) -> Value:
    condition = as_type(evaluate(node.condition, state), DataType.BOOLEAN)
    if condition.data:
        for statement in node.body:
            evaluate(statement, state)
    return NULL_VALUE


def execute(statements: Sequence[Node], state: InterpreterState) -> List[Value]:
    """
    Evaluate statements in order.

    Returns the value of each statement. Evaluation stops at the first
    error, which propagates to the caller.
    """
    results = []
    for statement in statements:
        results.append(evaluate(statement, state))
    logger.debug("executed %d statement(s)", len(results))
    return results


def run_source(source: str, state: InterpreterState) -> List[Value]:
    """
    Tokenize, parse and execute source text in one call.

        from iodine.runtime import create_state, run_source

        state = create_state()
        run_source('f64 x = 2.5; println(x * 2)', state)

    Raises:
        IodineError: On the first lexer, parser or evaluation error
    """
    from ..lexer import tokenize
    from ..parser import parse_statements

    return execute(parse_statements(tokenize(source)), state)
