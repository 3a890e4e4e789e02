"""Tree-walking evaluator for the sugiru language. evaluate reduces an AST node to a runtime Value by structural
recursion, dispatching on the node's class.

Semantics in brief:
    - a Program or block is worth the value of its last statement; a return statement cuts it short
    - integers are signed 64-bit and wrap on overflow; division truncates toward zero
    - only NULL and FALSE are falsy in an if condition, but "!" only inverts the two booleans (!5 is false)
    - operators applied to the wrong types give NULL rather than an error
    - division by zero, unbound names and bad calls raise EvaluationError
"""

from sugiru.lang import syntax
from sugiru.lang.error import EvaluationError
from sugiru.lang.objects import (FALSE, NULL, TRUE, Environment, Function, Integer, ReturnValue, native_bool)


INT64_MASK = 2 ** 64
INT64_SIGN = 2 ** 63


def wrap_int64(value):
    """Reduces value into the signed 64-bit range, two's-complement style."""
    value %= INT64_MASK
    return value - INT64_MASK if value >= INT64_SIGN else value


def truncated_div(left, right):
    """Integer division rounding toward zero (Python's // rounds toward negative infinity)."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def evaluate(node, env=None):
    """Evaluates node in env (a fresh top-level Environment if None). Returns a Value, or None for statements that
    produce nothing (let) and for subtrees the parser could not build.
    """
    if env is None:
        env = Environment()

    # statements
    if isinstance(node, syntax.Program):
        return evaluate_program(node, env)

    elif isinstance(node, syntax.BlockStatement):
        return evaluate_block(node, env)

    elif isinstance(node, syntax.ExpressionStatement):
        return evaluate(node.expression, env)

    elif isinstance(node, syntax.LetStatement):
        value = evaluate(node.value, env)
        env.set(node.name.value, value if value is not None else NULL)  # e.g. a call whose body ends in a let
        return None

    elif isinstance(node, syntax.ReturnStatement):
        value = evaluate(node.return_value, env)
        return ReturnValue(value if value is not None else NULL)

    # expressions
    elif isinstance(node, syntax.IntegerLiteral):
        return Integer(node.value)

    elif isinstance(node, syntax.Boolean):
        return native_bool(node.value)

    elif isinstance(node, syntax.Identifier):
        return evaluate_identifier(node, env)

    elif isinstance(node, syntax.PrefixExpression):
        right = evaluate(node.right, env)
        return evaluate_prefix(node.operator, right)

    elif isinstance(node, syntax.InfixExpression):
        left = evaluate(node.left, env)
        right = evaluate(node.right, env)
        return evaluate_infix(node, left, right)

    elif isinstance(node, syntax.IfExpression):
        return evaluate_if(node, env)

    elif isinstance(node, syntax.FunctionLiteral):
        return Function(node.parameters, node.body, env)

    elif isinstance(node, syntax.CallExpression):
        function = evaluate(node.function, env)
        args = [evaluate(arg, env) for arg in node.arguments]
        return apply_function(node, function, args)

    return None


def evaluate_program(program, env):
    result = None
    for stmt in program.statements:
        result = evaluate(stmt, env)
        if isinstance(result, ReturnValue):
            return result.value
    return result


def evaluate_block(block, env):
    """Like evaluate_program, but a ReturnValue is passed up still wrapped so enclosing blocks stop too."""
    result = None
    for stmt in block.statements:
        result = evaluate(stmt, env)
        if isinstance(result, ReturnValue):
            return result
    return result


def evaluate_identifier(node, env):
    value = env.get(node.value)
    if value is None:
        raise EvaluationError("identifier not found: '{}'", node)
    return value


def evaluate_prefix(operator, right):
    if operator == "!":
        return evaluate_bang(right)
    elif operator == "-":
        return evaluate_minus(right)
    return NULL


def evaluate_bang(right):
    if right is FALSE:
        return TRUE
    return FALSE  # TRUE, NULL, and every non-boolean


def evaluate_minus(right):
    if not isinstance(right, Integer):
        return NULL
    return Integer(wrap_int64(-right.value))


def evaluate_infix(node, left, right):
    operator = node.operator

    if isinstance(left, Integer) and isinstance(right, Integer):
        return evaluate_integer_infix(node, left.value, right.value)

    # TRUE, FALSE and NULL are singletons, so identity is equality
    elif left in (TRUE, FALSE, NULL) and right in (TRUE, FALSE, NULL):
        if operator == "==":
            return native_bool(left is right)
        elif operator == "!=":
            return native_bool(left is not right)

    return NULL


def evaluate_integer_infix(node, left, right):
    operator = node.operator

    if operator == "+":
        return Integer(wrap_int64(left + right))
    elif operator == "-":
        return Integer(wrap_int64(left - right))
    elif operator == "*":
        return Integer(wrap_int64(left * right))
    elif operator == "/":
        if right == 0:
            raise EvaluationError("division by zero: '{}'", node)
        return Integer(wrap_int64(truncated_div(left, right)))
    elif operator == "<":
        return native_bool(left < right)
    elif operator == ">":
        return native_bool(left > right)
    elif operator == "==":
        return native_bool(left == right)
    elif operator == "!=":
        return native_bool(left != right)
    return NULL


def is_truthy(value):
    return value is not NULL and value is not FALSE and value is not None


def evaluate_if(node, env):
    condition = evaluate(node.condition, env)

    if is_truthy(condition):
        return evaluate(node.then, env)
    elif node.else_ is not None:
        return evaluate(node.else_, env)
    return NULL


def apply_function(node, function, args):
    """Calls function with already-evaluated args in a new scope enclosed by the function's defining scope."""
    if not isinstance(function, Function):
        kind = function.type() if function is not None else "nothing"
        raise EvaluationError("'{}' is not a function, got {}", node.function, kind)

    if len(args) != len(function.parameters):
        raise EvaluationError("'{}' expects {} argument(s), got {}", node, len(function.parameters), len(args))

    env = Environment.enclosed(function.env)
    for param, arg in zip(function.parameters, args):
        env.set(param.value, arg if arg is not None else NULL)

    result = evaluate(function.body, env)
    if isinstance(result, ReturnValue):
        return result.value
    return result
