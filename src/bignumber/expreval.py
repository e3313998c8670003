import ast
import re

from bignumber.exceptions import UserInputError
from bignumber.number import BigNumber
from bignumber.runtime import CFG
from bignumber.sequences import SequenceMemo, default_memo

# Literal digit runs (optionally grouped with '_'), not part of a float or name
_LITERAL_RE = re.compile(r"(?<![\w.])\d+(?:_\d+)*(?![\w.])")
_PLACEHOLDER = "__lit"

_ALLOWED_BINOPS = {
    ast.Add:  lambda a, b: a + b,
    ast.Sub:  lambda a, b: a - b,
    ast.Mult: lambda a, b: a * b,
    ast.Div:  lambda a, b: a / b,
    ast.Mod:  lambda a, b: a % b,
}
_ALLOWED_UNARYOPS = {
    ast.UAdd: lambda a: +a,
    ast.USub: lambda a: -a,
}
_SEQUENCES = {
    "fact": SequenceMemo.factorial,
    "fib": SequenceMemo.fibonacci,
    "catalan": SequenceMemo.catalan,
}

_MAX_NODES = 256  # sanity guard


class _ExprError(Exception):
    pass


def _max_digits() -> int:
    return int(CFG("BEHAVIOUR.MAX_DIGITS", 100_000))


def _max_index() -> int:
    return int(CFG("BEHAVIOUR.MAX_INDEX", 5_000))


def _check_digits(value: BigNumber, what: str = "result") -> BigNumber:
    limit = _max_digits()
    if value.ndigits > limit:
        raise UserInputError(
            f"{what} has more than {limit} decimal digits. "
            "Increase the limit in the profile or pass a smaller value."
        )
    return value


def _extract_literals(expr: str) -> tuple[str, dict[str, BigNumber]]:
    """Replace decimal literals by placeholder names; parse them as BigNumber."""
    table: dict[str, BigNumber] = {}

    def repl(m: re.Match) -> str:
        name = f"{_PLACEHOLDER}{len(table)}"
        table[name] = _check_digits(BigNumber(m.group(0).replace("_", "")), "number")
        return name

    return _LITERAL_RE.sub(repl, expr), table


def _operand_start(expr: str, end: int) -> int:
    """Start index of the operand ending just before `end` (a name or a (...) group)."""
    i = end
    while i > 0 and expr[i - 1] == " ":
        i -= 1
    if i > 0 and expr[i - 1] == ")":
        depth = 0
        j = i - 1
        while j >= 0:
            if expr[j] == ")":
                depth += 1
            elif expr[j] == "(":
                depth -= 1
                if depth == 0:
                    # include a function name directly before '(' (e.g. fib(5)!)
                    while j > 0 and (expr[j - 1].isalnum() or expr[j - 1] == "_"):
                        j -= 1
                    return j
            j -= 1
        raise _ExprError("unbalanced parentheses before '!'")
    j = i
    while j > 0 and (expr[j - 1].isalnum() or expr[j - 1] == "_"):
        j -= 1
    if j == i:
        raise _ExprError("'!' must follow a number or a parenthesized expression")
    return j


def _rewrite_factorial(expr: str) -> str:
    """Rewrite postfix 'x!' into 'fact(x)', innermost first, left to right."""
    while True:
        pos = expr.find("!")
        if pos < 0:
            return expr
        if expr.startswith("!=", pos):
            raise _ExprError("comparisons are not supported")
        start = _operand_start(expr, pos)
        expr = f"{expr[:start]}fact({expr[start:pos].strip()}){expr[pos + 1:]}"


def _index_of(value: BigNumber) -> int:
    if value.negative:
        raise UserInputError(f"n must be non-negative, got {value}.")
    limit = _max_index()
    if value > limit:
        raise UserInputError(
            f"n = {value} is above BEHAVIOUR.MAX_INDEX ({limit}). "
            "Increase the limit in the profile or pass a smaller value."
        )
    return int(value)


def _evaluate_tree(tree: ast.Expression, table: dict[str, BigNumber], memo: SequenceMemo) -> BigNumber:
    def _eval(node) -> BigNumber:
        if isinstance(node, ast.Expression):
            return _eval(node.body)

        if isinstance(node, ast.Name):
            if node.id in table:
                return table[node.id]
            raise _ExprError(f"unknown name {node.id!r}")

        if isinstance(node, ast.UnaryOp) and type(node.op) in _ALLOWED_UNARYOPS:
            return _ALLOWED_UNARYOPS[type(node.op)](_eval(node.operand))

        if isinstance(node, ast.BinOp) and type(node.op) in _ALLOWED_BINOPS:
            left = _eval(node.left)
            right = _eval(node.right)
            return _check_digits(_ALLOWED_BINOPS[type(node.op)](left, right))

        if isinstance(node, ast.Call):
            if not isinstance(node.func, ast.Name) or node.func.id not in _SEQUENCES:
                raise _ExprError("only fact(n), fib(n) and catalan(n) may be called")
            if node.keywords or len(node.args) != 1:
                raise _ExprError(f"{node.func.id}() takes exactly one argument")
            n = _index_of(_eval(node.args[0]))
            return _check_digits(_SEQUENCES[node.func.id](memo, n))

        if isinstance(node, ast.Constant):
            raise _ExprError(f"unsupported literal {node.value!r}")

        raise _ExprError(f"unsupported syntax: {type(node).__name__}")

    return _eval(tree)


def evaluate(expr: str, memo: SequenceMemo | None = None) -> BigNumber:
    """
    Evaluate a BigNumber expression.

    Allowed: decimal literals of any length (digits may be grouped with '_'),
             parentheses, + - * / %, unary +/-, postfix '!',
             fact(n), fib(n), catalan(n).
    '/' and '%' truncate toward zero.

    Raises UserInputError for anything else; InvalidFormat and
    DivisionByZero propagate unchanged.
    """
    text = (expr or "").strip()
    if not text:
        raise UserInputError("empty expression.")
    if _PLACEHOLDER in text:
        raise UserInputError(f"invalid expression '{expr}'.")

    body, table = _extract_literals(text)
    try:
        body = _rewrite_factorial(body)
        tree = ast.parse(body, mode="eval")
        if sum(1 for _ in ast.walk(tree)) > _MAX_NODES:
            raise _ExprError("expression too large")
        return _evaluate_tree(tree, table, memo or default_memo())
    except SyntaxError:
        raise UserInputError(f"invalid expression '{expr}'.") from None
    except _ExprError as e:
        raise UserInputError(f"invalid expression '{expr}': {e}.") from None
