from __future__ import annotations

import ast
import logging
from abc import ABC
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    Generic,
    Literal,
    NamedTuple,
    TypeAlias,
    TypeGuard,
    TypeVar,
    assert_never,
    cast,
    final,
)

from predval.predicate.errs import NotAPredicateError

if TYPE_CHECKING:
    from predval.types import LogicBinOp, LogicUnaryOp, PredicateNodeType

logger = logging.getLogger(__name__)

T_contra = TypeVar("T_contra", contravariant=True)

PredicateFn = Callable[[T_contra], bool]

COMPILED_PREDICATE = "_compiled_predicate"
CTX = "ctx"
# Deeper expressions are moved into helper functions; CPython's compile() recurses over the AST.
MAX_INLINE_DEPTH = 100


@dataclass(frozen=True, kw_only=True)
class Predicate(Generic[T_contra], ABC):
    """
    Base class for predicate nodes in the predicate tree.

    The tree is compiled into a single flat function the first time it is
    applied. Intermediate nodes built while chaining are never compiled.
    """

    node_type: PredicateNodeType = field(init=False)
    name: str | None = field(default=None)
    desc: str | None = field(default=None)
    _runner: Callable[[T_contra], bool] | None = field(
        default=None,
        init=False,
        repr=False,
        hash=False,
        compare=False,
    )

    def __call__(self, value: T_contra, /) -> bool:
        """
        Apply the predicate to a value.
        """
        runner = self._runner
        if runner is None:
            # Set once. A concurrent first call compiles an equivalent function.
            runner = Compiler().compile(self)
            object.__setattr__(self, "_runner", runner)
        return runner(value)

    def __and__(self, other: Predicate[T_contra]) -> Predicate[T_contra]:
        """
        Combine this predicate with another using logical AND.
        """
        if not is_predicate(other):
            return NotImplemented
        return _PredicateAnd(children=(self, other))

    def __or__(self, other: Predicate[T_contra]) -> Predicate[T_contra]:
        if not is_predicate(other):
            return NotImplemented
        return _PredicateOr(children=(self, other))

    def __invert__(self) -> Predicate[T_contra]:
        return _PredicateNot(op=self)


def predicate(fn: PredicateFn[T_contra], *, name: str | None = None, desc: str | None = None) -> Predicate[T_contra]:
    """
    Create a Predicate from the function.
    """

    return _PredicateLeaf(fn=fn, name=name or getattr(fn, "__name__", None), desc=desc or fn.__doc__)


def is_predicate(p: Any) -> TypeGuard[Predicate]:  # noqa: ANN401
    """
    Check if the given object is a valid predicate.
    """

    return isinstance(p, Predicate)


def as_predicate(p: Predicate[T_contra] | PredicateFn[T_contra]) -> Predicate[T_contra]:
    """
    Return predicates unchanged and lift plain callables into leaf predicates.

    Raises:
        NotAPredicateError: If `p` is neither a predicate nor callable.
    """
    if is_predicate(p):
        return p
    if callable(p):
        return predicate(p)
    raise NotAPredicateError(p)


def and_(*predicates: Predicate[T_contra] | PredicateFn[T_contra]) -> Predicate[T_contra]:
    """
    Lazy boolean AND over the predicates, evaluated left to right.

    Evaluation stops at the first predicate returning false. With no predicates the result is always true.

    Examples:
        >>> from predval import float_, negative
        >>> and_(float_(), negative())(-0.1)
        True
        >>> and_(float_(), negative())(-1)
        False
    """
    return _PredicateAnd(children=tuple(as_predicate(p) for p in predicates))


def or_(*predicates: Predicate[T_contra] | PredicateFn[T_contra]) -> Predicate[T_contra]:
    """
    Lazy boolean OR over the predicates, evaluated left to right.

    Evaluation stops at the first predicate returning true. With no predicates the result is always false.
    """
    return _PredicateOr(children=tuple(as_predicate(p) for p in predicates))


def not_(p: Predicate[T_contra] | PredicateFn[T_contra]) -> Predicate[T_contra]:
    """
    Negate a predicate.
    """
    return _PredicateNot(op=as_predicate(p))


def opt(p: Predicate[T_contra] | PredicateFn[T_contra]) -> Predicate[T_contra | None]:
    """
    Accept `None` without evaluating `p`, otherwise delegate to `p`.
    """
    return _PredicateOpt(op=as_predicate(p))


@dataclass(frozen=True, kw_only=True, slots=True)
@final
class _PredicateLeaf(Predicate[T_contra]):
    """
    Leaf node in the predicate tree.
    """

    node_type: Literal["leaf"] = field(default="leaf", init=False)
    fn: PredicateFn[T_contra]


@dataclass(frozen=True, kw_only=True, slots=True)
@final
class _PredicateAnd(Predicate[T_contra]):
    """
    All children must hold.
    """

    node_type: Literal["and"] = field(default="and", init=False)
    children: tuple[Predicate[T_contra], ...]


@dataclass(frozen=True, kw_only=True, slots=True)
@final
class _PredicateOr(Predicate[T_contra]):
    """
    At least one child must hold.
    """

    node_type: Literal["or"] = field(default="or", init=False)
    children: tuple[Predicate[T_contra], ...]


@dataclass(frozen=True, kw_only=True, slots=True)
@final
class _PredicateNot(Predicate[T_contra]):
    """
    The child must fail.
    """

    node_type: Literal["not"] = field(default="not", init=False)
    op: Predicate[T_contra]


@dataclass(frozen=True, kw_only=True, slots=True)
@final
class _PredicateOpt(Predicate[T_contra]):
    """
    None passes, anything else goes to the child.
    """

    node_type: Literal["opt"] = field(default="opt", init=False)
    op: Predicate[T_contra]


PredicateNode: TypeAlias = (
    _PredicateLeaf[T_contra]
    | _PredicateAnd[T_contra]
    | _PredicateOr[T_contra]
    | _PredicateNot[T_contra]
    | _PredicateOpt[T_contra]
)


class Compiler:
    """
    Compiler for predicate trees.

    Turns a whole tree into one function whose body is a single expression built
    from native `and` / `or` / `not`, so short-circuiting is Python's own.
    Subexpressions nested deeper than `MAX_INLINE_DEPTH` are compiled into their
    own helper functions, so `compile` never sees a deeply nested AST.
    """

    def __init__(self):
        self._leaf_counter = 0
        self._subtree_counter = 0
        self._leaf_map: dict[int, str] = {}
        self._context: dict[str, Any] = {}

    def _register_leaf(self, leaf: _PredicateLeaf) -> str:
        # Leaves shared between branches are bound once.
        cache_key = id(leaf)

        if cache_key not in self._leaf_map:
            name = f"_leaf_{self._leaf_counter}"
            self._leaf_counter += 1
            self._leaf_map[cache_key] = name
            self._context[name] = leaf.fn

        return self._leaf_map[cache_key]

    @staticmethod
    def _collect_chain(node: _PredicateAnd | _PredicateOr, node_type: LogicBinOp) -> list[Predicate]:
        """
        Flatten directly nested nodes of the same operator, keeping source order.
        """
        chain = []
        pending = list(reversed(node.children))

        while pending:
            current = pending.pop()
            if isinstance(current, (_PredicateAnd, _PredicateOr)) and current.node_type == node_type:
                pending.extend(reversed(current.children))
            else:
                chain.append(current)

        return chain

    @staticmethod
    def _fix_locations_iterative(root: ast.AST) -> None:
        """
        Iterative implementation of ast.fix_missing_locations.
        """
        stack = [root]

        while stack:
            node = stack.pop()
            if "lineno" in node._attributes and not getattr(node, "lineno", None):
                node.lineno = 1
                node.col_offset = 0
                node.end_lineno = 1
                node.end_col_offset = 0

            stack.extend(ast.iter_child_nodes(node))

    @staticmethod
    def _call(func_name: str) -> ast.Call:
        return ast.Call(
            func=ast.Name(id=func_name, ctx=ast.Load()),
            args=[ast.Name(id=CTX, ctx=ast.Load())],
            keywords=[],
        )

    def _define(self, func_name: str, expr: ast.expr) -> Callable[[Any], bool]:
        """
        Compile `def <func_name>(ctx): return bool(<expr>)` into the shared namespace.
        """
        body_expr = ast.Call(func=ast.Name(id="bool", ctx=ast.Load()), args=[expr], keywords=[])
        func_def = ast.FunctionDef(
            name=func_name,
            args=ast.arguments(
                posonlyargs=[],
                args=[ast.arg(arg=CTX)],
                vararg=None,
                kwonlyargs=[],
                kw_defaults=[],
                kwarg=None,
                defaults=[],
            ),
            body=[ast.Return(value=body_expr)],
            decorator_list=[],
            returns=None,
            type_params=[],
        )
        module = ast.Module(body=[func_def], type_ignores=[])

        self._fix_locations_iterative(module)
        code_obj = compile(module, filename="<predicate>", mode="exec")
        exec(code_obj, self._context)  # noqa: S102
        return self._context[func_name]

    def _outline(self, expr: ast.expr, depth: int) -> tuple[ast.expr, int]:
        """
        Replace an expression nested too deeply with a call to a helper function evaluating it.
        """
        if depth <= MAX_INLINE_DEPTH:
            return expr, depth

        func_name = f"_subtree_{self._subtree_counter}"
        self._subtree_counter += 1
        self._define(func_name, expr)
        return self._call(func_name), 1

    class CompileStack(NamedTuple):
        """
        Represents a stack entry for predicate compilation.
        """

        node: Predicate | tuple[Literal["FLATTENED"], LogicBinOp, int]
        visited: bool

    def compile(self, p: Predicate[T_contra]) -> Callable[[T_contra], bool]:
        """
        Compile the tree rooted at `p` into a plain function.
        """
        stack = [self.CompileStack(p, visited=False)]
        # Each entry is an expression and its nesting depth.
        results: list[tuple[ast.expr, int]] = []

        while stack:
            node, visited = stack.pop()
            if isinstance(node, tuple):
                _, op_type, count = node
                split = len(results) - count
                children = results[split:]
                del results[split:]

                results.append(self._outline(*self._process_binary(op_type, children)))
                continue

            node = cast("PredicateNode", node)
            if visited:
                child = results.pop()
                results.append(self._outline(*self._process_unary(node.node_type, child)))
                continue

            match node:
                case _PredicateLeaf() as leaf:
                    results.append((self._call(self._register_leaf(leaf)), 1))
                case _PredicateAnd(node_type=node_type) | _PredicateOr(node_type=node_type):
                    chain = self._collect_chain(node, node_type)
                    stack.append(self.CompileStack(("FLATTENED", node_type, len(chain)), visited=False))
                    stack.extend(self.CompileStack(child, visited=False) for child in reversed(chain))
                case _PredicateNot(op=_PredicateNot(op=inner)):
                    # not not x has the truthiness of x
                    stack.append(self.CompileStack(inner, visited=False))
                case _PredicateOpt(op=_PredicateOpt() as inner):
                    stack.append(self.CompileStack(inner, visited=False))
                case _PredicateNot(op=op) | _PredicateOpt(op=op):
                    stack.append(self.CompileStack(node, visited=True))
                    stack.append(self.CompileStack(op, visited=False))
                case _:
                    assert_never(node)

        root_expr, _ = results.pop()
        compiled = self._define(COMPILED_PREDICATE, root_expr)

        logger.debug(
            "Compiled %s predicate with %d leaves and %d helpers",
            p.node_type,
            self._leaf_counter,
            self._subtree_counter,
        )
        return compiled

    @staticmethod
    def _process_binary(node_type: LogicBinOp, children: list[tuple[ast.expr, int]]) -> tuple[ast.expr, int]:
        """Process AND/OR (native short-circuit)."""
        if not children:
            return ast.Constant(value=node_type == "and"), 1
        if len(children) == 1:
            return children[0]
        op = ast.And() if node_type == "and" else ast.Or()
        depth = max(child_depth for _, child_depth in children) + 1
        return ast.BoolOp(op=op, values=[expr for expr, _ in children]), depth

    @staticmethod
    def _process_unary(node_type: LogicUnaryOp, child: tuple[ast.expr, int]) -> tuple[ast.expr, int]:
        """Process NOT (logical not) and OPT (`ctx is None or ...`)."""
        child_expr, child_depth = child
        if node_type == "not":
            return ast.UnaryOp(op=ast.Not(), operand=child_expr), child_depth + 1
        is_none = ast.Compare(
            left=ast.Name(id=CTX, ctx=ast.Load()),
            ops=[ast.Is()],
            comparators=[ast.Constant(value=None)],
        )
        return ast.BoolOp(op=ast.Or(), values=[is_none, child_expr]), child_depth + 1
