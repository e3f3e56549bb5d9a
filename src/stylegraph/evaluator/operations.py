"""Operation table: what each node kind computes.

Every operation receives the running evaluation and the node, and pulls
its inputs lazily through ``ev.input(node, socket)``. Inputs are read in
the same order the embedded runtime reads them, so memoization, cycle
breaking and RANDOM sampling line up between the two.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any, TYPE_CHECKING

from stylegraph.evaluator.coercion import (
    format_number,
    loose_equals,
    number_or,
    or_default,
    to_number,
    to_string,
    truthy,
)
from stylegraph.events.types import AlertEvent, LinkEvent, NavigateEvent
from stylegraph.nodes.catalog import LITERAL_KINDS, LOOPING_ANIMATIONS

if TYPE_CHECKING:
    from stylegraph.evaluator.core import Evaluation
    from stylegraph.graph.core import Node

Operation = Callable[["Evaluation", "Node"], Any]

OPERATIONS: dict[str, Operation] = {}


def operation(*kinds: str) -> Callable[[Operation], Operation]:
    """Register a function as the operation for one or more node kinds."""

    def decorator(func: Operation) -> Operation:
        for kind in kinds:
            OPERATIONS[kind] = func
        return func

    return decorator


def passthrough(ev: Evaluation, node: Node) -> Any:
    """Literal kinds and unknown kinds return their literal payload."""
    return node.value


for _kind in LITERAL_KINDS:
    OPERATIONS[_kind] = passthrough


# ---------------------------------------------------------------------------
# Number helpers with browser semantics (no exceptions, NaN/Infinity instead)
# ---------------------------------------------------------------------------


def _finite_or_nan(func: Callable[[float], float], x: float) -> float:
    return func(x) if math.isfinite(x) else math.nan


def _js_round(x: float) -> float:
    """Half-up rounding (``Math.round``): 2.5 -> 3, -2.5 -> -2."""
    if not math.isfinite(x):
        return x
    floor = math.floor(x)
    return float(floor + 1 if x - floor >= 0.5 else floor)


def _js_floor(x: float) -> float:
    return float(math.floor(x)) if math.isfinite(x) else x


def _js_ceil(x: float) -> float:
    return float(math.ceil(x)) if math.isfinite(x) else x


def _js_min(a: float, b: float) -> float:
    return math.nan if math.isnan(a) or math.isnan(b) else min(a, b)


def _js_max(a: float, b: float) -> float:
    return math.nan if math.isnan(a) or math.isnan(b) else max(a, b)


def _odd_integer(x: float) -> bool:
    return math.isfinite(x) and x.is_integer() and int(x) % 2 == 1


def _js_pow(base: float, exp: float) -> float:
    if math.isnan(exp):
        return math.nan
    if exp == 0:
        return 1.0
    if abs(base) == 1 and math.isinf(exp):
        return math.nan
    try:
        return math.pow(base, exp)
    except OverflowError:
        return -math.inf if base < 0 and _odd_integer(exp) else math.inf
    except (ValueError, ZeroDivisionError):
        if base == 0 and exp < 0:
            negative_zero = math.copysign(1.0, base) < 0
            return -math.inf if negative_zero and _odd_integer(exp) else math.inf
        return math.nan


def _js_fmod(a: float, b: float) -> float:
    """Remainder truncated toward zero (sign follows the dividend)."""
    try:
        return math.fmod(a, b)
    except ValueError:
        return math.nan


# ---------------------------------------------------------------------------
# Comparison and boolean logic
# ---------------------------------------------------------------------------


@operation("EQUAL")
def _equal(ev: Evaluation, node: Node) -> bool:
    return loose_equals(ev.input(node, "in-a"), ev.input(node, "in-b"))


@operation("NOT_EQUAL")
def _not_equal(ev: Evaluation, node: Node) -> bool:
    return not loose_equals(ev.input(node, "in-a"), ev.input(node, "in-b"))


def _numeric_pair(ev: Evaluation, node: Node) -> tuple[float, float]:
    return to_number(ev.input(node, "in-a")), to_number(ev.input(node, "in-b"))


@operation("GREATER_THAN")
def _greater_than(ev: Evaluation, node: Node) -> bool:
    a, b = _numeric_pair(ev, node)
    return a > b


@operation("LESS_THAN")
def _less_than(ev: Evaluation, node: Node) -> bool:
    a, b = _numeric_pair(ev, node)
    return a < b


@operation("GREATER_EQUAL")
def _greater_equal(ev: Evaluation, node: Node) -> bool:
    a, b = _numeric_pair(ev, node)
    return a >= b


@operation("LESS_EQUAL")
def _less_equal(ev: Evaluation, node: Node) -> bool:
    a, b = _numeric_pair(ev, node)
    return a <= b


@operation("AND")
def _and(ev: Evaluation, node: Node) -> bool:
    return truthy(ev.input(node, "in-a")) and truthy(ev.input(node, "in-b"))


@operation("OR")
def _or(ev: Evaluation, node: Node) -> bool:
    return truthy(ev.input(node, "in-a")) or truthy(ev.input(node, "in-b"))


@operation("NOT")
def _not(ev: Evaluation, node: Node) -> bool:
    return not truthy(ev.input(node, "in-a"))


# ---------------------------------------------------------------------------
# Arithmetic
# ---------------------------------------------------------------------------


def _operand(ev: Evaluation, node: Node, socket: str, default: float = 0) -> float:
    return number_or(ev.input(node, socket), default)


@operation("ADD")
def _add(ev: Evaluation, node: Node) -> float:
    return _operand(ev, node, "in-a") + _operand(ev, node, "in-b")


@operation("SUBTRACT")
def _subtract(ev: Evaluation, node: Node) -> float:
    return _operand(ev, node, "in-a") - _operand(ev, node, "in-b")


@operation("MULTIPLY")
def _multiply(ev: Evaluation, node: Node) -> float:
    return _operand(ev, node, "in-a") * _operand(ev, node, "in-b")


def _divisor(ev: Evaluation, node: Node) -> float:
    # Only a missing divisor defaults to 1; an explicit 0 stays 0.
    raw = ev.input(node, "in-b")
    return 1.0 if raw is None else to_number(raw)


@operation("DIVIDE")
def _divide(ev: Evaluation, node: Node) -> float:
    divisor = _divisor(ev, node)
    if divisor == 0:
        return 0
    return _operand(ev, node, "in-a") / divisor


@operation("MODULO")
def _modulo(ev: Evaluation, node: Node) -> float:
    divisor = _divisor(ev, node)
    if divisor == 0:
        return 0
    return _js_fmod(_operand(ev, node, "in-a"), divisor)


@operation("POWER")
def _power(ev: Evaluation, node: Node) -> float:
    return _js_pow(_operand(ev, node, "in-a"), _operand(ev, node, "in-b", 1))


@operation("NEGATE")
def _negate(ev: Evaluation, node: Node) -> float:
    return -_operand(ev, node, "in-a")


@operation("ABS")
def _abs(ev: Evaluation, node: Node) -> float:
    return abs(_operand(ev, node, "in-a"))


@operation("ROUND")
def _round(ev: Evaluation, node: Node) -> float:
    return _js_round(_operand(ev, node, "in-a"))


@operation("FLOOR")
def _floor(ev: Evaluation, node: Node) -> float:
    return _js_floor(_operand(ev, node, "in-a"))


@operation("CEIL")
def _ceil(ev: Evaluation, node: Node) -> float:
    return _js_ceil(_operand(ev, node, "in-a"))


@operation("MIN")
def _min(ev: Evaluation, node: Node) -> float:
    return _js_min(_operand(ev, node, "in-a"), _operand(ev, node, "in-b"))


@operation("MAX")
def _max(ev: Evaluation, node: Node) -> float:
    return _js_max(_operand(ev, node, "in-a"), _operand(ev, node, "in-b"))


@operation("CLAMP")
def _clamp(ev: Evaluation, node: Node) -> float:
    value = _operand(ev, node, "in-value")
    lo = _operand(ev, node, "in-min")
    hi = _operand(ev, node, "in-max", 1)
    return _js_min(_js_max(value, lo), hi)


@operation("MAP_RANGE")
def _map_range(ev: Evaluation, node: Node) -> float:
    value = _operand(ev, node, "in-value")
    in_min = _operand(ev, node, "in-in-min")
    in_max = _operand(ev, node, "in-in-max", 1)
    out_min = _operand(ev, node, "in-out-min")
    out_max = _operand(ev, node, "in-out-max", 1)
    width = in_max - in_min
    if width == 0:
        return out_min
    return out_min + ((value - in_min) / width) * (out_max - out_min)


@operation("RANDOM")
def _random(ev: Evaluation, node: Node) -> float:
    return ev.rng()


@operation("SIN")
def _sin(ev: Evaluation, node: Node) -> float:
    return _finite_or_nan(math.sin, _operand(ev, node, "in-a"))


@operation("COS")
def _cos(ev: Evaluation, node: Node) -> float:
    return _finite_or_nan(math.cos, _operand(ev, node, "in-a"))


# ---------------------------------------------------------------------------
# Strings, context and control
# ---------------------------------------------------------------------------


@operation("CONCAT")
def _concat(ev: Evaluation, node: Node) -> str:
    a = to_string(or_default(ev.input(node, "in-a"), ""))
    b = to_string(or_default(ev.input(node, "in-b"), ""))
    return a + b


@operation("INTERACTION_HOVER")
def _hover(ev: Evaluation, node: Node) -> bool:
    return bool(ev.context.is_hovered)


@operation("INTERACTION_CLICK")
def _click(ev: Evaluation, node: Node) -> bool:
    return bool(ev.context.is_clicked)


@operation("TIMER")
def _timer(ev: Evaluation, node: Node) -> float:
    return ev.context.time * _operand(ev, node, "in-speed", 1)


@operation("IF_ELSE")
def _if_else(ev: Evaluation, node: Node) -> Any:
    if truthy(ev.input(node, "in-condition")):
        return ev.input(node, "in-true")
    return ev.input(node, "in-false")


# ---------------------------------------------------------------------------
# Style producers
# ---------------------------------------------------------------------------


@operation("STYLE")
def _style(ev: Evaluation, node: Node) -> dict[str, Any]:
    style: dict[str, Any] = {}
    for socket, key in (("in-bg", "backgroundColor"), ("in-text", "color"), ("in-size", "fontSize")):
        value = ev.input(node, socket)
        if value is not None:
            style[key] = value
    return style


@operation("ANIMATION")
def _animation(ev: Evaluation, node: Node) -> dict[str, str]:
    if ev.graph.is_wired(node.id, "in-trigger") and not truthy(ev.input(node, "in-trigger")):
        return {"animation": "none"}
    kind = to_string(or_default(node.value, "fadeIn"))
    duration = _operand(ev, node, "in-duration", 1)
    delay = _operand(ev, node, "in-delay")
    iterations = "infinite" if kind in LOOPING_ANIMATIONS else "1"
    return {
        "animation": (
            f"{kind} {format_number(duration)}s ease-in-out "
            f"{format_number(delay)}s {iterations} both"
        )
    }


@operation("TRANSITION")
def _transition(ev: Evaluation, node: Node) -> dict[str, str]:
    duration = _operand(ev, node, "in-duration", 0.3)
    delay = _operand(ev, node, "in-delay")
    return {"transition": f"all {format_number(duration)}s ease-in-out {format_number(delay)}s"}


@operation("MERGE")
def _merge(ev: Evaluation, node: Node) -> dict[str, Any]:
    a = ev.input(node, "in-style-a")
    b = ev.input(node, "in-style-b")
    merged: dict[str, Any] = {}
    merged.update(a if isinstance(a, dict) else {})
    merged.update(b if isinstance(b, dict) else {})
    return merged


@operation("OUTPUT")
def _output(ev: Evaluation, node: Node) -> None:
    # Resolved socket by socket in evaluate().
    return None


# ---------------------------------------------------------------------------
# Trigger/actions
# ---------------------------------------------------------------------------


@operation("NAVIGATE")
def _navigate(ev: Evaluation, node: Node) -> None:
    trigger = ev.input(node, "in-trigger")
    target = node.value
    if ev.rising_edge(node, trigger) and truthy(target):
        ev.emit(NavigateEvent(node_id=node.id, graph_id=ev.graph.id, page_id=target))
    return None


@operation("LINK")
def _link(ev: Evaluation, node: Node) -> None:
    trigger = ev.input(node, "in-trigger")
    url = or_default(ev.input(node, "in-url"), node.value)
    new_tab = ev.input(node, "in-new-tab")
    if new_tab is None:
        new_tab = node.data.get("newTab")
    if ev.rising_edge(node, trigger) and truthy(url):
        ev.emit(
            LinkEvent(
                node_id=node.id,
                graph_id=ev.graph.id,
                url=to_string(url),
                new_tab=truthy(new_tab),
            )
        )
    return None


@operation("ALERT")
def _alert(ev: Evaluation, node: Node) -> None:
    trigger = ev.input(node, "in-trigger")
    message = or_default(ev.input(node, "in-message"), node.value)
    if ev.rising_edge(node, trigger) and truthy(message):
        ev.emit(AlertEvent(node_id=node.id, graph_id=ev.graph.id, message=to_string(message)))
    return None


def get_operation(kind: str) -> Operation:
    """Operation for a node kind; unknown kinds pass their literal through."""
    return OPERATIONS.get(kind, passthrough)
