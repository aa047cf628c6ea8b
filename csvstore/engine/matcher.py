"""
Condition matching and value comparison.

The same comparison rule drives both filtering and sorting: two values are
compared as numbers when both parse as floating point, otherwise as strings.
A parse failure never raises; it only switches the comparison to
lexicographic order.
"""

import logging
from collections.abc import Iterable, Mapping

from csvstore.models.condition import Operator, QueryCondition

logger = logging.getLogger(__name__)

ConditionLike = QueryCondition | tuple[str, str, str]


def parse_number(text: str) -> float | None:
    """
    Parse text as a double.

    Surrounding whitespace, digit-group underscores and non-ASCII digits are
    rejected, so only plain numeric literals (including "inf" and "nan")
    count as numbers.

    Returns:
        The parsed value, or None if text is not a number.
    """
    if not text or not text.isascii() or text != text.strip() or "_" in text:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def compare_values(a: str, b: str) -> int:
    """
    Compare two field values.

    Returns:
        -1, 0 or 1. Numeric when both sides parse, lexicographic otherwise.
    """
    num_a = parse_number(a)
    num_b = parse_number(b)

    if num_a is None or num_b is None:
        return (a > b) - (a < b)

    if num_a < num_b:
        return -1
    if num_a > num_b:
        return 1
    return 0


def matches_condition(record: Mapping[str, str], condition: QueryCondition) -> bool:
    """
    Check a record against one condition.

    A column absent from the record and an unsupported operator both fail
    closed: the condition does not match.
    """
    if condition.column not in record:
        return False
    value = record[condition.column]
    target = condition.value

    op = condition.op
    if op in (Operator.EQ, Operator.EQ_ALIAS):
        return value == target
    elif op == Operator.NE:
        return value != target
    elif op == Operator.GT:
        return compare_values(value, target) > 0
    elif op == Operator.LT:
        return compare_values(value, target) < 0
    elif op == Operator.GE:
        return compare_values(value, target) >= 0
    elif op == Operator.LE:
        return compare_values(value, target) <= 0
    elif op == Operator.CONTAINS:
        return target.lower() in value.lower()
    elif op == Operator.STARTS_WITH:
        return value.lower().startswith(target.lower())
    elif op == Operator.ENDS_WITH:
        return value.lower().endswith(target.lower())
    return False


def matches_conditions(record: Mapping[str, str], conditions: Iterable[QueryCondition]) -> bool:
    """Check a record against every condition (AND). An empty list matches."""
    return all(matches_condition(record, condition) for condition in conditions)


def prepare_conditions(conditions: Iterable[ConditionLike] | None) -> list[QueryCondition]:
    """
    Normalize caller-supplied conditions.

    Accepts QueryCondition objects or (column, operator, value) tuples.
    Unsupported operators are logged once here and left in place; they
    will never match.
    """
    prepared: list[QueryCondition] = []
    for condition in conditions or ():
        if not isinstance(condition, QueryCondition):
            condition = QueryCondition.of(condition)
        prepared.append(condition)

    unsupported = sorted({c.operator for c in prepared if c.op is None})
    if unsupported:
        logger.warning(f"Unsupported condition operators never match: {unsupported}")
    return prepared
