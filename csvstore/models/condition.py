"""
QueryCondition and Operator for filtering records.
"""

from dataclasses import dataclass
from enum import Enum


class Operator(Enum):
    """Comparison operators understood by the condition matcher."""

    EQ = "="
    EQ_ALIAS = "=="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    CONTAINS = "contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"

    @classmethod
    def from_token(cls, token: str) -> "Operator | None":
        """
        Resolve an operator token.

        Returns:
            The matching Operator, or None for an unsupported token.
        """
        try:
            return cls(token)
        except ValueError:
            return None


@dataclass(frozen=True)
class QueryCondition:
    """
    A single (column, operator, value) predicate.

    Attributes:
        column: Column the predicate reads.
        operator: Operator token, e.g. ">=" or "contains". Unsupported tokens
            are accepted and simply never match.
        value: Text operand to compare against.
    """

    column: str
    operator: str
    value: str

    @classmethod
    def of(cls, triple: tuple[str, str, str]) -> "QueryCondition":
        column, operator, value = triple
        return cls(column=column, operator=operator, value=value)

    @property
    def op(self) -> Operator | None:
        return Operator.from_token(self.operator)
