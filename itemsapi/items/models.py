"""Record and update plan models."""

from typing import Any, TypeAlias

from pydantic import BaseModel, ConfigDict, Field

Record: TypeAlias = dict[str, Any]
"""A stored document: a JSON object with no fixed schema."""


class UpdatePlan(BaseModel):
    """A compiled partial update, independent of any particular store.

    The clause strings use the conditional-update expression syntax
    (``#name = :value`` / ``#name``); the two alias tables resolve every
    placeholder they reference. Backends that do not speak the expression
    language read ``assignments()`` and ``removals()`` instead.
    """

    model_config = ConfigDict(frozen=True)

    assign_clauses: tuple[str, ...] = ()
    remove_clauses: tuple[str, ...] = ()
    attribute_names: dict[str, str] = Field(default_factory=dict)
    attribute_values: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_noop(self) -> bool:
        """True when the patch had no keys and nothing should be sent."""
        return not self.assign_clauses and not self.remove_clauses

    @property
    def expression(self) -> str:
        """The full update expression, or an empty string for a no-op."""
        segments = []
        if self.assign_clauses:
            segments.append("SET " + ", ".join(self.assign_clauses))
        if self.remove_clauses:
            segments.append("REMOVE " + ", ".join(self.remove_clauses))
        return " ".join(segments)

    def assignments(self) -> dict[str, Any]:
        """Literal attribute name -> new value, in patch order."""
        result: dict[str, Any] = {}
        for clause in self.assign_clauses:
            name_alias, value_token = clause.split(" = ", 1)
            result[self.attribute_names[name_alias]] = self.attribute_values[value_token]
        return result

    def removals(self) -> list[str]:
        """Literal attribute names to delete, in patch order."""
        return [self.attribute_names[alias] for alias in self.remove_clauses]
