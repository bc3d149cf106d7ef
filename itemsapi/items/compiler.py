"""Partial-update compiler.

Turns a flat JSON object into an UpdatePlan. A null value removes the
attribute; any other value replaces it. Attribute names never appear in
the expression text directly: each one is referenced through a ``#`` name
alias and each new value through a ``:`` value token, so names that
collide with store reserved words (``name``, ``status``, ``size`` ...)
are safe.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

from itemsapi.items.errors import InvalidPatchError
from itemsapi.items.models import UpdatePlan

# Characters accepted in expression placeholders
SAFE_STEM = re.compile(r"^[A-Za-z0-9_]+$")

GENERATED_STEM_PREFIX = "attr"


def compile_update(patch: Mapping[str, Any]) -> UpdatePlan:
    """Compile a patch object into an UpdatePlan.

    Args:
        patch: Attribute name -> new value, or None to remove the attribute

    Returns:
        The plan; ``plan.is_noop`` is True for an empty patch

    Raises:
        InvalidPatchError: If patch is not a JSON object
    """
    if not isinstance(patch, Mapping):
        raise InvalidPatchError(
            f"Patch must be a JSON object, got {type(patch).__name__}"
        )

    stems = _alias_stems(patch)

    assign_clauses: list[str] = []
    remove_clauses: list[str] = []
    attribute_names: dict[str, str] = {}
    attribute_values: dict[str, Any] = {}

    for key, value in patch.items():
        name_alias = f"#{stems[key]}"
        attribute_names[name_alias] = key

        if value is None:
            remove_clauses.append(name_alias)
        else:
            value_token = f":{stems[key]}"
            assign_clauses.append(f"{name_alias} = {value_token}")
            attribute_values[value_token] = value

    return UpdatePlan(
        assign_clauses=tuple(assign_clauses),
        remove_clauses=tuple(remove_clauses),
        attribute_names=attribute_names,
        attribute_values=attribute_values,
    )


def _alias_stems(keys: Iterable[Any]) -> dict[str, str]:
    """Choose the placeholder stem for every key.

    Keys made of placeholder-safe characters are their own stem. Every
    other key gets ``attr<N>``, skipping any stem already claimed by a
    safe key in the same patch.
    """
    keys = list(keys)
    for key in keys:
        if not isinstance(key, str):
            raise InvalidPatchError(f"Attribute names must be strings, got {key!r}")

    stems = {key: key for key in keys if SAFE_STEM.match(key)}
    taken = set(stems.values())

    counter = 0
    for key in keys:
        if key in stems:
            continue
        while f"{GENERATED_STEM_PREFIX}{counter}" in taken:
            counter += 1
        stem = f"{GENERATED_STEM_PREFIX}{counter}"
        stems[key] = stem
        taken.add(stem)

    return stems
