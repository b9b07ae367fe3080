"""Shared base for rule option records."""

from dataclasses import dataclass, fields
from typing import Any


@dataclass(frozen=True)
class RuleOptions:
    """Base class of every rule's options dataclass.

    Options are built from snake_case dicts; lists become tuples so the
    records stay hashable and immutable.
    """

    @classmethod
    def from_dict(cls, raw: dict[str, Any]):
        """Build options from a snake_case mapping.

        Raises:
            ValueError: If a key is not an option of this rule
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(raw) - known)
        if unknown:
            raise ValueError(f"unknown option(s): {', '.join(unknown)}")
        return cls(**{key: _freeze(value) for key, value in raw.items()})


def _freeze(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(value)
    return value
