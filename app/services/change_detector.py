"""
Change detection between two attribute snapshots of an entity
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Optional


@dataclass(frozen=True)
class ChangeSet:
    before: Dict[str, Any] = field(default_factory=dict)
    after: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.before and not self.after

    @property
    def fields(self) -> set:
        return set(self.before) | set(self.after)


def detect_changes(
    previous: Optional[Mapping[str, Any]],
    current: Optional[Mapping[str, Any]],
    exclusions: Iterable[str] = (),
) -> ChangeSet:
    """
    Compute the minimal before/after diff between two snapshots.

    - Excluded keys never appear on either side.
    - Creation (empty previous): every current key goes to `after`, `before` stays empty.
    - Deletion (empty current): every previous key goes to `before`, `after` stays empty.
    - Update: only keys present in `current` whose value differs from `previous`;
      a key missing from `previous` is reported in `after` only.

    Args:
        previous: Attribute map as persisted before the write
        current: Attribute map after the write
        exclusions: Field names that must never be recorded

    Returns:
        ChangeSet with `before` and `after` mappings
    """
    previous = previous or {}
    current = current or {}
    excluded = frozenset(exclusions)

    if not current:
        return ChangeSet(
            before={k: v for k, v in previous.items() if k not in excluded},
            after={},
        )

    before: Dict[str, Any] = {}
    after: Dict[str, Any] = {}
    for key, value in current.items():
        if key in excluded:
            continue
        if key not in previous:
            after[key] = value
        elif previous[key] != value:
            before[key] = previous[key]
            after[key] = value

    return ChangeSet(before=before, after=after)
