"""Inline Rollout Strategies — frozen copies of the strategies a feature value owns directly.

Invariants:
    - from_dict deep-copies: nothing reachable from a RolloutStrategy aliases the source dict
    - Lists become tuples; the dataclasses are frozen and unhashable (value may be a dict)
    - to_dict(from_dict(d)) keeps unknown keys and empty lists; only keys that were
      absent or null are left out

Design Decisions:
    - Wire shape kept identical to what the live value stores: a Version's strategies
      can be fed back to the live value on rollback without translation
    - Keys the evaluator does not model are kept in `extra`, so a later client field
      is never lost from history
"""

import copy
from dataclasses import dataclass, field
from typing import Any


_ATTRIBUTE_KEYS = frozenset({"id", "conditional", "fieldName", "values", "type"})
_STRATEGY_KEYS = frozenset({
    "id", "name", "percentage", "percentageAttributes", "colouring", "avatar",
    "value", "disabled", "attributes",
})


@dataclass(frozen=True)
class RolloutStrategyAttribute:
    """One matching rule of an inline strategy (e.g. country INCLUDES [nz, au])."""
    id: str | None = None
    conditional: str | None = None
    field_name: str | None = None
    values: tuple | None = None
    type: str | None = None
    extra: dict = field(default_factory=dict)

    __hash__ = None

    @classmethod
    def from_dict(cls, data: dict) -> "RolloutStrategyAttribute":
        values = data.get("values")
        return cls(
            id=data.get("id"),
            conditional=data.get("conditional"),
            field_name=data.get("fieldName"),
            values=None if values is None else tuple(copy.deepcopy(values)),
            type=data.get("type"),
            extra=_unknown_keys(data, _ATTRIBUTE_KEYS),
        )

    def to_dict(self) -> dict:
        return {
            **copy.deepcopy(self.extra),
            **_without_none({
                "id": self.id,
                "conditional": self.conditional,
                "fieldName": self.field_name,
                "values": None if self.values is None else copy.deepcopy(list(self.values)),
                "type": self.type,
            }),
        }


@dataclass(frozen=True)
class RolloutStrategy:
    """Inline rollout strategy, as captured at snapshot time."""
    id: str | None = None
    name: str | None = None
    percentage: int | None = None
    percentage_attributes: tuple[str, ...] | None = None
    colouring: str | None = None
    avatar: str | None = None
    value: Any = None
    disabled: bool | None = None
    attributes: tuple[RolloutStrategyAttribute, ...] | None = None
    extra: dict = field(default_factory=dict)

    __hash__ = None

    @classmethod
    def from_dict(cls, data: dict) -> "RolloutStrategy":
        percentage_attributes = data.get("percentageAttributes")
        attributes = data.get("attributes")
        return cls(
            id=data.get("id"),
            name=data.get("name"),
            percentage=data.get("percentage"),
            percentage_attributes=(
                None if percentage_attributes is None else tuple(percentage_attributes)
            ),
            colouring=data.get("colouring"),
            avatar=data.get("avatar"),
            value=copy.deepcopy(data.get("value")),
            disabled=data.get("disabled"),
            attributes=(
                None if attributes is None
                else tuple(RolloutStrategyAttribute.from_dict(a) for a in attributes)
            ),
            extra=_unknown_keys(data, _STRATEGY_KEYS),
        )

    def to_dict(self) -> dict:
        """Serialize to the JSON wire shape. Pure, no IO."""
        return {
            **copy.deepcopy(self.extra),
            **_without_none({
                "id": self.id,
                "name": self.name,
                "percentage": self.percentage,
                "percentageAttributes": (
                    None if self.percentage_attributes is None
                    else list(self.percentage_attributes)
                ),
                "colouring": self.colouring,
                "avatar": self.avatar,
                "value": copy.deepcopy(self.value),
                "disabled": self.disabled,
                "attributes": (
                    None if self.attributes is None
                    else [a.to_dict() for a in self.attributes]
                ),
            }),
        }


def copy_rollout_strategies(
    strategies: list[dict] | None,
) -> tuple[RolloutStrategy, ...]:
    """Freeze a live value's inline strategy list, preserving order."""
    if not strategies:
        return ()
    return tuple(
        s if isinstance(s, RolloutStrategy) else RolloutStrategy.from_dict(s)
        for s in strategies
    )


def _unknown_keys(data: dict, known: frozenset[str]) -> dict:
    return {k: copy.deepcopy(v) for k, v in data.items() if k not in known}


def _without_none(data: dict) -> dict:
    return {k: v for k, v in data.items() if v is not None}
