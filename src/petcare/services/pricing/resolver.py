"""Weight-banded price resolution."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ...models.domain import PriceRule, Weight


def resolve_price(base_price: int, rules: Sequence[PriceRule], subject_weight: Weight) -> int:
    """Price of the first rule whose band contains ``subject_weight``, else ``base_price``.

    Rules are checked in input order. When bands overlap the earliest one wins;
    callers ingesting catalog data should use ``overlapping_rules`` to report that.
    """

    for rule in rules:
        if rule.matches(subject_weight):
            return rule.price
    return base_price


def overlapping_rules(rules: Sequence[PriceRule]) -> List[Tuple[PriceRule, PriceRule]]:
    """Pairs of rules whose inclusive weight bands intersect."""

    overlaps: list[tuple[PriceRule, PriceRule]] = []
    for index, first in enumerate(rules):
        for second in rules[index + 1 :]:
            if first.min_weight <= second.max_weight and second.min_weight <= first.max_weight:
                overlaps.append((first, second))
    return overlaps
