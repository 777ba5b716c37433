from decimal import Decimal

from src.petcare.models.domain import PriceRule
from src.petcare.services.pricing.resolver import overlapping_rules, resolve_price

RULES = [
    PriceRule(Decimal("0"), Decimal("10"), 15_000),
    PriceRule(Decimal("10.01"), Decimal("25"), 22_000),
    PriceRule(Decimal("25.01"), Decimal("60"), 30_000),
]


def test_weight_inside_band_uses_rule_price():
    assert resolve_price(12_000, RULES, Decimal("18.4")) == 22_000


def test_weight_on_band_edges_uses_rule_price():
    assert resolve_price(12_000, RULES, Decimal("10")) == 15_000
    assert resolve_price(12_000, RULES, Decimal("10.01")) == 22_000
    assert resolve_price(12_000, RULES, Decimal("60")) == 30_000


def test_unmatched_weight_falls_back_to_base_price():
    assert resolve_price(12_000, RULES, Decimal("75")) == 12_000
    assert resolve_price(12_000, [], 4.5) == 12_000


def test_float_weights_are_accepted():
    assert resolve_price(12_000, RULES, 7.25) == 15_000


def test_first_matching_rule_wins_when_bands_overlap():
    rules = [PriceRule(0, 20, 100), PriceRule(10, 30, 200)]

    assert resolve_price(50, rules, 15) == 100
    assert resolve_price(50, list(reversed(rules)), 15) == 200


def test_overlapping_rules_reports_intersections():
    rules = [PriceRule(0, 20, 100), PriceRule(10, 30, 200), PriceRule(31, 40, 300)]

    overlaps = overlapping_rules(rules)

    assert overlaps == [(rules[0], rules[1])]
    assert overlapping_rules(RULES) == []
