from dataclasses import dataclass

from .parsing import parse_float

MAX_LEVEL = 10.0
GOOD_DEAL_SAVINGS = 20  # percent off


@dataclass(frozen=True)
class HeatScore:
    level: float
    label: str

    @property
    def bar_width(self) -> float:
        """Filled share of the popularity meter, in percent."""
        return self.level * 10


def heat_label(level: float) -> str:
    if level >= 9:
        return "Hot Spot!"
    if level >= 7:
        return "Very Popular"
    if level >= 5:
        return "Popular"
    if level >= 3:
        return "Trending"
    return "Regular"


def _savings(deal) -> float:
    if isinstance(deal, dict):
        value = deal.get("savings_percentage")
    else:
        value = getattr(deal, "savings_percentage", None)
    # missing or unparseable counts as no discount
    return parse_float(value) or 0.0


def heat_score(deals, explicit_level: float | None = None) -> HeatScore:
    """0-10 popularity from a venue's deals.

    Half the scale comes from deal count (one point per two deals, capped at
    5), half from the share of deals at least 20% off. An explicit level wins
    and is only clamped.
    """
    if explicit_level is not None:
        level = min(MAX_LEVEL, max(0.0, float(explicit_level)))
        return HeatScore(level, heat_label(level))

    deals = list(deals or [])
    if not deals:
        return HeatScore(0.0, "New")

    good = sum(1 for d in deals if _savings(d) >= GOOD_DEAL_SAVINGS)
    base = min(5.0, len(deals) / 2)
    bonus = good / len(deals) * 5
    level = min(MAX_LEVEL, base + bonus)
    return HeatScore(level, heat_label(level))
