import logging
import math
import re
from dataclasses import dataclass, field, asdict
from decimal import Decimal, ROUND_HALF_UP

logger = logging.getLogger(__name__)

# Decimal number with optional sign and exponent, as typed into a form
NUMBER_PATTERN = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"

# Leading numeric prefix, the way a browser's parseFloat reads a form value
_NUMBER_PREFIX = re.compile(rf"^\s*({NUMBER_PATTERN})")

# Scoring inputs and the fallback used when a field is empty or unparsable
NUMERIC_DEFAULTS = {
    "pricePoint": 0,
    "costPrice": 0,
    "dailyTraffic": 0,
    "conversionRate": 0,
    "monthlyExpenses": 0,
    "initialInvestment": 1000,
}


@dataclass(frozen=True)
class ScoreWeights:
    """Caps and thresholds of the five score factors."""
    margin_cap: float = 30
    margin_full_pct: float = 50          # margin % that earns the full cap
    demand_cap: float = 20
    demand_full_buyers: float = 10       # buyers/day that earn the full cap
    profitable_points: float = 20
    unprofitable_points: float = 5
    scalable_points: float = 15
    limited_scale_points: float = 8
    scale_traffic_threshold: float = 1000
    scale_conversion_threshold: float = 2
    stable_points: float = 15
    unstable_points: float = 5
    stable_payback_days: int = 90
    payback_never: int = 999
    days_per_month: int = 30


DEFAULT_WEIGHTS = ScoreWeights()


@dataclass(frozen=True)
class VentureScore:
    margin: float
    margin_pct: float
    daily_buyers: int
    daily_profit: float
    monthly_profit: int
    payback_days: int
    score: int
    factors: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "VentureScore":
        # JSON keeps int/float apart, so values come back as they were stored
        return cls(
            margin=data["margin"],
            margin_pct=data["margin_pct"],
            daily_buyers=data["daily_buyers"],
            daily_profit=data["daily_profit"],
            monthly_profit=data["monthly_profit"],
            payback_days=data["payback_days"],
            score=data["score"],
            factors=dict(data.get("factors", {})),
        )


@dataclass(frozen=True)
class Rating:
    tier: str
    label: str
    emoji: str
    color: str


RATINGS = (
    (80, Rating("excellent", "Excellent", "⭐", "text-success")),
    (60, Rating("good", "Good", "✅", "text-primary")),
    (40, Rating("acceptable", "Acceptable", "🟡", "text-warning")),
)
DOUBTFUL = Rating("doubtful", "Doubtful", "❌", "text-danger")


def js_round(value):
    """Math.round: halves go towards +infinity, so -2.5 becomes -2."""
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def finite_or_zero(value):
    return value if math.isfinite(value) else 0


def round_half_up(value, digits=0):
    """Round like toFixed does for display (halves go away from zero)."""
    if not math.isfinite(value):
        return value
    if abs(value) >= 2 ** 53:
        # floats this large carry no fractional part
        return int(value) if digits == 0 else float(value)
    exponent = Decimal(1).scaleb(-digits)
    rounded = Decimal(repr(value)).quantize(exponent, rounding=ROUND_HALF_UP)
    return int(rounded) if digits == 0 else float(rounded)


def parse_number_or_default(value, fallback):
    """
    Read a form value as a number.
    Empty, unparsable, non-finite or zero values resolve to ``fallback``.
    """
    if value is None:
        return fallback
    if isinstance(value, bool):
        return fallback
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _NUMBER_PREFIX.match(str(value))
        if not match:
            return fallback
        try:
            number = float(match.group(1))
        except (OverflowError, ValueError):
            return fallback
    if not math.isfinite(number) or number == 0:
        return fallback
    return number


def parse_inputs(answers: dict) -> dict:
    """Resolve the six scoring inputs from a raw answer set."""
    answers = answers or {}
    return {key: parse_number_or_default(answers.get(key), default)
            for key, default in NUMERIC_DEFAULTS.items()}


def score_factors(margin_pct, daily_buyers, monthly_profit, traffic, conversion,
                  payback_days, weights: ScoreWeights = DEFAULT_WEIGHTS) -> dict:
    """Five weighted factors, each capped before they are added up."""
    w = weights
    return {
        "margin": min(margin_pct / w.margin_full_pct * w.margin_cap, w.margin_cap),
        "demand": min(daily_buyers / w.demand_full_buyers * w.demand_cap, w.demand_cap),
        "profitability": w.profitable_points if monthly_profit > 0 else w.unprofitable_points,
        "scalability": (w.scalable_points
                        if traffic > w.scale_traffic_threshold and conversion > w.scale_conversion_threshold
                        else w.limited_scale_points),
        "stability": w.stable_points if payback_days < w.stable_payback_days else w.unstable_points,
    }


def calculate_venture(answers: dict, weights: ScoreWeights = DEFAULT_WEIGHTS) -> VentureScore:
    """Unit economics and the composite viability score (0–100)."""
    inputs = parse_inputs(answers)
    price = inputs["pricePoint"]
    cost = inputs["costPrice"]
    traffic = inputs["dailyTraffic"]
    conversion = inputs["conversionRate"]
    expenses = inputs["monthlyExpenses"]
    investment = inputs["initialInvestment"]

    margin = price - cost
    # No price, no meaningful percentage: report 0 instead of inf/nan
    margin_pct = round_half_up(margin / price * 100, 1) if price else 0.0
    daily_buyers = js_round(traffic * conversion / 100)
    daily_profit = daily_buyers * margin
    monthly_profit = daily_profit * weights.days_per_month - expenses
    payback_days = weights.payback_never
    if daily_profit > 0:
        ratio = investment / daily_profit
        if math.isfinite(ratio):
            payback_days = math.ceil(ratio)

    factors = score_factors(margin_pct, daily_buyers, monthly_profit, traffic,
                            conversion, payback_days, weights)
    factors = {name: finite_or_zero(value) for name, value in factors.items()}
    total = max(0, min(100, sum(factors.values())))

    # Values that overflowed to inf/nan are reported as 0, like a missing price
    result = VentureScore(
        margin=finite_or_zero(round_half_up(margin, 2)),
        margin_pct=float(finite_or_zero(margin_pct)),
        daily_buyers=finite_or_zero(daily_buyers),
        daily_profit=finite_or_zero(round_half_up(daily_profit, 2)),
        monthly_profit=finite_or_zero(round_half_up(monthly_profit)),
        payback_days=payback_days,
        score=js_round(total),
        factors=factors,
    )
    logger.info("Venture scored: score=%s tier=%s", result.score, get_rating(result.score).tier)
    return result


def get_rating(score) -> Rating:
    for threshold, rating in RATINGS:
        if score >= threshold:
            return rating
    return DOUBTFUL
