"""
Rule-based contamination risk scoring for a single sensor reading.

Each metric is normalized to a 0-100 danger value (higher = worse), weighted,
and summed. The two largest weighted contributions are reported as reasons.
"""
from typing import Dict, List, Tuple

from schemas import RiskAssessment, RiskCategory, SensorReading

WEIGHTS: Dict[str, float] = {
    "temp": 0.30,
    "humidity": 0.20,
    "pH": 0.15,
    "bacterialCount": 0.35,
}

IDEAL_TEMP_C = 4.0      # refrigeration
MAX_TEMP_C = 40.0
IDEAL_PH = 6.5
PH_SPAN = 4.0
BACTERIA_CEILING = 1_000_000

HIGH_THRESHOLD = 60
MEDIUM_THRESHOLD = 30
MAX_REASONS = 2

def clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))

def danger_scores(reading: SensorReading) -> Dict[str, float]:
    return {
        "temp": clamp((reading.temp - IDEAL_TEMP_C) / (MAX_TEMP_C - IDEAL_TEMP_C) * 100),
        "humidity": clamp(reading.humidity / 100 * 100),
        "pH": clamp(abs(reading.ph - IDEAL_PH) / PH_SPAN * 100),
        "bacterialCount": clamp(reading.bacterial_count / BACTERIA_CEILING * 100),
    }

def risk_label(score: float) -> RiskCategory:
    if score >= HIGH_THRESHOLD: return RiskCategory.HIGH
    if score >= MEDIUM_THRESHOLD: return RiskCategory.MEDIUM
    return RiskCategory.LOW

def top_reasons(dangers: Dict[str, float], limit: int = MAX_REASONS) -> List[str]:
    contributions: List[Tuple[str, float]] = [
        (name, dangers[name] * weight) for name, weight in WEIGHTS.items()
    ]
    # sorted() is stable with reverse=True, so ties keep metric order
    contributions = sorted(contributions, key=lambda c: c[1], reverse=True)
    return [f"{name} (impact {val:.1f})" for name, val in contributions[:limit]]

def assess(reading: SensorReading) -> RiskAssessment:
    dangers = danger_scores(reading)
    score = sum(dangers[name] * weight for name, weight in WEIGHTS.items())
    return RiskAssessment(
        score=round(score, 2),
        category=risk_label(score),
        reasons=top_reasons(dangers),
        raw={
            "tempDanger": dangers["temp"],
            "humidityDanger": dangers["humidity"],
            "pHDanger": dangers["pH"],
            "bacteriaDanger": dangers["bacterialCount"],
        },
    )
