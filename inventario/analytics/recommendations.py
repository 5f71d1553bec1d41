"""Reglas ordenadas de recomendación y nivel de alerta por producto.

La prioridad es el orden de ``RECOMMENDATION_RULES``: se evalúan en secuencia
y gana la primera que se cumple. Si ninguna aplica se usa
``FALLBACK_OUTCOME``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .models import AlertLevel, Recommendation
from .policy import (
    AnalyticsPolicy,
    EffectiveProductSettings,
    is_critical_stock,
    is_excess_stock,
    is_low_stock,
)


@dataclass(frozen=True)
class RecommendationContext:
    stock: int
    settings: EffectiveProductSettings
    days_without_movement: int
    profit_margin: float
    policy: AnalyticsPolicy


@dataclass(frozen=True)
class RecommendationOutcome:
    recommendation: Recommendation
    alert_level: AlertLevel


@dataclass(frozen=True)
class RecommendationRule:
    name: str
    predicate: Callable[[RecommendationContext], bool]
    outcome: RecommendationOutcome

    def matches(self, context: RecommendationContext) -> bool:
        return self.predicate(context)


def _is_stale_low_margin(context: RecommendationContext) -> bool:
    return (
        context.days_without_movement > context.policy.stale_after_days
        and context.profit_margin < context.policy.liquidation_margin
    )


RECOMMENDATION_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        "critical_stock",
        lambda ctx: is_critical_stock(ctx.stock, ctx.settings),
        RecommendationOutcome(Recommendation.REPLENISH, AlertLevel.CRITICAL),
    ),
    RecommendationRule(
        "low_stock",
        lambda ctx: is_low_stock(ctx.stock, ctx.settings),
        RecommendationOutcome(Recommendation.REPLENISH, AlertLevel.HIGH),
    ),
    RecommendationRule(
        "stale_low_margin",
        _is_stale_low_margin,
        RecommendationOutcome(Recommendation.LIQUIDATE, AlertLevel.MEDIUM),
    ),
    RecommendationRule(
        "excess_stock",
        lambda ctx: is_excess_stock(ctx.stock, ctx.settings),
        RecommendationOutcome(Recommendation.REDUCE, AlertLevel.MEDIUM),
    ),
)

FALLBACK_OUTCOME = RecommendationOutcome(Recommendation.MAINTAIN, AlertLevel.LOW)


def recommend(
    context: RecommendationContext,
    rules: tuple[RecommendationRule, ...] = RECOMMENDATION_RULES,
) -> RecommendationOutcome:
    for rule in rules:
        if rule.matches(context):
            return rule.outcome
    return FALLBACK_OUTCOME


__all__ = [
    "FALLBACK_OUTCOME",
    "RECOMMENDATION_RULES",
    "RecommendationContext",
    "RecommendationOutcome",
    "RecommendationRule",
    "recommend",
]
