"""Fact vocabulary emitted by the inference engine, and risk tier resolution.

Facts are opaque tokens tested by set membership only. ``Fact`` lists the
tokens the product rules know about; any other string the engine sends is kept
in the fact set untouched so newer engine versions can add facts without
breaking this module.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum


class Fact(StrEnum):
    """Known fact tokens."""

    # Credit purpose
    FINALIDAD_VIVIENDA = "FACT_FINALIDAD_VIVIENDA"
    FINALIDAD_VEHICULO = "FACT_FINALIDAD_VEHICULO"

    # Risk tier
    PERFIL_RIESGO_BAJO = "FACT_PERFIL_RIESGO_BAJO"
    PERFIL_RIESGO_MEDIO = "FACT_PERFIL_RIESGO_MEDIO"
    PERFIL_RIESGO_ALTO = "FACT_PERFIL_RIESGO_ALTO"

    # Income, in multiples of SMMLV
    INGRESOS_MIN_2_SMMLV = "FACT_INGRESOS_MIN_2_SMMLV"
    INGRESOS_MIN_3_SMMLV = "FACT_INGRESOS_MIN_3_SMMLV"
    INGRESOS_MIN_4_SMMLV = "FACT_INGRESOS_MIN_4_SMMLV"

    # Installment as % of income
    CUOTA_MAX_30_INGRESOS = "FACT_CUOTA_MAX_30_INGRESOS"
    CUOTA_MAX_40_INGRESOS = "FACT_CUOTA_MAX_40_INGRESOS"

    # Down payment
    CUOTA_INICIAL_MIN_30 = "FACT_CUOTA_INICIAL_MIN_30"

    # Co-borrower
    CODEUDOR_PRESENTE = "FACT_CODEUDOR_PRESENTE"
    INGRESOS_CODEUDOR_MIN_2_SMMLV = "FACT_INGRESOS_CODEUDOR_MIN_2_SMMLV"

    # Employment stability
    ANTIGUEDAD_LABORAL_MIN_6_MESES = "FACT_ANTIGUEDAD_LABORAL_MIN_6_MESES"
    ANTIGUEDAD_LABORAL_MIN_12_MESES = "FACT_ANTIGUEDAD_LABORAL_MIN_12_MESES"


FactSet = frozenset[str]


def to_fact_set(facts: Iterable[str] | None) -> FactSet:
    """Normalize engine output (list, set, None) into an immutable fact set."""
    if not facts:
        return frozenset()
    return frozenset(str(f) for f in facts)


class RiskLevel(StrEnum):
    """Coarse risk tier. UNKNOWN when neither facts nor profile name a tier."""

    BAJO = "BAJO"
    MEDIO = "MEDIO"
    ALTO = "ALTO"
    UNKNOWN = "UNKNOWN"


_RISK_FACTS: dict[RiskLevel, Fact] = {
    RiskLevel.BAJO: Fact.PERFIL_RIESGO_BAJO,
    RiskLevel.MEDIO: Fact.PERFIL_RIESGO_MEDIO,
    RiskLevel.ALTO: Fact.PERFIL_RIESGO_ALTO,
}


def resolve_risk_level(facts: FactSet, risk_profile: str | None) -> RiskLevel:
    """Resolve the risk tier from the engine's profile label, then from risk facts.

    The label is authoritative and matched by case-sensitive substring
    ("RIESGO_BAJO", "BAJO", ...), lowest tier first. Risk facts are read only
    when the label names no tier; if several are present the highest risk wins.
    """
    profile = risk_profile or ""
    for level in _RISK_FACTS:
        if level.value in profile:
            return level
    for level, fact in reversed(_RISK_FACTS.items()):
        if fact in facts:
            return level
    return RiskLevel.UNKNOWN
