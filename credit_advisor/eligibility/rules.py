"""Per-product eligibility decision tables.

Each product is a gate plus an ordered tuple of tiers. Tiers are evaluated
top to bottom and the first whose predicate holds wins, so the order encodes
the tie-break policy: strongest evidence first, weakest last.
Pure Python, no I/O.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from credit_advisor.eligibility.facts import Fact, FactSet, RiskLevel
from credit_advisor.eligibility.products import (
    FALLBACK_TERMS,
    PRODUCT_TERMS,
    SMMLV,
    ProductTerms,
    ProductType,
)
from credit_advisor.models.enums import CreditPurpose
from credit_advisor.schemas.application import AppInputData
from credit_advisor.schemas.eligibility import ProductCandidate

# Income facts, highest multiple first. A higher multiple satisfies a lower one.
_INCOME_FACTS: dict[int, Fact] = {
    4: Fact.INGRESOS_MIN_4_SMMLV,
    3: Fact.INGRESOS_MIN_3_SMMLV,
    2: Fact.INGRESOS_MIN_2_SMMLV,
}

# Installment-to-income facts, tightest first. A tighter cap satisfies a looser one.
_PAYMENT_FACTS: dict[int, Fact] = {
    30: Fact.CUOTA_MAX_30_INGRESOS,
    40: Fact.CUOTA_MAX_40_INGRESOS,
}


@dataclass(frozen=True)
class EvaluationContext:
    """Everything a predicate may look at for one evaluation."""

    facts: FactSet
    data: AppInputData
    risk: RiskLevel

    def has(self, *facts: Fact) -> bool:
        return all(f in self.facts for f in facts)

    def has_any(self, *facts: Fact) -> bool:
        return any(f in self.facts for f in facts)

    def income_at_least(self, multiple: int) -> bool:
        """True if a minimum-income fact for ``multiple`` (or higher) SMMLV is present."""
        return self.has_any(*(f for m, f in _INCOME_FACTS.items() if m >= multiple))

    def payment_within(self, pct: int) -> bool:
        """True if an installment-to-income fact at ``pct`` (or tighter) is present."""
        return self.has_any(*(f for p, f in _PAYMENT_FACTS.items() if p <= pct))

    @property
    def monthly_income(self) -> Decimal:
        return self.data.amount("monthly_income")

    @property
    def co_borrower_qualified(self) -> bool:
        return (
            self.has(Fact.INGRESOS_CODEUDOR_MIN_2_SMMLV)
            or self.data.amount("co_borrower_income") >= 2 * SMMLV
        )

    @property
    def has_minimum_tenure(self) -> bool:
        return self.has_any(Fact.ANTIGUEDAD_LABORAL_MIN_6_MESES, Fact.ANTIGUEDAD_LABORAL_MIN_12_MESES)

    @property
    def compliance_conditions(self) -> tuple[str, ...]:
        if self.data.flag("is_pep") and self.data.flag("pep_committee_approval"):
            return (COND_PEP,)
        return ()


Predicate = Callable[[EvaluationContext], bool]


def _always(ctx: EvaluationContext) -> bool:
    return True


def _risk_is(level: RiskLevel) -> Predicate:
    return lambda ctx: ctx.risk is level


@dataclass(frozen=True)
class Tier:
    """One row of a decision table.

    ``rate`` of None means the product's risk-adjusted rate applies.
    """

    name: str
    predicate: Predicate
    eligibility: int
    conditions: tuple[str, ...]
    rate: Decimal | None = None


@dataclass(frozen=True)
class ProductRule:
    """Gate + decision table for one product."""

    terms: ProductTerms
    gate: Predicate
    tiers: tuple[Tier, ...]

    def select_tier(self, ctx: EvaluationContext) -> Tier | None:
        """First tier whose predicate holds, or None if the gate is closed."""
        if not self.gate(ctx):
            return None
        for tier in self.tiers:
            if tier.predicate(ctx):
                return tier
        return None

    def evaluate(self, ctx: EvaluationContext) -> ProductCandidate | None:
        tier = self.select_tier(ctx)
        if tier is None:
            return None

        terms = self.terms
        rate = tier.rate if tier.rate is not None else terms.rate_for(ctx.risk)
        return ProductCandidate(
            id=terms.product.value,
            name=terms.name,
            description=terms.description,
            max_amount=terms.max_amount(ctx.monthly_income),
            interest_rate=rate,
            term_months=terms.term_months,
            conditions=[*tier.conditions, *ctx.compliance_conditions],
            eligibility=tier.eligibility,
        )


# ── Condition texts ───────────────────────────────────────────────────────

COND_CUOTA_INICIAL_30 = "Cuota inicial mínima del 30% del valor del inmueble"
COND_CUOTA_INICIAL_40 = "Cuota inicial mínima del 40% del valor del inmueble"
COND_CUOTA_INICIAL_50 = "Cuota inicial mínima del 50% del valor del inmueble"
COND_SEGURO_VIDA = "Seguro de vida deudor obligatorio"
COND_SEGURO_INCENDIO = "Seguro de incendio y terremoto sobre el inmueble"
COND_CODEUDOR_OBLIGATORIO = "Codeudor obligatorio con ingresos mínimos de 2 SMMLV"
COND_CODEUDOR_RECOMENDADO = "Se recomienda vincular un codeudor"
COND_ESTUDIO_CAPACIDAD = "Estudio de capacidad de pago con extractos de los últimos 6 meses"
COND_COMITE = "Sujeto a aprobación del comité de crédito"

COND_PRENDA = "Prenda sobre el vehículo a favor de la entidad"
COND_SEGURO_TODO_RIESGO = "Seguro todo riesgo del vehículo durante la vigencia del crédito"
COND_VEHICULO_CUOTA_20 = "Cuota inicial mínima del 20% del valor del vehículo"
COND_VEHICULO_CUOTA_30 = "Cuota inicial mínima del 30% del valor del vehículo"
COND_VEHICULO_CUOTA_40 = "Cuota inicial mínima del 40% del valor del vehículo"

COND_DEBITO_AUTOMATICO = "Débito automático de la cuota mensual"
COND_REFERENCIAS = "Verificación de referencias personales y comerciales"
COND_CODEUDOR_SOLIDARIO = "El codeudor responde solidariamente por la obligación"
COND_CODEUDOR_DOCUMENTOS = "Soportes de ingresos del codeudor de los últimos 3 meses"
COND_CUOTA_MANEJO = "Cuota de manejo mensual según franquicia"
COND_CUPO_PROGRESIVO = "Cupo sujeto a aumento progresivo según comportamiento de pago"
COND_DESCUENTO_NOMINA = "Descuento directo por nómina autorizado por el empleador"
COND_CONVENIO_VIGENTE = "Vinculación vigente con empresa en convenio"
COND_VISITA_NEGOCIO = "Visita de verificación al negocio"
COND_REGISTRO_NEGOCIO = "Soportes de ventas o registro mercantil del negocio"
COND_MONTO_REDUCIDO = "Monto inicial reducido, ampliable tras 6 meses de buen hábito de pago"

COND_PEP = "Cliente PEP: debida diligencia intensificada (SARLAFT)"


# ── Crédito Hipotecario ───────────────────────────────────────────────────

def _is_housing(ctx: EvaluationContext) -> bool:
    return ctx.has(Fact.FINALIDAD_VIVIENDA) or ctx.data.credit_purpose == CreditPurpose.VIVIENDA


HIPOTECARIO_TIERS: tuple[Tier, ...] = (
    Tier(
        name="riesgo_bajo_ingresos_4_cuota_30",
        predicate=lambda c: c.risk is RiskLevel.BAJO and c.income_at_least(4) and c.payment_within(30),
        eligibility=95,
        conditions=(COND_CUOTA_INICIAL_30, COND_SEGURO_VIDA, COND_SEGURO_INCENDIO),
    ),
    Tier(
        name="ingresos_3_cuota_30",
        predicate=lambda c: c.risk is not RiskLevel.ALTO and c.income_at_least(3) and c.payment_within(30),
        eligibility=80,
        conditions=(COND_CUOTA_INICIAL_30, COND_SEGURO_VIDA, COND_SEGURO_INCENDIO),
    ),
    Tier(
        name="ingresos_3",
        predicate=lambda c: c.income_at_least(3),
        eligibility=70,
        conditions=(COND_CUOTA_INICIAL_30, COND_SEGURO_VIDA, COND_ESTUDIO_CAPACIDAD),
    ),
    Tier(
        name="ingresos_2_con_codeudor",
        predicate=lambda c: c.income_at_least(2) and c.co_borrower_qualified,
        eligibility=65,
        conditions=(COND_CUOTA_INICIAL_30, COND_SEGURO_VIDA, COND_CODEUDOR_OBLIGATORIO),
    ),
    Tier(
        name="ingresos_2",
        predicate=lambda c: c.income_at_least(2),
        eligibility=50,
        conditions=(COND_CUOTA_INICIAL_40, COND_SEGURO_VIDA, COND_CODEUDOR_RECOMENDADO),
    ),
    Tier(
        name="minimo",
        predicate=_always,
        eligibility=35,
        conditions=(COND_CUOTA_INICIAL_50, COND_SEGURO_VIDA, COND_CODEUDOR_OBLIGATORIO, COND_COMITE),
    ),
)


# ── Crédito Vehicular ─────────────────────────────────────────────────────

def _is_vehicle(ctx: EvaluationContext) -> bool:
    return ctx.has(Fact.FINALIDAD_VEHICULO) or ctx.data.credit_purpose == CreditPurpose.VEHICULO


VEHICULAR_TIERS: tuple[Tier, ...] = (
    Tier(
        name="riesgo_bajo_ingresos_3_cuota_30",
        predicate=lambda c: c.risk is RiskLevel.BAJO and c.income_at_least(3) and c.payment_within(30),
        eligibility=90,
        conditions=(COND_VEHICULO_CUOTA_20, COND_PRENDA, COND_SEGURO_TODO_RIESGO),
    ),
    Tier(
        name="ingresos_2_cuota_40",
        predicate=lambda c: c.risk is not RiskLevel.ALTO and c.income_at_least(2) and c.payment_within(40),
        eligibility=75,
        conditions=(COND_VEHICULO_CUOTA_20, COND_PRENDA, COND_SEGURO_TODO_RIESGO),
    ),
    Tier(
        name="ingresos_2_cuota_inicial_30",
        predicate=lambda c: c.income_at_least(2) and c.has(Fact.CUOTA_INICIAL_MIN_30),
        eligibility=70,
        conditions=(COND_VEHICULO_CUOTA_30, COND_PRENDA, COND_SEGURO_TODO_RIESGO),
    ),
    Tier(
        name="ingresos_2_con_codeudor",
        predicate=lambda c: c.income_at_least(2) and (c.co_borrower_qualified or c.has(Fact.CODEUDOR_PRESENTE)),
        eligibility=65,
        conditions=(COND_VEHICULO_CUOTA_30, COND_PRENDA, COND_SEGURO_TODO_RIESGO, COND_CODEUDOR_OBLIGATORIO),
    ),
    Tier(
        name="ingresos_2",
        predicate=lambda c: c.income_at_least(2),
        eligibility=50,
        conditions=(COND_VEHICULO_CUOTA_30, COND_PRENDA, COND_SEGURO_TODO_RIESGO, COND_CODEUDOR_RECOMENDADO),
    ),
    Tier(
        name="minimo",
        predicate=_always,
        eligibility=35,
        conditions=(COND_VEHICULO_CUOTA_40, COND_PRENDA, COND_SEGURO_TODO_RIESGO, COND_CODEUDOR_OBLIGATORIO),
    ),
)


# ── Libre Inversión ───────────────────────────────────────────────────────

def _is_free_investment_candidate(ctx: EvaluationContext) -> bool:
    return ctx.income_at_least(3) and ctx.has(Fact.ANTIGUEDAD_LABORAL_MIN_12_MESES)


LIBRE_INVERSION_TIERS: tuple[Tier, ...] = (
    Tier(
        name="riesgo_bajo",
        predicate=_risk_is(RiskLevel.BAJO),
        eligibility=95,
        rate=Decimal("1.8"),
        conditions=(COND_DEBITO_AUTOMATICO,),
    ),
    Tier(
        name="riesgo_medio",
        predicate=_risk_is(RiskLevel.MEDIO),
        eligibility=75,
        rate=Decimal("2.2"),
        conditions=(COND_DEBITO_AUTOMATICO, COND_SEGURO_VIDA),
    ),
    Tier(
        name="otro_riesgo",
        predicate=_always,
        eligibility=60,
        rate=Decimal("2.8"),
        conditions=(COND_DEBITO_AUTOMATICO, COND_SEGURO_VIDA, COND_REFERENCIAS),
    ),
)


# ── Crédito con Codeudor ──────────────────────────────────────────────────

CODEUDOR_TIERS: tuple[Tier, ...] = (
    Tier(
        name="codeudor_calificado",
        predicate=_always,
        eligibility=80,
        conditions=(COND_CODEUDOR_SOLIDARIO, COND_CODEUDOR_DOCUMENTOS, COND_SEGURO_VIDA),
    ),
)


# ── Tarjeta de Crédito ────────────────────────────────────────────────────

TARJETA_TIERS: tuple[Tier, ...] = (
    Tier(
        name="riesgo_bajo",
        predicate=_risk_is(RiskLevel.BAJO),
        eligibility=92,
        conditions=(COND_CUOTA_MANEJO,),
    ),
    Tier(
        name="riesgo_medio",
        predicate=_risk_is(RiskLevel.MEDIO),
        eligibility=75,
        conditions=(COND_CUOTA_MANEJO, COND_CUPO_PROGRESIVO),
    ),
    Tier(
        name="otro_riesgo",
        predicate=_always,
        eligibility=70,
        conditions=(COND_CUOTA_MANEJO, COND_CUPO_PROGRESIVO),
    ),
)


# ── Libranza ──────────────────────────────────────────────────────────────

def _has_payroll_agreement(ctx: EvaluationContext) -> bool:
    return ctx.data.flag("is_convention_employee") and ctx.data.flag("payroll_discount_authorized")


LIBRANZA_TIERS: tuple[Tier, ...] = (
    Tier(
        name="convenio_con_descuento",
        predicate=_always,
        eligibility=95,
        conditions=(COND_DESCUENTO_NOMINA, COND_CONVENIO_VIGENTE),
    ),
)


# ── Microcrédito ──────────────────────────────────────────────────────────

MICROCREDITO_TIERS: tuple[Tier, ...] = (
    Tier(
        name="microempresario",
        predicate=_always,
        eligibility=75,
        conditions=(COND_VISITA_NEGOCIO, COND_REGISTRO_NEGOCIO),
    ),
)


# ── Rule registry ─────────────────────────────────────────────────────────

# Evaluation order is significant: it is the insertion order the stable sort
# falls back to when two products tie on eligibility.
PRODUCT_RULES: tuple[ProductRule, ...] = (
    ProductRule(PRODUCT_TERMS[ProductType.CREDITO_HIPOTECARIO], _is_housing, HIPOTECARIO_TIERS),
    ProductRule(PRODUCT_TERMS[ProductType.CREDITO_VEHICULAR], _is_vehicle, VEHICULAR_TIERS),
    ProductRule(PRODUCT_TERMS[ProductType.LIBRE_INVERSION], _is_free_investment_candidate, LIBRE_INVERSION_TIERS),
    ProductRule(PRODUCT_TERMS[ProductType.CREDITO_CODEUDOR], lambda c: c.co_borrower_qualified, CODEUDOR_TIERS),
    ProductRule(PRODUCT_TERMS[ProductType.TARJETA_CREDITO], lambda c: c.income_at_least(2), TARJETA_TIERS),
    ProductRule(PRODUCT_TERMS[ProductType.LIBRANZA], _has_payroll_agreement, LIBRANZA_TIERS),
    ProductRule(PRODUCT_TERMS[ProductType.MICROCREDITO], lambda c: c.data.flag("is_microenterprise"), MICROCREDITO_TIERS),
)


# ── Fallback (only when no rule above produced a candidate) ───────────────

def _income_covers(multiple: int) -> Predicate:
    """Gate on the declared income itself rather than on engine facts."""
    return lambda ctx: ctx.monthly_income >= multiple * SMMLV


_earns_two_smmlv = _income_covers(2)


FALLBACK_RULES: tuple[ProductRule, ...] = (
    ProductRule(
        FALLBACK_TERMS[ProductType.LIBRE_INVERSION],
        lambda c: _earns_two_smmlv(c) and c.has_minimum_tenure,
        (
            Tier(
                name="riesgo_bajo",
                predicate=_risk_is(RiskLevel.BAJO),
                eligibility=85,
                rate=Decimal("2.0"),
                conditions=(COND_MONTO_REDUCIDO, COND_DEBITO_AUTOMATICO),
            ),
            Tier(
                name="otro_riesgo",
                predicate=_always,
                eligibility=70,
                rate=Decimal("2.8"),
                conditions=(COND_MONTO_REDUCIDO, COND_DEBITO_AUTOMATICO, COND_REFERENCIAS),
            ),
        ),
    ),
    ProductRule(
        FALLBACK_TERMS[ProductType.TARJETA_CREDITO],
        _earns_two_smmlv,
        (
            Tier(
                name="riesgo_bajo",
                predicate=_risk_is(RiskLevel.BAJO),
                eligibility=90,
                conditions=(COND_CUOTA_MANEJO, COND_MONTO_REDUCIDO),
            ),
            Tier(
                name="riesgo_medio",
                predicate=_risk_is(RiskLevel.MEDIO),
                eligibility=75,
                conditions=(COND_CUOTA_MANEJO, COND_MONTO_REDUCIDO, COND_CUPO_PROGRESIVO),
            ),
            Tier(
                name="otro_riesgo",
                predicate=_always,
                eligibility=65,
                conditions=(COND_CUOTA_MANEJO, COND_MONTO_REDUCIDO, COND_CUPO_PROGRESIVO),
            ),
        ),
    ),
)
