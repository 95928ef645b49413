"""Product catalogue: display names, limits, risk-adjusted rates and terms."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum
from types import MappingProxyType

from credit_advisor.config import settings
from credit_advisor.eligibility.facts import RiskLevel

# Salario mínimo mensual legal vigente, basis of every income multiple.
SMMLV = Decimal(settings.policy.legal_minimum_wage)


class ProductType(StrEnum):
    """Products offered by the recommender, in evaluation order."""

    CREDITO_HIPOTECARIO = "credito_hipotecario"
    CREDITO_VEHICULAR = "credito_vehicular"
    LIBRE_INVERSION = "libre_inversion"
    CREDITO_CODEUDOR = "credito_codeudor"
    TARJETA_CREDITO = "tarjeta_credito"
    LIBRANZA = "libranza"
    MICROCREDITO = "microcredito"


@dataclass(frozen=True)
class ProductTerms:
    """Static commercial terms of a product.

    ``income_multiplier`` of None means the limit is the flat ``max_cap``.
    ``risk_rates`` overrides ``base_rate`` per resolved risk tier.
    """

    product: ProductType
    name: str
    description: str
    max_cap: Decimal
    base_rate: Decimal
    term_months: int
    income_multiplier: Decimal | None = None
    risk_rates: Mapping[RiskLevel, Decimal] = field(default_factory=dict)

    def max_amount(self, monthly_income: Decimal) -> Decimal:
        """Income-derived limit, never above the product cap."""
        if self.income_multiplier is None:
            return self.max_cap
        income = max(monthly_income, Decimal("0"))
        return min(income * self.income_multiplier, self.max_cap)

    def rate_for(self, risk: RiskLevel) -> Decimal:
        return self.risk_rates.get(risk, self.base_rate)


def _rates(bajo: str, medio: str, alto: str) -> Mapping[RiskLevel, Decimal]:
    return MappingProxyType({
        RiskLevel.BAJO: Decimal(bajo),
        RiskLevel.MEDIO: Decimal(medio),
        RiskLevel.ALTO: Decimal(alto),
    })


PRODUCT_TERMS: Mapping[ProductType, ProductTerms] = MappingProxyType({
    ProductType.CREDITO_HIPOTECARIO: ProductTerms(
        product=ProductType.CREDITO_HIPOTECARIO,
        name="Crédito Hipotecario",
        description="Financiación para compra de vivienda nueva o usada",
        income_multiplier=Decimal("15"),
        max_cap=Decimal("200000000"),
        base_rate=Decimal("2.0"),
        risk_rates=_rates("1.2", "1.5", "2.5"),
        term_months=240,
    ),
    ProductType.CREDITO_VEHICULAR: ProductTerms(
        product=ProductType.CREDITO_VEHICULAR,
        name="Crédito Vehicular",
        description="Financiación para compra de vehículo nuevo o usado con prenda",
        income_multiplier=Decimal("10"),
        max_cap=Decimal("80000000"),
        base_rate=Decimal("1.8"),
        risk_rates=_rates("1.0", "1.2", "2.2"),
        term_months=60,
    ),
    ProductType.LIBRE_INVERSION: ProductTerms(
        product=ProductType.LIBRE_INVERSION,
        name="Crédito de Libre Inversión",
        description="Crédito de consumo sin destinación específica",
        income_multiplier=Decimal("15"),
        max_cap=Decimal("50000000"),
        base_rate=Decimal("2.8"),
        term_months=60,
    ),
    ProductType.CREDITO_CODEUDOR: ProductTerms(
        product=ProductType.CREDITO_CODEUDOR,
        name="Crédito con Codeudor",
        description="Crédito de consumo respaldado por los ingresos de un codeudor",
        income_multiplier=Decimal("12"),
        max_cap=Decimal("30000000"),
        base_rate=Decimal("2.0"),
        term_months=48,
    ),
    ProductType.TARJETA_CREDITO: ProductTerms(
        product=ProductType.TARJETA_CREDITO,
        name="Tarjeta de Crédito",
        description="Cupo rotativo para compras y avances",
        income_multiplier=Decimal("3"),
        max_cap=Decimal("15000000"),
        base_rate=Decimal("2.8"),
        term_months=0,
    ),
    ProductType.LIBRANZA: ProductTerms(
        product=ProductType.LIBRANZA,
        name="Crédito de Libranza",
        description="Crédito con descuento directo de nómina para empleados de empresas en convenio",
        income_multiplier=Decimal("8"),
        max_cap=Decimal("40000000"),
        base_rate=Decimal("1.5"),
        term_months=36,
    ),
    ProductType.MICROCREDITO: ProductTerms(
        product=ProductType.MICROCREDITO,
        name="Microcrédito Empresarial",
        description="Capital de trabajo y activos para microempresarios",
        max_cap=Decimal("25000000"),
        base_rate=Decimal("2.5"),
        term_months=36,
    ),
})

# Reduced-scope terms offered by the fallback pass when nothing else matched.
FALLBACK_TERMS: Mapping[ProductType, ProductTerms] = MappingProxyType({
    ProductType.LIBRE_INVERSION: ProductTerms(
        product=ProductType.LIBRE_INVERSION,
        name="Crédito de Libre Inversión",
        description="Crédito de consumo de monto reducido sin destinación específica",
        income_multiplier=Decimal("8"),
        max_cap=Decimal("30000000"),
        base_rate=Decimal("2.8"),
        term_months=48,
    ),
    ProductType.TARJETA_CREDITO: ProductTerms(
        product=ProductType.TARJETA_CREDITO,
        name="Tarjeta de Crédito",
        description="Cupo rotativo inicial para compras",
        income_multiplier=Decimal("2"),
        max_cap=Decimal("10000000"),
        base_rate=Decimal("2.8"),
        term_months=0,
    ),
})
