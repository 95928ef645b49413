"""Domain enums for the applicant form and the inference-engine responses.

All enums use the str mixin so members compare equal to the raw strings the
form and the engine exchange over JSON.
"""

from __future__ import annotations

from enum import Enum


class EmploymentStatus(str, Enum):
    """Current labour situation (form step 1)."""

    EMPLOYED = "employed"
    INDEPENDENT = "independent"
    PENSIONED = "pensioned"
    UNEMPLOYED = "unemployed"


class CreditPurpose(str, Enum):
    """What the credit is for. Gates the purpose-specific products."""

    VIVIENDA = "vivienda"
    VEHICULO = "vehiculo"
    LIBRE_INVERSION = "libre_inversion"
    EDUCACION = "educacion"
    NEGOCIO = "negocio"


class FinalDecision(str, Enum):
    """Decision labels returned by the inference engine."""

    APROBADO = "APROBADO"
    RECHAZADO = "RECHAZADO"
    CONDICIONADO = "CONDICIONADO"
    PENDIENTE = "PENDIENTE"
