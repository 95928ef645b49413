"""Failure explainer: turns engine failure codes into diagnosis + remediation.

Static lookup tables, loaded once. Unknown codes get a humanized message and a
generic remediation instead of an error.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from credit_advisor.schemas.eligibility import ExplainedFailure, FailureExplanation

GENERIC_REMEDIATION = "Consulte con un asesor financiero para mejorar su perfil crediticio"

FAILURE_MESSAGES: Mapping[str, str] = MappingProxyType({
    "FALLA_EDAD_FUERA_RANGO": "Edad fuera del rango permitido (18-75 años)",
    "FALLA_INGRESOS_INSUFICIENTES": "Ingresos insuficientes, mínimo requerido 1 SMMLV",
    "FALLA_SCORE_INSUFICIENTE": "Score crediticio insuficiente, mínimo requerido 300 puntos",
    "FALLA_ENDEUDAMIENTO_EXCESIVO": "Nivel de endeudamiento excesivo, máximo permitido 50%",
    "FALLA_MORA_RECIENTE_SIGNIFICATIVA": "Mora reciente significativa superior a 90 días",
    "FALLA_ACTIVIDAD_ALTO_RIESGO_SARLAFT": "Actividad económica de alto riesgo LA/FT",
    "FALLA_PEP_SIN_APROBACION": "Requiere aprobación de comité especial para PEP",
    "FALLA_MULTIPLES_CONSULTAS": "Múltiples consultas simultáneas detectadas",
    "FALLA_DOCUMENTOS_INCOMPLETOS": "Documentación incompleta o inválida",
    "FALLA_REFERENCIAS_NEGATIVAS": "Referencias comerciales negativas",
    "FALLA_GARANTIAS_INSUFICIENTES": "Garantías insuficientes o no avaluadas",
    "FALLA_HISTORIAL_CREDITICIO_NEGATIVO": "Historial crediticio negativo",
    "FALLA_CAPACIDAD_PAGO_INSUFICIENTE": "Capacidad de pago insuficiente",
    "FALLA_ESTABILIDAD_LABORAL_INSUFICIENTE": "Estabilidad laboral insuficiente",
})

FAILURE_REMEDIATIONS: Mapping[str, str] = MappingProxyType({
    "FALLA_EDAD_FUERA_RANGO": "Verifique que su edad esté entre 18 y 75 años",
    "FALLA_INGRESOS_INSUFICIENTES": "Aumente sus ingresos mensuales a al menos $1.300.000 (1 SMMLV)",
    "FALLA_SCORE_INSUFICIENTE": "Mejore su historial crediticio para alcanzar al menos 300 puntos",
    "FALLA_ENDEUDAMIENTO_EXCESIVO": "Reduzca sus obligaciones mensuales a máximo 50% de sus ingresos",
    "FALLA_MORA_RECIENTE_SIGNIFICATIVA": "Regularice sus pagos pendientes y evite moras superiores a 90 días",
    "FALLA_ACTIVIDAD_ALTO_RIESGO_SARLAFT": "Considere cambiar a una actividad económica de menor riesgo",
    "FALLA_PEP_SIN_APROBACION": "Obtenga la aprobación del comité especial para personas políticamente expuestas",
    "FALLA_MULTIPLES_CONSULTAS": "Espere al menos 90 días antes de realizar nuevas consultas crediticias",
    "FALLA_DOCUMENTOS_INCOMPLETOS": "Complete toda la documentación requerida y verifique su validez",
    "FALLA_REFERENCIAS_NEGATIVAS": "Mejore sus referencias comerciales y mantenga un buen historial",
    "FALLA_GARANTIAS_INSUFICIENTES": "Proporcione garantías adicionales o mejore las existentes",
    "FALLA_HISTORIAL_CREDITICIO_NEGATIVO": "Regularice su historial crediticio y mantenga pagos puntuales",
    "FALLA_CAPACIDAD_PAGO_INSUFICIENTE": "Aumente sus ingresos o reduzca sus gastos para mejorar su capacidad de pago",
    "FALLA_ESTABILIDAD_LABORAL_INSUFICIENTE": "Mantenga estabilidad laboral por al menos 12 meses consecutivos",
})

_WORD_START = re.compile(r"\b\w")


def humanize_code(code: str) -> str:
    """FALLA_ALGO_NUEVO -> "Falla Algo Nuevo"."""
    spaced = code.replace("_", " ").lower()
    return _WORD_START.sub(lambda m: m.group(0).upper(), spaced)


def explain(code: str) -> FailureExplanation:
    """Diagnosis and remediation for one failure code. Never raises."""
    return FailureExplanation(
        message=FAILURE_MESSAGES.get(code) or humanize_code(code),
        remediation=FAILURE_REMEDIATIONS.get(code, GENERIC_REMEDIATION),
    )


def explain_all(codes: Iterable[str] | None) -> list[ExplainedFailure]:
    """Explain every code, keeping the engine's order."""
    explained: list[ExplainedFailure] = []
    for code in codes or ():
        explanation = explain(code)
        explained.append(ExplainedFailure(
            code=code,
            message=explanation.message,
            remediation=explanation.remediation,
        ))
    return explained
