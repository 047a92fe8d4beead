"""
Fase 1: Sanitización del texto extraído del PDF.

El texto copiado del PDF de horarios llega con dos defectos:
- La Ñ se corrompe sistemáticamente en '?'
- Las líneas de horario se parten en varias líneas físicas
  (sobre todo el nombre del docente)

Este módulo repara los caracteres y vuelve a unir cada línea de
horario en un solo registro lógico.
"""

import re
from typing import List

from .config import PALABRAS_ESTRUCTURA, DIAS, PALABRAS_UBICACION


# =============================================================================
# PATRONES REGEX
# =============================================================================

# Inicio de línea de horario: "1234 CALCULO ..."
PATRON_INICIO_HORARIO = re.compile(r'^\d+\s+[A-Z]')

# Día seguido de rango de horas: "LUNES 6-8"
PATRON_DIA_HORA = re.compile(r'\b(?:' + '|'.join(DIAS) + r')\s+\d+-\d+\b')

PATRON_UBICACION = re.compile(r'\b(?:' + '|'.join(PALABRAS_UBICACION) + r')\b')

# Termina en al menos dos palabras en mayúsculas (nombre de persona)
PATRON_TERMINA_EN_NOMBRE = re.compile(r'\b[A-ZÑ]{2,}\s+[A-ZÑ]{2,}(?:\s+[A-ZÑ]{2,})*\s*$')


# =============================================================================
# CLASIFICACIÓN DE LÍNEAS
# =============================================================================

def es_linea_estructura(linea: str) -> bool:
    """Carrera, asignatura, grupo, inscritos o encabezado de tabla."""
    return linea.startswith(PALABRAS_ESTRUCTURA)


def es_inicio_horario(linea: str) -> bool:
    return bool(PATRON_INICIO_HORARIO.match(linea))


def es_linea_completa(linea: str) -> bool:
    """
    Detecta si una línea de horario ya está completa.

    Criterios (todos):
    1. Tiene día seguido de rango de horas
    2. Tiene palabra de ubicación
    3. Termina en algo con forma de nombre de persona
    """
    return (
        bool(PATRON_DIA_HORA.search(linea))
        and bool(PATRON_UBICACION.search(linea))
        and bool(PATRON_TERMINA_EN_NOMBRE.search(linea))
    )


def es_continuacion(linea: str) -> bool:
    return not es_linea_estructura(linea) and not es_inicio_horario(linea)


def unir_lineas(base: str, siguiente: str) -> str:
    """Une dos fragmentos con un solo espacio."""
    if base.endswith(' ') or siguiente.startswith(' '):
        return base + siguiente
    return base + ' ' + siguiente


# =============================================================================
# SANITIZACIÓN
# =============================================================================

def sanitizar_texto(texto_crudo: str) -> str:
    """
    Repara caracteres y reconstruye las líneas partidas.

    Args:
        texto_crudo: Texto tal como se copió del PDF

    Returns:
        Texto con una línea lógica por renglón
    """
    texto = texto_crudo.replace('?', 'Ñ')

    lineas = [linea.strip() for linea in texto.split('\n')]
    lineas = [linea for linea in lineas if linea]

    reconstruidas: List[str] = []
    i = 0
    while i < len(lineas):
        linea = lineas[i]

        if es_linea_estructura(linea) or not es_inicio_horario(linea):
            reconstruidas.append(linea)
            i += 1
            continue

        completa = linea
        j = i + 1
        while (j < len(lineas)
               and es_continuacion(lineas[j])
               and not es_linea_completa(completa)):
            completa = unir_lineas(completa, lineas[j])
            j += 1

        reconstruidas.append(completa)
        i = j

    return '\n'.join(reconstruidas)
