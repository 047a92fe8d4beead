"""
Resolución de ubicaciones (edificio y salón).

Convierte el fragmento de ubicación de una línea de horario
("TECNOLOGICA BLOQUE 9 AULA 101 ...") en un par canónico
(edificio, salón) usando el diccionario de aliases de config.

El emparejamiento es por contención de subcadena y gana el primer
edificio/salón declarado. Si un alias de un edificio es subcadena del
de otro, decide el orden del diccionario.
"""

import re
from typing import List, Optional

from .config import (
    construir_edificios,
    EDIFICIO_DESCONOCIDO,
    SALON_SIN_EDIFICIO,
    SALON_DESCONOCIDO,
)
from .models import EdificioInfo, SalonInfo, Ubicacion


# Patrones genéricos cuando ningún salón declarado coincide
PATRON_AULA_GENERICA = re.compile(r'AULA\s+(\d+)')
PATRON_SALA_GENERICA = re.compile(r'SALA.*?(\d+)')


def normalizar_ubicacion(texto: str) -> str:
    """Mayúsculas y espacios colapsados."""
    return re.sub(r'\s+', ' ', texto.upper()).strip()


def _contiene_nombre_o_alias(texto: str, nombre: str, aliases: List[str]) -> bool:
    if nombre in texto:
        return True
    return any(alias in texto for alias in aliases)


class EdificioMatcher:
    """
    Matcher de edificios y salones.

    Usage:
        matcher = EdificioMatcher()
        ubicacion = matcher.extraer_ubicacion("TECNOLOGICA BLOQUE 9 AULA 101")
        # Ubicacion(edificio="BLOQUE 9", salon="AULA 101")
    """

    def __init__(self, edificios: Optional[List[EdificioInfo]] = None):
        """
        Args:
            edificios: Diccionario de edificios. Por defecto el de config.
        """
        self.edificios = edificios if edificios is not None else construir_edificios()

    def extraer_ubicacion(self, fragmento: str) -> Ubicacion:
        """
        Extrae edificio y salón de un texto de ubicación.

        Returns:
            Ubicacion con nombres canónicos, o valores centinela
            si no se pudo resolver.
        """
        texto = normalizar_ubicacion(fragmento)

        edificio = self.buscar_edificio(texto)
        if edificio is None:
            return Ubicacion(edificio=EDIFICIO_DESCONOCIDO, salon=SALON_SIN_EDIFICIO)

        salon = self.buscar_salon(texto, edificio)
        return Ubicacion(
            edificio=edificio.nombre,
            salon=salon.nombre if salon else SALON_DESCONOCIDO,
        )

    def buscar_edificio(self, texto: str) -> Optional[EdificioInfo]:
        for edificio in self.edificios:
            if _contiene_nombre_o_alias(texto, edificio.nombre, edificio.aliases):
                return edificio
        return None

    def buscar_salon(self, texto: str, edificio: EdificioInfo) -> Optional[SalonInfo]:
        """
        Busca el salón dentro del edificio.

        Si ningún salón declarado coincide, intenta "AULA <n>" y luego
        "SALA ... <n>" y sintetiza el nombre.
        """
        for salon in edificio.salones:
            if _contiene_nombre_o_alias(texto, salon.nombre, salon.aliases):
                return salon

        match = PATRON_AULA_GENERICA.search(texto)
        if match:
            return SalonInfo(nombre=f"AULA {match.group(1)}")

        match = PATRON_SALA_GENERICA.search(texto)
        if match:
            return SalonInfo(nombre=f"SALA {match.group(1)}")

        return None
