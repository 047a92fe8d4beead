"""
Coordenadas de edificios y distancia entre puntos.

El tablero ordena docentes por cercanía usando estas funciones; aquí
solo vive el cálculo, no la lógica de presentación.
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from .config import EDIFICIOS_LOCALIZACION


RADIO_TIERRA_KM = 6371


@dataclass
class Coordenadas:
    latitude: float
    longitude: float


@dataclass
class EdificioLocalizacion:
    codigo: str
    nombre: str
    coordenadas: Coordenadas
    aliases: List[str]


def _construir(codigo: str, datos: dict) -> EdificioLocalizacion:
    return EdificioLocalizacion(
        codigo=codigo,
        nombre=datos["nombre"],
        coordenadas=Coordenadas(datos["latitude"], datos["longitude"]),
        aliases=list(datos["aliases"]),
    )


def normalizar_edificio(edificio_crudo: str, localizaciones: dict = None) -> str:
    """
    Convierte un nombre de edificio al código del diccionario de coordenadas.

    Acepta igualdad con un alias o contención en cualquier dirección.
    Si no se encuentra, devuelve el texto original.
    """
    localizaciones = EDIFICIOS_LOCALIZACION if localizaciones is None else localizaciones
    limpio = edificio_crudo.upper().strip()
    if not limpio:
        return edificio_crudo

    for codigo, datos in localizaciones.items():
        for alias in datos["aliases"]:
            alias = alias.upper()
            if alias == limpio or alias in limpio or limpio in alias:
                return codigo
    return edificio_crudo


def ubicacion_edificio(edificio_crudo: str, localizaciones: dict = None) -> Optional[EdificioLocalizacion]:
    """Coordenadas del edificio, o None si no está en el diccionario."""
    localizaciones = EDIFICIOS_LOCALIZACION if localizaciones is None else localizaciones
    codigo = normalizar_edificio(edificio_crudo, localizaciones)
    if codigo not in localizaciones:
        return None
    return _construir(codigo, localizaciones[codigo])


def calcular_distancia(punto1: Coordenadas, punto2: Coordenadas) -> float:
    """Distancia en kilómetros (fórmula de Haversine)."""
    d_lat = math.radians(punto2.latitude - punto1.latitude)
    d_lon = math.radians(punto2.longitude - punto1.longitude)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(punto1.latitude))
        * math.cos(math.radians(punto2.latitude))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return RADIO_TIERRA_KM * c


def formatear_distancia(distancia_km: float) -> str:
    if distancia_km < 1:
        return f"{round(distancia_km * 1000)}m"
    return f"{distancia_km:.1f}km"


def nivel_proximidad(distancia_km: float) -> str:
    """'muy-cerca', 'cerca', 'medio' o 'lejos'."""
    if distancia_km < 0.1:
        return "muy-cerca"
    if distancia_km < 0.5:
        return "cerca"
    if distancia_km < 1.0:
        return "medio"
    return "lejos"
