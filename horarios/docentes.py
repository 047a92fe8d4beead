"""
Identificación de docentes contra un roster.

El nombre del docente llega al final de la línea de horario pegado a
palabras de ubicación o partido por la extracción del PDF. En lugar de
una distancia de edición se exige que TODAS las palabras significativas
del nombre del roster aparezcan en el fragmento, más una verificación
débil de orden entre las dos primeras.

El roster lo provee un paso externo (archivo o URL), por eso el matcher
se construye en dos fases:

    docentes = cargar_docentes("docentes.txt")
    matcher = DocenteMatcher.con_docentes(docentes)
    matcher.buscar_docente("TECNOLOGICA BLOQUE 9 AULA 101 GARCIA MARIA")
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Union

import requests
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)
from unidecode import unidecode

from .config import get_config


_config = get_config()


# =============================================================================
# CARGA DEL ROSTER
# =============================================================================

@retry(
    stop=stop_after_attempt(_config["max_retries"]),
    wait=wait_exponential(multiplier=2, min=1, max=30),
    retry=retry_if_exception_type((
        requests.ConnectionError,
        requests.Timeout,
    )),
    reraise=True,
)
def descargar_roster(url: str, timeout: int = _config["timeout"]) -> str:
    """
    Descarga el roster con reintentos.

    El roster siempre es UTF-8; se ignora el charset que anuncie el
    servidor (text/plain sin charset llega como ISO-8859-1).
    """
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    return response.content.decode("utf-8")


def parsear_roster(contenido: str) -> List[str]:
    """Un nombre por línea; descarta líneas vacías."""
    return [linea.strip() for linea in contenido.split('\n') if linea.strip()]


def cargar_docentes(fuente: Union[str, Path]) -> List[str]:
    """
    Carga la lista de docentes desde un archivo local o una URL.

    Args:
        fuente: Ruta a un .txt o URL http(s)

    Returns:
        Nombres en el orden del archivo

    Raises:
        FileNotFoundError: Si la ruta local no existe
        requests.HTTPError: Si la descarga falla
    """
    fuente_str = str(fuente)
    if fuente_str.startswith(("http://", "https://")):
        return parsear_roster(descargar_roster(fuente_str))

    ruta = Path(fuente)
    if not ruta.exists():
        raise FileNotFoundError(f"No existe el roster de docentes: {ruta}")
    return parsear_roster(ruta.read_text(encoding="utf-8"))


# =============================================================================
# NORMALIZACIÓN
# =============================================================================

def normalizar_nombre(texto: str) -> str:
    """
    Normaliza texto para comparar nombres.

    Mayúsculas, sin acentos, Ñ y '?' (Ñ corrupta) como N,
    solo letras y espacios, espacios colapsados.
    """
    texto = unidecode(texto.upper()).upper()
    texto = texto.replace('?', 'N')
    texto = re.sub(r'[^A-Z\s]', '', texto)
    return re.sub(r'\s+', ' ', texto).strip()


def palabras_requeridas(nombre_normalizado: str) -> List[str]:
    """Palabras de más de 2 letras (se ignoran DE, LA, Y...)."""
    return [p for p in nombre_normalizado.split(' ') if len(p) > 2]


def contiene_docente(texto: str, palabras: List[str]) -> bool:
    """
    Verifica si el docente está contenido en el texto normalizado.

    Todas las palabras deben aparecer como subcadena. Con dos o más
    palabras, la segunda debe aparecer después de la primera.
    """
    if not palabras:
        return False
    if not all(palabra in texto for palabra in palabras):
        return False
    if len(palabras) >= 2:
        return texto.index(palabras[1]) > texto.index(palabras[0])
    return True


# =============================================================================
# MATCHER
# =============================================================================

class DocenteMatcher:
    """
    Matcher de docentes contra un roster ordenado.

    Gana el primer docente del roster que coincida. Con roster vacío
    nunca encuentra a nadie.
    """

    def __init__(self, docentes: Optional[List[str]] = None, logger: Optional[logging.Logger] = None):
        """
        Args:
            docentes: Roster en orden; None equivale a roster vacío
            logger: Logger para avisos de docentes no encontrados
        """
        self.logger = logger or logging.getLogger(__name__)
        self.docentes: List[str] = list(docentes or [])
        # (nombre del roster, palabras requeridas)
        self._indice = [
            (docente, palabras_requeridas(normalizar_nombre(docente)))
            for docente in self.docentes
        ]

    @classmethod
    def con_docentes(cls, docentes: List[str], logger: Optional[logging.Logger] = None) -> "DocenteMatcher":
        return cls(docentes, logger=logger)

    @classmethod
    def desde_fuente(cls, fuente: Union[str, Path], logger: Optional[logging.Logger] = None) -> "DocenteMatcher":
        """Carga el roster (archivo o URL) y construye el matcher."""
        return cls(cargar_docentes(fuente), logger=logger)

    def buscar_docente(self, fragmento: str) -> str:
        """
        Encuentra el docente más probable en un texto corrupto.

        Returns:
            Nombre tal como está en el roster, o "" si no hay coincidencia
        """
        if not fragmento or not fragmento.strip():
            return ""

        texto = normalizar_nombre(fragmento)

        for docente, palabras in self._indice:
            if contiene_docente(texto, palabras):
                return docente
            if docente == fragmento:
                return docente

        self.logger.warning('No se encontró docente en: "%s"', fragmento)
        return ""
