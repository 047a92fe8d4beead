"""
Extracción del texto crudo del horario.

Fuentes soportadas:
- TXT: texto copiado del PDF (lo más común)
- PDF: se extrae con PyMuPDF página por página

El texto se entrega tal cual; la limpieza es trabajo del sanitizer.
"""

from abc import ABC, abstractmethod
from pathlib import Path

import fitz  # PyMuPDF
from tqdm import tqdm


# =============================================================================
# CLASE BASE
# =============================================================================

class Extractor(ABC):
    """
    Clase base abstracta para extractores de texto.

    Cada extractor lee una fuente específica manteniendo
    una interfaz común.
    """

    def __init__(self, file_path: Path):
        """
        Args:
            file_path: Ruta al archivo fuente

        Raises:
            FileNotFoundError: Si el archivo no existe
        """
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"Archivo no encontrado: {self.file_path}")

    @abstractmethod
    def extraer(self) -> str:
        """Extrae el texto completo de la fuente."""


# =============================================================================
# EXTRACTORES
# =============================================================================

class TxtExtractor(Extractor):
    """Texto plano UTF-8."""

    def extraer(self) -> str:
        return self.file_path.read_text(encoding="utf-8")


class PdfExtractor(Extractor):
    """
    Extractor para archivos PDF.

    Une el texto de todas las páginas con salto de línea. Las líneas
    partidas que deja PyMuPDF se reconstruyen después en el sanitizer.
    """

    def __init__(self, file_path: Path, mostrar_progreso: bool = False):
        super().__init__(file_path)
        self.mostrar_progreso = mostrar_progreso

    def extraer(self) -> str:
        """
        Raises:
            ValueError: Si el archivo no es un PDF legible
        """
        paginas = []
        try:
            doc = fitz.open(str(self.file_path))
        except fitz.FileDataError as e:
            raise ValueError(f"PDF corrupto o ilegible: {self.file_path} ({e})") from e

        with doc:
            for pagina in tqdm(doc, desc="Extrayendo", unit="pág", disable=not self.mostrar_progreso):
                paginas.append(pagina.get_text())
        return '\n'.join(paginas)


def crear_extractor(file_path: Path, mostrar_progreso: bool = False) -> Extractor:
    """
    Factory que crea el extractor apropiado según extensión.

    Raises:
        ValueError: Si el tipo de archivo no es soportado
    """
    file_path = Path(file_path)
    suffix = file_path.suffix.lower()

    if suffix == '.pdf':
        return PdfExtractor(file_path, mostrar_progreso=mostrar_progreso)
    elif suffix == '.txt':
        return TxtExtractor(file_path)
    else:
        raise ValueError(f"Tipo de archivo no soportado: {suffix}")
