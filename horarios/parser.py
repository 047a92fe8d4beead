"""
Fase 2: Parsing del horario.

Recorre el texto sanitizado línea por línea con una máquina de estados:
- Carrera ("PROYECTO CURRICULAR ...")
  - Asignatura ("ESPACIO ACADEMICO ...")
    - Grupo ("GRP. ..." + "INSCRITOS n")
      - Bloques ("1234 MATERIA LUNES 6-8 TECNOLOGICA ... DOCENTE")

Cada línea de horario se resuelve con EdificioMatcher y DocenteMatcher.
Las líneas que no se pueden convertir en bloque se registran como
LineaOmitida y el parseo continúa.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Union

from .config import (
    PALABRA_CARRERA,
    PALABRA_ASIGNATURA,
    PALABRA_GRUPO,
    FACULTAD_POR_DEFECTO,
    SEDE,
    DIAS,
    CODIGOS_CARRERA,
    CODIGO_CARRERA_DESCONOCIDO,
    PALABRAS_NO_DOCENTE,
)
from .docentes import DocenteMatcher
from .edificios import EdificioMatcher
from .models import (
    HorarioUniversidad,
    Facultad,
    Carrera,
    Asignatura,
    Grupo,
    BloqueHorario,
    DiaSemana,
    LineaOmitida,
    ResultadoParseo,
)
from .sanitizer import sanitizar_texto


# =============================================================================
# PATRONES REGEX
# =============================================================================

PATRON_CARRERA = re.compile(r'PROYECTO CURRICULAR (.+)')
PATRON_GRUPO = re.compile(r'GRP\. (.+)')
PATRON_INSCRITOS = re.compile(r'INSCRITOS (\d+)')

# Rango de horas como token completo: "6-8"
PATRON_HORARIO = re.compile(r'^(\d+)-(\d+)$')

PATRON_CODIGO = re.compile(r'^\d+\s+')
PATRON_DIA = re.compile('|'.join(DIAS))
PATRON_RANGO = re.compile(r'\d+-\d+')

# Palabra con forma de apellido/nombre (incluye Ñ y la Ñ corrupta)
PATRON_PALABRA_NOMBRE = re.compile(r'^[A-ZÑ?]+$')

# Palabras finales que se toman si no se detecta el inicio del nombre
PALABRAS_FINALES_DOCENTE = 4


# =============================================================================
# FUNCIONES AUXILIARES
# =============================================================================

def es_linea_horario(linea: str) -> bool:
    """Código al inicio + día + rango de horas + sede."""
    return (
        bool(PATRON_CODIGO.match(linea))
        and bool(PATRON_DIA.search(linea))
        and bool(PATRON_RANGO.search(linea))
        and SEDE in linea
    )


def extraer_codigo_carrera(nombre: str) -> str:
    for subcadena, codigo in CODIGOS_CARRERA.items():
        if subcadena in nombre:
            return codigo
    return CODIGO_CARRERA_DESCONOCIDO


def parsear_dia(partes: List[str]) -> Optional[DiaSemana]:
    """Primer token que sea exactamente un día."""
    for parte in partes:
        if parte in DIAS:
            return DiaSemana(parte)
    return None


def parsear_horario(partes: List[str]) -> Optional[tuple]:
    """Primer token "inicio-fin" como (inicio, fin)."""
    for parte in partes:
        match = PATRON_HORARIO.match(parte)
        if match:
            return int(match.group(1)), int(match.group(2))
    return None


def parece_nombre(palabra: str) -> bool:
    return len(palabra) >= 3 and palabra == palabra.upper() and bool(PATRON_PALABRA_NOMBRE.match(palabra))


def extraer_parte_docente(texto: str, palabras_excluidas=PALABRAS_NO_DOCENTE) -> str:
    """
    Extrae solo la parte del fragmento que corresponde al docente.

    La ubicación y el nombre vienen pegados sin separador. El nombre
    empieza en la primera palabra que no es de ubicación, tiene forma
    de nombre y va seguida de otra palabra con forma de nombre.
    Si no se encuentra, se toman las últimas 4 palabras.
    """
    palabras = texto.split(' ')

    for i, palabra in enumerate(palabras[:-1]):
        if palabra in palabras_excluidas or not parece_nombre(palabra):
            continue
        if parece_nombre(palabras[i + 1]):
            return ' '.join(palabras[i:])

    return ' '.join(palabras[-PALABRAS_FINALES_DOCENTE:])


# =============================================================================
# ESTADO DEL PARSEO
# =============================================================================

@dataclass
class EstadoParseo:
    """
    Contexto abierto durante un parseo.

    Se crea uno por llamada a parsear(); None significa "no abierto".
    """
    universidad: HorarioUniversidad
    facultad: Optional[Facultad] = None
    carrera: Optional[Carrera] = None
    asignatura: Optional[Asignatura] = None
    grupo: Optional[Grupo] = None

    def cerrar_grupo(self):
        if self.grupo is not None and self.asignatura is not None:
            self.asignatura.grupos.append(self.grupo)
        self.grupo = None

    def cerrar_asignatura(self):
        """Cierra grupo y asignatura, completando el código si falta."""
        self.cerrar_grupo()
        if self.asignatura is not None and self.carrera is not None:
            asignatura = self.asignatura
            if not asignatura.codigo and asignatura.grupos:
                primer_bloque = next(
                    (g.bloques[0] for g in asignatura.grupos if g.bloques), None
                )
                if primer_bloque is not None and primer_bloque.codigo_asignatura:
                    asignatura.codigo = primer_bloque.codigo_asignatura
                else:
                    asignatura.codigo = f"{self.carrera.codigo}-{asignatura.nombre[:3]}"
            self.carrera.asignaturas.append(asignatura)
        self.asignatura = None

    def cerrar_todo(self):
        self.cerrar_asignatura()
        if self.carrera is not None and self.facultad is not None:
            self.facultad.carreras.append(self.carrera)
        self.carrera = None


# =============================================================================
# PARSER DE HORARIOS
# =============================================================================

class ParserHorarios:
    """
    Parser del texto de horarios.

    No guarda estado entre llamadas: el contexto vive en un EstadoParseo
    por cada parseo, así que una instancia se puede reutilizar.

    Usage:
        matcher = DocenteMatcher.con_docentes(["GARCIA MARIA"])
        parser = ParserHorarios(docente_matcher=matcher)
        resultado = parser.parsear(texto)
        resultado.universidad.facultades
    """

    def __init__(
        self,
        docente_matcher: Optional[DocenteMatcher] = None,
        edificio_matcher: Optional[EdificioMatcher] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.docente_matcher = docente_matcher or DocenteMatcher(logger=self.logger)
        self.edificio_matcher = edificio_matcher or EdificioMatcher()

    @classmethod
    def parsear_desde_texto(
        cls,
        contenido: str,
        docentes: Optional[List[str]] = None,
    ) -> ResultadoParseo:
        """Construye matcher y parser con el roster dado y parsea."""
        parser = cls(docente_matcher=DocenteMatcher.con_docentes(docentes or []))
        return parser.parsear(contenido)

    def parsear(self, contenido: str) -> ResultadoParseo:
        """
        Parsea el texto (crudo o ya sanitizado) en estructura jerárquica.

        Args:
            contenido: Texto copiado del PDF de horarios

        Returns:
            ResultadoParseo con el árbol, las líneas omitidas y métricas
        """
        lineas = [linea.strip() for linea in sanitizar_texto(contenido).split('\n')]
        lineas = [linea for linea in lineas if linea]

        estado = EstadoParseo(universidad=HorarioUniversidad())
        omitidas: List[LineaOmitida] = []

        i = 0
        while i < len(lineas):
            linea = lineas[i]
            try:
                # === CARRERA ===
                if linea.startswith(PALABRA_CARRERA):
                    self._procesar_carrera(estado, linea)

                # === ASIGNATURA ===
                elif linea.startswith(PALABRA_ASIGNATURA):
                    self._procesar_asignatura(estado, linea)

                # === GRUPO (consume también la línea de INSCRITOS) ===
                elif linea.startswith(PALABRA_GRUPO):
                    siguiente = lineas[i + 1] if i + 1 < len(lineas) else ""
                    self._procesar_grupo(estado, linea, siguiente)
                    i += 1

                # === BLOQUE HORARIO ===
                elif es_linea_horario(linea) and estado.grupo and estado.asignatura:
                    resultado = self._parsear_bloque(linea, estado.asignatura, i)
                    if isinstance(resultado, LineaOmitida):
                        omitidas.append(resultado)
                        self.logger.warning(
                            "Línea %d omitida (%s): %s", i, resultado.razon, linea
                        )
                    else:
                        estado.grupo.bloques.append(resultado)

            except Exception as e:
                omitidas.append(LineaOmitida(numero_linea=i, texto=linea, razon=f"error: {e}"))
                self.logger.warning("Error procesando línea %d: %s (%s)", i, linea, e)

            i += 1

        # Guardar últimos datos
        estado.cerrar_todo()

        resultado = ResultadoParseo(universidad=estado.universidad, omitidas=omitidas)
        resultado.calcular_metricas()
        self.logger.debug(
            "Parseo terminado: %d carreras, %d bloques, %d líneas omitidas",
            resultado.total_carreras, resultado.total_bloques, len(omitidas),
        )
        return resultado

    def _procesar_carrera(self, estado: EstadoParseo, linea: str):
        """Cierra todo lo abierto y abre una nueva carrera."""
        estado.cerrar_todo()

        match = PATRON_CARRERA.search(linea)
        nombre = match.group(1).strip() if match else linea

        estado.carrera = Carrera(nombre=nombre, codigo=extraer_codigo_carrera(nombre))
        estado.facultad = self._obtener_facultad(estado.universidad, FACULTAD_POR_DEFECTO)

    def _procesar_asignatura(self, estado: EstadoParseo, linea: str):
        estado.cerrar_asignatura()
        nombre = linea.replace(PALABRA_ASIGNATURA + " ", "", 1).strip()
        estado.asignatura = Asignatura(nombre=nombre)

    def _procesar_grupo(self, estado: EstadoParseo, linea: str, linea_inscritos: str):
        estado.cerrar_grupo()

        match_grupo = PATRON_GRUPO.search(linea)
        match_inscritos = PATRON_INSCRITOS.search(linea_inscritos)

        estado.grupo = Grupo(
            numero=match_grupo.group(1).strip() if match_grupo else "",
            inscritos=int(match_inscritos.group(1)) if match_inscritos else 0,
        )

    def _parsear_bloque(
        self,
        linea: str,
        asignatura: Asignatura,
        numero_linea: int,
    ) -> Union[BloqueHorario, LineaOmitida]:
        """
        Convierte una línea de horario en BloqueHorario.

        Completa el código de la asignatura con el código de la línea
        si aún no lo tiene.
        """
        partes = linea.split()

        if not asignatura.codigo:
            asignatura.codigo = partes[0]

        dia = parsear_dia(partes)
        if dia is None:
            return LineaOmitida(numero_linea, linea, "dia no reconocido")

        horario = parsear_horario(partes)
        if horario is None:
            return LineaOmitida(numero_linea, linea, "rango de horas no reconocido")

        if SEDE not in partes:
            return LineaOmitida(numero_linea, linea, "sede no encontrada")

        # Todo desde la sede es ubicación + docente
        ubicacion_y_docente = ' '.join(partes[partes.index(SEDE):])

        ubicacion = self.edificio_matcher.extraer_ubicacion(ubicacion_y_docente)
        docente = self.docente_matcher.buscar_docente(extraer_parte_docente(ubicacion_y_docente))

        return BloqueHorario(
            codigo_asignatura=asignatura.codigo,
            dia=dia,
            hora_inicio=horario[0],
            hora_fin=horario[1],
            sede=SEDE,
            edificio=ubicacion.edificio,
            salon=ubicacion.salon,
            docente=docente,
        )

    def _obtener_facultad(self, universidad: HorarioUniversidad, nombre: str) -> Facultad:
        """Busca la facultad por nombre o la crea."""
        for facultad in universidad.facultades:
            if facultad.nombre == nombre:
                return facultad
        facultad = Facultad(nombre=nombre)
        universidad.facultades.append(facultad)
        return facultad
