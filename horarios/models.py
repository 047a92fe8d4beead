"""
Modelos de datos para el parser de horarios.

Dataclasses que representan la estructura del horario:
- Universidad > Facultad > Carrera > Asignatura > Grupo > Bloque horario
- Diccionario de edificios y salones
- Registros derivados para consultas (docentes activos, bloques)
- Líneas omitidas y problemas detectados
- Resultado final del parseo
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, List
from enum import Enum


class DiaSemana(Enum):
    """Días de la semana tal como aparecen en el PDF."""
    LUNES = "LUNES"
    MARTES = "MARTES"
    MIERCOLES = "MIERCOLES"
    JUEVES = "JUEVES"
    VIERNES = "VIERNES"
    SABADO = "SABADO"
    DOMINGO = "DOMINGO"


class TipoProblema(Enum):
    """Tipos de problemas detectados al validar un horario parseado."""
    HORARIO_INVERTIDO = "horario_invertido"
    EDIFICIO_DESCONOCIDO = "edificio_desconocido"
    SALON_DESCONOCIDO = "salon_desconocido"
    DOCENTE_NO_RESUELTO = "docente_no_resuelto"
    GRUPO_SIN_BLOQUES = "grupo_sin_bloques"
    ASIGNATURA_SIN_CODIGO = "asignatura_sin_codigo"


# =============================================================================
# JERARQUÍA DEL HORARIO
# =============================================================================

@dataclass
class BloqueHorario:
    """
    Franja de clase de un grupo.

    Attributes:
        codigo_asignatura: Código numérico de la asignatura
        dia: Día de la semana
        hora_inicio: Hora de inicio (24h, incluida)
        hora_fin: Hora de fin (24h, excluida)
        sede: Sede (siempre TECNOLOGICA)
        edificio: Edificio canónico o centinela
        salon: Salón canónico o centinela
        docente: Nombre del roster o "" si no se identificó
    """
    codigo_asignatura: str
    dia: DiaSemana
    hora_inicio: int
    hora_fin: int
    sede: str
    edificio: str
    salon: str
    docente: str = ""


@dataclass
class Grupo:
    """Grupo de una asignatura. Formato: GRP. 020-81 / INSCRITOS 32"""
    numero: str
    inscritos: int = 0
    bloques: List[BloqueHorario] = field(default_factory=list)


@dataclass
class Asignatura:
    """Espacio académico. El código se completa con el primer bloque."""
    nombre: str
    codigo: str = ""
    grupos: List[Grupo] = field(default_factory=list)


@dataclass
class Carrera:
    """Proyecto curricular."""
    nombre: str
    codigo: str
    asignaturas: List[Asignatura] = field(default_factory=list)


@dataclass
class Facultad:
    nombre: str
    carreras: List[Carrera] = field(default_factory=list)


@dataclass
class HorarioUniversidad:
    """
    Raíz del horario parseado.

    Se construye una vez por parseo y después se trata como solo lectura.
    """
    facultades: List[Facultad] = field(default_factory=list)
    fecha_actualizacion: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """Convierte a diccionario serializable a JSON."""
        datos = asdict(self)
        datos["fecha_actualizacion"] = self.fecha_actualizacion.isoformat()
        for facultad in datos["facultades"]:
            for carrera in facultad["carreras"]:
                for asignatura in carrera["asignaturas"]:
                    for grupo in asignatura["grupos"]:
                        for bloque in grupo["bloques"]:
                            bloque["dia"] = bloque["dia"].value
        return datos

    @classmethod
    def from_dict(cls, datos: dict) -> "HorarioUniversidad":
        """Reconstruye el horario desde un diccionario generado por to_dict()."""
        facultades = [
            Facultad(
                nombre=f["nombre"],
                carreras=[
                    Carrera(
                        nombre=c["nombre"],
                        codigo=c["codigo"],
                        asignaturas=[
                            Asignatura(
                                nombre=a["nombre"],
                                codigo=a.get("codigo", ""),
                                grupos=[
                                    Grupo(
                                        numero=g["numero"],
                                        inscritos=g.get("inscritos", 0),
                                        bloques=[
                                            BloqueHorario(**{**b, "dia": DiaSemana(b["dia"])})
                                            for b in g.get("bloques", [])
                                        ],
                                    )
                                    for g in a.get("grupos", [])
                                ],
                            )
                            for a in c.get("asignaturas", [])
                        ],
                    )
                    for c in f.get("carreras", [])
                ],
            )
            for f in datos.get("facultades", [])
        ]
        fecha = datos.get("fecha_actualizacion")
        return cls(
            facultades=facultades,
            fecha_actualizacion=datetime.fromisoformat(fecha) if fecha else datetime.now(),
        )


# =============================================================================
# EDIFICIOS Y SALONES
# =============================================================================

@dataclass
class SalonInfo:
    nombre: str
    aliases: List[str] = field(default_factory=list)
    capacidad: Optional[int] = None


@dataclass
class EdificioInfo:
    """Edificio con sus aliases y salones, en orden de declaración."""
    nombre: str
    aliases: List[str] = field(default_factory=list)
    salones: List[SalonInfo] = field(default_factory=list)


@dataclass
class Ubicacion:
    """Resultado de resolver un fragmento de ubicación."""
    edificio: str
    salon: str


# =============================================================================
# REGISTROS DERIVADOS (CONSULTAS)
# =============================================================================

@dataclass
class DocenteActivo:
    """Copia plana de un bloque para mostrar en el tablero."""
    docente: str
    asignatura: str
    salon: str
    edificio: str
    hora_inicio: int
    hora_fin: int


@dataclass
class BloqueDocentes:
    horario: str  # "6-8", "8-10", etc.
    docentes: List[DocenteActivo] = field(default_factory=list)


# =============================================================================
# DIRECTORIO DE DOCENTES Y ENCUESTAS
# =============================================================================

class EstadoEncuesta(Enum):
    """Filtro del directorio por estado de la encuesta."""
    TODOS = "todos"
    ENCUESTADOS = "encuestados"
    PENDIENTES = "pendientes"


@dataclass
class HorarioDocente:
    dia: DiaSemana
    hora_inicio: int
    hora_fin: int
    salon: str
    edificio: str
    asignatura: str


@dataclass
class DocenteInfo:
    """
    Ficha de un docente en el directorio.

    Attributes:
        nombre: Nombre tal como aparece en los bloques
        materias: Asignaturas que dicta, ordenadas y sin repetir
        horarios: Semana del docente, por día (LUNES primero) y hora de inicio
    """
    nombre: str
    materias: List[str] = field(default_factory=list)
    horarios: List[HorarioDocente] = field(default_factory=list)


@dataclass
class EstadisticasEncuesta:
    """Avance de la encuesta sobre el directorio completo."""
    total: int
    encuestados: int
    pendientes: int
    porcentaje: int


# =============================================================================
# DIAGNÓSTICOS
# =============================================================================

@dataclass
class LineaOmitida:
    """
    Línea de horario que no se pudo convertir en bloque.

    Attributes:
        numero_linea: Índice de la línea en el texto sanitizado
        texto: Contenido de la línea
        razon: Motivo por el que se omitió
    """
    numero_linea: int
    texto: str
    razon: str


@dataclass
class Problema:
    """
    Problema detectado al validar el horario.

    Attributes:
        tipo: Categoría del problema
        descripcion: Descripción legible del problema
        ubicacion: Dónde se detectó (carrera > asignatura > grupo)
        severidad: 'error' o 'warning'
    """
    tipo: TipoProblema
    descripcion: str
    ubicacion: Optional[str] = None
    severidad: str = "warning"


@dataclass
class ResultadoParseo:
    """
    Resultado final del parseo de horarios.

    Incluye:
    - Árbol del horario
    - Líneas omitidas con su razón
    - Métricas de calidad
    """
    universidad: HorarioUniversidad
    omitidas: List[LineaOmitida] = field(default_factory=list)

    # Métricas
    total_carreras: int = 0
    total_asignaturas: int = 0
    total_grupos: int = 0
    total_bloques: int = 0
    bloques_con_docente: int = 0

    def calcular_metricas(self):
        """Calcula métricas recorriendo el árbol."""
        carreras = [c for f in self.universidad.facultades for c in f.carreras]
        asignaturas = [a for c in carreras for a in c.asignaturas]
        grupos = [g for a in asignaturas for g in a.grupos]
        bloques = [b for g in grupos for b in g.bloques]

        self.total_carreras = len(carreras)
        self.total_asignaturas = len(asignaturas)
        self.total_grupos = len(grupos)
        self.total_bloques = len(bloques)
        self.bloques_con_docente = len([b for b in bloques if b.docente])

    @property
    def porcentaje_docentes(self) -> float:
        """Porcentaje de bloques con docente identificado."""
        if self.total_bloques == 0:
            return 0.0
        return self.bloques_con_docente / self.total_bloques * 100

    def to_dict(self) -> dict:
        return {
            "universidad": self.universidad.to_dict(),
            "omitidas": [asdict(o) for o in self.omitidas],
            "stats": {
                "total_carreras": self.total_carreras,
                "total_asignaturas": self.total_asignaturas,
                "total_grupos": self.total_grupos,
                "total_bloques": self.total_bloques,
                "bloques_con_docente": self.bloques_con_docente,
                "lineas_omitidas": len(self.omitidas),
            },
        }
