"""
Consultas sobre un horario parseado.

Funciones puras: no modifican el árbol ni hacen I/O, así que pueden
llamarse repetidamente (o desde varios hilos) sobre el mismo snapshot.
"""

from collections import OrderedDict
from datetime import datetime
from typing import Iterable, Iterator, List, Tuple

from unidecode import unidecode

from .models import (
    HorarioUniversidad,
    Asignatura,
    BloqueHorario,
    DiaSemana,
    DocenteActivo,
    BloqueDocentes,
    DocenteInfo,
    HorarioDocente,
    EstadoEncuesta,
    EstadisticasEncuesta,
)


# Índice 0 = domingo, como en el calendario del tablero
DIAS_POR_INDICE = (
    DiaSemana.DOMINGO,
    DiaSemana.LUNES,
    DiaSemana.MARTES,
    DiaSemana.MIERCOLES,
    DiaSemana.JUEVES,
    DiaSemana.VIERNES,
    DiaSemana.SABADO,
)

# Orden de la semana en el directorio: LUNES primero
ORDEN_DIAS = {dia: i for i, dia in enumerate(DiaSemana)}

# Ventana de "próximos": empiezan entre hora+1 y hora+3
HORAS_PROXIMOS = 2


def dia_semana(momento: datetime) -> DiaSemana:
    return DIAS_POR_INDICE[momento.isoweekday() % 7]


def _clave_nombre(nombre: str) -> str:
    return unidecode(nombre).casefold()


def iterar_bloques(universidad: HorarioUniversidad) -> Iterator[Tuple[Asignatura, BloqueHorario]]:
    """Recorre todos los bloques del árbol con su asignatura."""
    for facultad in universidad.facultades:
        for carrera in facultad.carreras:
            for asignatura in carrera.asignaturas:
                for grupo in asignatura.grupos:
                    for bloque in grupo.bloques:
                        yield asignatura, bloque


def _a_docente_activo(asignatura: Asignatura, bloque: BloqueHorario) -> DocenteActivo:
    return DocenteActivo(
        docente=bloque.docente,
        asignatura=asignatura.nombre,
        salon=bloque.salon,
        edificio=bloque.edificio,
        hora_inicio=bloque.hora_inicio,
        hora_fin=bloque.hora_fin,
    )


def docentes_activos(universidad: HorarioUniversidad, momento: datetime) -> List[DocenteActivo]:
    """
    Docentes que están en clase en este momento.

    Un bloque [inicio, fin) está activo si es del día actual y
    inicio <= hora < fin.
    """
    dia = dia_semana(momento)
    hora = momento.hour

    return [
        _a_docente_activo(asignatura, bloque)
        for asignatura, bloque in iterar_bloques(universidad)
        if bloque.dia == dia and bloque.hora_inicio <= hora < bloque.hora_fin
    ]


def proximos_docentes(universidad: HorarioUniversidad, momento: datetime) -> List[DocenteActivo]:
    """Docentes que empiezan clase entre la próxima hora y dos horas después."""
    dia = dia_semana(momento)
    proxima_hora = momento.hour + 1

    return [
        _a_docente_activo(asignatura, bloque)
        for asignatura, bloque in iterar_bloques(universidad)
        if bloque.dia == dia and proxima_hora <= bloque.hora_inicio <= proxima_hora + HORAS_PROXIMOS
    ]


def _hora_inicio_clave(horario: str) -> int:
    try:
        return int(horario.split('-')[0])
    except ValueError:
        return 0


def agrupar_por_bloques(docentes: List[DocenteActivo]) -> List[BloqueDocentes]:
    """
    Agrupa docentes por franja "inicio-fin".

    Dentro de cada franja se ordena por nombre del docente; las franjas
    se ordenan por hora de inicio.
    """
    bloques: "OrderedDict[str, List[DocenteActivo]]" = OrderedDict()

    for docente in docentes:
        clave = f"{docente.hora_inicio}-{docente.hora_fin}"
        bloques.setdefault(clave, []).append(docente)

    resultado = [
        BloqueDocentes(
            horario=horario,
            docentes=sorted(lista, key=lambda d: _clave_nombre(d.docente)),
        )
        for horario, lista in bloques.items()
    ]
    return sorted(resultado, key=lambda b: _hora_inicio_clave(b.horario))


def materias_de_docente(universidad: HorarioUniversidad, nombre_docente: str) -> List[str]:
    """Asignaturas (sin repetir, ordenadas) que dicta un docente."""
    nombre = nombre_docente.strip().lower() if nombre_docente else ""
    if not nombre:
        return []

    materias = {
        asignatura.nombre
        for asignatura, bloque in iterar_bloques(universidad)
        if bloque.docente.strip().lower() == nombre
    }
    return sorted(materias)


# =============================================================================
# DIRECTORIO DE DOCENTES Y ENCUESTAS
# =============================================================================

def directorio_docentes(universidad: HorarioUniversidad) -> List[DocenteInfo]:
    """
    Lista de docentes identificados, sin repetir.

    Cada docente trae sus materias ordenadas y su semana ordenada por
    día y hora de inicio. Los bloques sin docente no aparecen.
    """
    docentes: "OrderedDict[str, DocenteInfo]" = OrderedDict()

    for asignatura, bloque in iterar_bloques(universidad):
        nombre = bloque.docente.strip()
        if not nombre:
            continue

        if nombre not in docentes:
            docentes[nombre] = DocenteInfo(nombre=nombre)
        info = docentes[nombre]

        if asignatura.nombre not in info.materias:
            info.materias.append(asignatura.nombre)
        info.horarios.append(HorarioDocente(
            dia=bloque.dia,
            hora_inicio=bloque.hora_inicio,
            hora_fin=bloque.hora_fin,
            salon=bloque.salon,
            edificio=bloque.edificio,
            asignatura=asignatura.nombre,
        ))

    for info in docentes.values():
        info.materias.sort()
        info.horarios.sort(key=lambda h: (ORDEN_DIAS[h.dia], h.hora_inicio))

    return sorted(docentes.values(), key=lambda d: _clave_nombre(d.nombre))


def filtrar_docentes(
    docentes: List[DocenteInfo],
    busqueda: str = "",
    encuestados: Iterable[str] = (),
    estado: EstadoEncuesta = EstadoEncuesta.TODOS,
) -> List[DocenteInfo]:
    """
    Filtra el directorio por texto y por estado de la encuesta.

    Args:
        docentes: Directorio de directorio_docentes()
        busqueda: Texto a buscar en el nombre o en alguna materia
        encuestados: Nombres ya encuestados (los guarda quien llama)
        estado: TODOS, ENCUESTADOS o PENDIENTES
    """
    encuestados = set(encuestados)
    termino = busqueda.strip().lower() if busqueda else ""
    resultado = list(docentes)

    if termino:
        resultado = [
            d for d in resultado
            if termino in d.nombre.lower()
            or any(termino in materia.lower() for materia in d.materias)
        ]

    if estado == EstadoEncuesta.ENCUESTADOS:
        resultado = [d for d in resultado if d.nombre in encuestados]
    elif estado == EstadoEncuesta.PENDIENTES:
        resultado = [d for d in resultado if d.nombre not in encuestados]

    return resultado


def estadisticas_encuesta(docentes: List[DocenteInfo], encuestados: Iterable[str]) -> EstadisticasEncuesta:
    """Avance de la encuesta; porcentaje entero redondeado (0 sin docentes)."""
    encuestados = set(encuestados)
    total = len(docentes)
    hechos = len([d for d in docentes if d.nombre in encuestados])
    porcentaje = int(hechos / total * 100 + 0.5) if total else 0

    return EstadisticasEncuesta(
        total=total,
        encuestados=hechos,
        pendientes=total - hechos,
        porcentaje=porcentaje,
    )
