"""
Módulo de parseo de horarios académicos.

Arquitectura en 4 fases:
1. Sanitización: Reparar la Ñ corrupta y unir líneas partidas por el PDF
2. Parsing: Máquina de estados Carrera > Asignatura > Grupo > Bloque
3. Resolución: Edificio/salón por aliases y docente contra el roster
4. Consultas: Docentes en clase ahora, próximos, agrupados por franja
   y directorio con avance de la encuesta
"""

from .models import (
    DiaSemana,
    BloqueHorario,
    Grupo,
    Asignatura,
    Carrera,
    Facultad,
    HorarioUniversidad,
    EdificioInfo,
    SalonInfo,
    Ubicacion,
    DocenteActivo,
    BloqueDocentes,
    LineaOmitida,
    Problema,
    TipoProblema,
    ResultadoParseo,
    DocenteInfo,
    HorarioDocente,
    EstadoEncuesta,
    EstadisticasEncuesta,
)
from .sanitizer import sanitizar_texto
from .edificios import EdificioMatcher
from .docentes import DocenteMatcher, cargar_docentes
from .parser import ParserHorarios
from .consultas import (
    docentes_activos,
    proximos_docentes,
    agrupar_por_bloques,
    materias_de_docente,
    directorio_docentes,
    filtrar_docentes,
    estadisticas_encuesta,
)
from .validador import ValidadorHorarios
from .geolocalizacion import (
    ubicacion_edificio,
    calcular_distancia,
    formatear_distancia,
    nivel_proximidad,
)

__all__ = [
    # Models
    'DiaSemana',
    'BloqueHorario',
    'Grupo',
    'Asignatura',
    'Carrera',
    'Facultad',
    'HorarioUniversidad',
    'EdificioInfo',
    'SalonInfo',
    'Ubicacion',
    'DocenteActivo',
    'BloqueDocentes',
    'LineaOmitida',
    'Problema',
    'TipoProblema',
    'ResultadoParseo',
    'DocenteInfo',
    'HorarioDocente',
    'EstadoEncuesta',
    'EstadisticasEncuesta',
    # Sanitizer
    'sanitizar_texto',
    # Matchers
    'EdificioMatcher',
    'DocenteMatcher',
    'cargar_docentes',
    # Parser
    'ParserHorarios',
    # Consultas
    'docentes_activos',
    'proximos_docentes',
    'agrupar_por_bloques',
    'materias_de_docente',
    'directorio_docentes',
    'filtrar_docentes',
    'estadisticas_encuesta',
    # Validador
    'ValidadorHorarios',
    # Geolocalizacion
    'ubicacion_edificio',
    'calcular_distancia',
    'formatear_distancia',
    'nivel_proximidad',
]
