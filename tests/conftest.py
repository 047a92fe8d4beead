"""
Fixtures para tests del parser de horarios.

Proporciona datos de prueba para:
- Texto crudo del PDF con líneas partidas y Ñ corrupta
- Roster de docentes
- Árboles de horario construidos a mano
"""

import pytest
from pathlib import Path
import sys

# Agregar raíz del proyecto al path para imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from horarios.models import (
    HorarioUniversidad,
    Facultad,
    Carrera,
    Asignatura,
    Grupo,
    BloqueHorario,
    DiaSemana,
)
from horarios.docentes import DocenteMatcher


# =============================================================================
# TEXTO CRUDO
# =============================================================================

@pytest.fixture
def texto_horario_crudo():
    """
    Texto típico copiado del PDF.

    - El nombre de GARCIA MARIA quedó partido en dos líneas
    - PEÑA viene corrupta como PE?A y partida
    - TORRES JUAN no está en el roster
    """
    return "\n".join([
        "PROYECTO CURRICULAR INGENIERIA EN TELEMATICA",
        "ESPACIO ACADEMICO CALCULO DIFERENCIAL",
        "Cod. Espacio Academico Grupo Dia Hora Sede Edificio Salon Docente",
        "GRP. 020-81",
        "INSCRITOS 32",
        "1001 CALCULO DIFERENCIAL LUNES 6-8 TECNOLOGICA BLOQUE 9 AULA 101 GARCIA",
        "MARIA",
        "1001 CALCULO DIFERENCIAL MIERCOLES 8-10 TECNOLOGICA TECHNE LABORATORIO DE "
        "INTELIGENCIA ARTIFICIAL RODRIGUEZ CARLOS",
        "GRP. 020-82",
        "INSCRITOS 28",
        "1001 CALCULO DIFERENCIAL MARTES 14-16 TECNOLOGICA BLOQUE 11-12 AULA MULTIPLE 1 PE?A",
        "LOPEZ ANDRES",
        "ESPACIO ACADEMICO PROGRAMACION BASICA",
        "GRP. 030-81",
        "INSCRITOS 25",
        "2002 PROGRAMACION BASICA JUEVES 10-12 TECNOLOGICA TECHNE SALA DE INFORMATICA 2 GARCIA MARIA",
        "PROYECTO CURRICULAR TECNOLOGIA EN SISTEMATIZACION DE DATOS",
        "ESPACIO ACADEMICO BASES DE DATOS",
        "GRP. 040-81",
        "INSCRITOS 30",
        "3003 BASES DE DATOS VIERNES 18-20 TECNOLOGICA BLOQUE 5 LABORATORIO DE FISICA TORRES JUAN",
    ])


@pytest.fixture
def roster():
    """Roster de docentes en el orden del archivo."""
    return ["GARCIA MARIA", "RODRIGUEZ CARLOS", "PEÑA LOPEZ ANDRES"]


@pytest.fixture
def docente_matcher(roster):
    return DocenteMatcher.con_docentes(roster)


# =============================================================================
# ÁRBOLES DE HORARIO
# =============================================================================

@pytest.fixture
def crear_bloque():
    """Factory para crear bloques de prueba."""
    def _crear(
        dia: DiaSemana = DiaSemana.LUNES,
        hora_inicio: int = 8,
        hora_fin: int = 10,
        docente: str = "GARCIA MARIA",
        **kwargs
    ) -> BloqueHorario:
        datos = {
            "codigo_asignatura": "1001",
            "sede": "TECNOLOGICA",
            "edificio": "BLOQUE 9",
            "salon": "AULA 101",
        }
        datos.update(kwargs)
        return BloqueHorario(
            dia=dia,
            hora_inicio=hora_inicio,
            hora_fin=hora_fin,
            docente=docente,
            **datos
        )
    return _crear


@pytest.fixture
def crear_universidad():
    """Factory: una asignatura por cada (nombre, bloques) recibido."""
    def _crear(*asignaturas) -> HorarioUniversidad:
        carrera = Carrera(nombre="INGENIERIA EN TELEMATICA", codigo="678")
        for nombre, bloques in asignaturas:
            carrera.asignaturas.append(Asignatura(
                nombre=nombre,
                codigo="1001",
                grupos=[Grupo(numero="020-81", inscritos=20, bloques=list(bloques))],
            ))
        return HorarioUniversidad(facultades=[
            Facultad(nombre="FACULTAD TECNOLÓGICA", carreras=[carrera]),
        ])
    return _crear


@pytest.fixture
def universidad_simple(crear_universidad, crear_bloque):
    """Calculo los lunes 8-10 con GARCIA MARIA."""
    return crear_universidad(("CALCULO DIFERENCIAL", [crear_bloque()]))
