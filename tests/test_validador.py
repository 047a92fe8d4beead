"""
Tests para el validador de horarios.
"""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from horarios.models import Asignatura, Grupo, TipoProblema
from horarios.parser import ParserHorarios
from horarios.validador import ValidadorHorarios


@pytest.fixture
def validador():
    return ValidadorHorarios()


def _tipos(problemas):
    return [p.tipo for p in problemas]


class TestValidador:
    """Tests para ValidadorHorarios."""

    def test_horario_limpio(self, validador, universidad_simple):
        assert validador.validar(universidad_simple) == []
        assert not validador.tiene_errores

    def test_horario_invertido_es_error(self, validador, crear_universidad, crear_bloque):
        universidad = crear_universidad(("CALCULO", [crear_bloque(hora_inicio=10, hora_fin=10)]))

        problemas = validador.validar(universidad)

        assert _tipos(problemas) == [TipoProblema.HORARIO_INVERTIDO]
        assert problemas[0].severidad == "error"
        assert problemas[0].ubicacion == "INGENIERIA EN TELEMATICA > CALCULO > GRP. 020-81 > LUNES 10-10"
        assert validador.tiene_errores

    def test_edificio_desconocido_no_reporta_salon(self, validador, crear_universidad, crear_bloque):
        bloque = crear_bloque(edificio="UNKNOWN", salon="UNKNOWN")
        problemas = validador.validar(crear_universidad(("CALCULO", [bloque])))
        assert _tipos(problemas) == [TipoProblema.EDIFICIO_DESCONOCIDO]

    def test_salon_desconocido(self, validador, crear_universidad, crear_bloque):
        bloque = crear_bloque(edificio="TECHNE", salon="SALON DESCONOCIDO")
        problemas = validador.validar(crear_universidad(("CALCULO", [bloque])))

        assert _tipos(problemas) == [TipoProblema.SALON_DESCONOCIDO]
        assert problemas[0].severidad == "warning"

    def test_docente_no_resuelto(self, validador, crear_universidad, crear_bloque):
        problemas = validador.validar(crear_universidad(("CALCULO", [crear_bloque(docente="")])))
        assert _tipos(problemas) == [TipoProblema.DOCENTE_NO_RESUELTO]

    def test_grupo_sin_bloques_y_asignatura_sin_codigo(self, validador, crear_universidad):
        universidad = crear_universidad(("CALCULO", []))
        carrera = universidad.facultades[0].carreras[0]
        carrera.asignaturas.append(Asignatura(nombre="ETICA"))

        problemas = validador.validar(universidad)

        assert _tipos(problemas) == [
            TipoProblema.GRUPO_SIN_BLOQUES,
            TipoProblema.ASIGNATURA_SIN_CODIGO,
        ]

    def test_resumen(self, validador, texto_horario_crudo, roster):
        universidad = ParserHorarios.parsear_desde_texto(texto_horario_crudo, roster).universidad

        validador.validar(universidad)

        assert validador.resumen() == {"docente_no_resuelto": 1}

    def test_validar_reinicia_problemas(self, validador, crear_universidad, crear_bloque):
        validador.validar(crear_universidad(("CALCULO", [crear_bloque(docente="")])))
        validador.validar(crear_universidad(("CALCULO", [crear_bloque()])))
        assert validador.problemas == []

    def test_grupo_vacio_en_arbol(self, validador, crear_universidad, crear_bloque):
        universidad = crear_universidad(("CALCULO", [crear_bloque()]))
        universidad.facultades[0].carreras[0].asignaturas[0].grupos.append(Grupo(numero="020-82"))

        assert validador.resumen() == {}
        validador.validar(universidad)
        assert validador.resumen() == {"grupo_sin_bloques": 1}
