"""
Tests para el parser de horarios.

Prueba:
- Construcción del árbol Carrera > Asignatura > Grupo > Bloque
- Resolución de ubicación y docente por bloque
- Códigos de carrera y de asignatura
- Líneas omitidas con su razón
- Reutilización del parser
"""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).parent.parent))

from horarios.models import DiaSemana, LineaOmitida, Ubicacion
from horarios.parser import (
    ParserHorarios,
    es_linea_horario,
    extraer_codigo_carrera,
    extraer_parte_docente,
    parsear_dia,
    parsear_horario,
)


def _texto(*lineas):
    return "\n".join(lineas)


CABECERA = (
    "PROYECTO CURRICULAR INGENIERIA EN TELEMATICA",
    "ESPACIO ACADEMICO CALCULO",
    "GRP. 020-81",
    "INSCRITOS 20",
)


@pytest.fixture
def parser(docente_matcher):
    return ParserHorarios(docente_matcher=docente_matcher)


@pytest.fixture
def resultado(parser, texto_horario_crudo):
    return parser.parsear(texto_horario_crudo)


# =============================================================================
# TESTS DE FUNCIONES AUXILIARES
# =============================================================================

class TestAuxiliares:
    """Tests para las funciones auxiliares del parser."""

    def test_es_linea_horario(self):
        assert es_linea_horario("1001 CALCULO LUNES 6-8 TECNOLOGICA BLOQUE 9")
        assert not es_linea_horario("CALCULO LUNES 6-8 TECNOLOGICA")
        assert not es_linea_horario("1001 CALCULO LUNES 6-8 MACARENA")
        assert not es_linea_horario("1001 CALCULO 6-8 TECNOLOGICA")

    @pytest.mark.parametrize("nombre,codigo", [
        ("INGENIERIA EN TELEMATICA", "678"),
        ("TECNOLOGIA EN SISTEMATIZACION DE DATOS", "578"),
        ("INGENIERIA ELECTRICA", "000"),
    ])
    def test_codigo_carrera(self, nombre, codigo):
        assert extraer_codigo_carrera(nombre) == codigo

    def test_parsear_dia(self):
        assert parsear_dia(["1001", "MIERCOLES", "8-10"]) == DiaSemana.MIERCOLES
        assert parsear_dia(["1001", "LUNESS"]) is None

    def test_parsear_horario(self):
        assert parsear_horario(["LUNES", "18-20", "6-8"]) == (18, 20)
        assert parsear_horario(["LUNES", "6-8X"]) is None

    def test_extraer_parte_docente(self):
        texto = "TECNOLOGICA TECHNE LABORATORIO DE INTELIGENCIA ARTIFICIAL RODRIGUEZ CARLOS"
        assert extraer_parte_docente(texto) == "RODRIGUEZ CARLOS"

    def test_extraer_parte_docente_salta_numeros(self):
        texto = "TECNOLOGICA BLOQUE 9 AULA 101 GARCIA MARIA"
        assert extraer_parte_docente(texto) == "GARCIA MARIA"

    def test_extraer_parte_docente_sin_nombre(self):
        """Sin dos palabras con forma de nombre se toman las últimas 4."""
        texto = "TECNOLOGICA BLOQUE 9 AULA 101 X"
        assert extraer_parte_docente(texto) == "9 AULA 101 X"

    def test_extraer_parte_docente_exclusiones_propias(self):
        texto = "TECNOLOGICA PISO ALTO GARCIA MARIA"
        assert extraer_parte_docente(texto, frozenset(["TECNOLOGICA", "PISO", "ALTO"])) == "GARCIA MARIA"


# =============================================================================
# TESTS DE ESTRUCTURA
# =============================================================================

class TestEstructura:
    """Tests para la construcción del árbol."""

    def test_una_sola_facultad(self, resultado):
        facultades = resultado.universidad.facultades
        assert len(facultades) == 1
        assert facultades[0].nombre == "FACULTAD TECNOLÓGICA"

    def test_carreras_en_orden(self, resultado):
        carreras = resultado.universidad.facultades[0].carreras
        assert [(c.nombre, c.codigo) for c in carreras] == [
            ("INGENIERIA EN TELEMATICA", "678"),
            ("TECNOLOGIA EN SISTEMATIZACION DE DATOS", "578"),
        ]

    def test_asignaturas_en_orden(self, resultado):
        telematica, sistematizacion = resultado.universidad.facultades[0].carreras
        assert [a.nombre for a in telematica.asignaturas] == ["CALCULO DIFERENCIAL", "PROGRAMACION BASICA"]
        assert [a.nombre for a in sistematizacion.asignaturas] == ["BASES DE DATOS"]

    def test_codigo_asignatura_desde_bloque(self, resultado):
        telematica, sistematizacion = resultado.universidad.facultades[0].carreras
        assert [a.codigo for a in telematica.asignaturas] == ["1001", "2002"]
        assert sistematizacion.asignaturas[0].codigo == "3003"

    def test_grupos_e_inscritos(self, resultado):
        calculo = resultado.universidad.facultades[0].carreras[0].asignaturas[0]
        assert [(g.numero, g.inscritos, len(g.bloques)) for g in calculo.grupos] == [
            ("020-81", 32, 2),
            ("020-82", 28, 1),
        ]

    def test_bloque_completo(self, resultado):
        grupo = resultado.universidad.facultades[0].carreras[0].asignaturas[0].grupos[0]
        bloque = grupo.bloques[0]

        assert bloque.codigo_asignatura == "1001"
        assert bloque.dia == DiaSemana.LUNES
        assert (bloque.hora_inicio, bloque.hora_fin) == (6, 8)
        assert bloque.sede == "TECNOLOGICA"
        assert bloque.edificio == "BLOQUE 9"
        assert bloque.salon == "AULA 101"
        assert bloque.docente == "GARCIA MARIA"

    def test_docente_con_enie_partido(self, resultado):
        """PE?A partido en dos líneas se resuelve al nombre del roster."""
        grupo = resultado.universidad.facultades[0].carreras[0].asignaturas[0].grupos[1]
        bloque = grupo.bloques[0]

        assert bloque.edificio == "BLOQUE 11-12"
        assert bloque.salon == "AULA MULTIPLE 1"
        assert bloque.docente == "PEÑA LOPEZ ANDRES"

    def test_docente_no_encontrado(self, resultado):
        bases = resultado.universidad.facultades[0].carreras[1].asignaturas[0]
        bloque = bases.grupos[0].bloques[0]

        assert bloque.docente == ""
        assert bloque.edificio == "BLOQUE 5"
        assert bloque.salon == "LABORATORIO DE FISICA"

    def test_metricas(self, resultado):
        assert resultado.total_carreras == 2
        assert resultado.total_asignaturas == 3
        assert resultado.total_grupos == 4
        assert resultado.total_bloques == 5
        assert resultado.bloques_con_docente == 4
        assert resultado.porcentaje_docentes == pytest.approx(80.0)
        assert resultado.omitidas == []

    def test_n_carreras_por_m_asignaturas(self, parser):
        lineas = []
        for c in range(3):
            lineas.append(f"PROYECTO CURRICULAR CARRERA {c}")
            for a in range(2):
                lineas += [
                    f"ESPACIO ACADEMICO MATERIA {c}{a}",
                    "GRP. 1",
                    "INSCRITOS 10",
                    f"{c}{a}00 MATERIA LUNES 6-8 TECNOLOGICA BLOQUE 9 AULA 101 GARCIA MARIA",
                ]

        carreras = parser.parsear(_texto(*lineas)).universidad.facultades[0].carreras

        assert [c.nombre for c in carreras] == ["CARRERA 0", "CARRERA 1", "CARRERA 2"]
        assert [[a.nombre for a in c.asignaturas] for c in carreras] == [
            ["MATERIA 00", "MATERIA 01"],
            ["MATERIA 10", "MATERIA 11"],
            ["MATERIA 20", "MATERIA 21"],
        ]
        assert all(c.codigo == "000" for c in carreras)

    def test_texto_vacio(self, parser):
        resultado = parser.parsear("")
        assert resultado.universidad.facultades == []
        assert resultado.total_bloques == 0
        assert resultado.porcentaje_docentes == 0.0


# =============================================================================
# TESTS DE CASOS BORDE
# =============================================================================

class TestCasosBorde:
    """Tests para grupos, asignaturas y líneas fuera de lugar."""

    def test_asignatura_sin_grupos_queda_sin_codigo(self, parser):
        texto = _texto(
            "PROYECTO CURRICULAR INGENIERIA EN TELEMATICA",
            "ESPACIO ACADEMICO ETICA",
            "ESPACIO ACADEMICO CALCULO",
        )
        asignaturas = parser.parsear(texto).universidad.facultades[0].carreras[0].asignaturas

        assert [(a.nombre, a.codigo) for a in asignaturas] == [("ETICA", ""), ("CALCULO", "")]

    def test_grupo_sin_bloques_sintetiza_codigo(self, parser):
        """Código = código de carrera + 3 primeras letras."""
        asignatura = parser.parsear(_texto(*CABECERA)).universidad.facultades[0].carreras[0].asignaturas[0]

        assert asignatura.codigo == "678-CAL"
        assert asignatura.grupos[0].bloques == []

    def test_inscritos_ilegible(self, parser):
        texto = _texto(*CABECERA[:3], "INSCRITOS XX")
        grupo = parser.parsear(texto).universidad.facultades[0].carreras[0].asignaturas[0].grupos[0]

        assert grupo.numero == "020-81"
        assert grupo.inscritos == 0

    def test_grupo_al_final_del_texto(self, parser):
        texto = _texto(*CABECERA[:3])
        grupo = parser.parsear(texto).universidad.facultades[0].carreras[0].asignaturas[0].grupos[0]
        assert grupo.inscritos == 0

    def test_linea_de_grupo_consume_la_siguiente(self, parser):
        """La línea después de GRP. se toma como INSCRITOS aunque no lo sea."""
        texto = _texto(
            *CABECERA[:3],
            "1001 CALCULO LUNES 6-8 TECNOLOGICA BLOQUE 9 AULA 101 GARCIA MARIA",
        )
        grupo = parser.parsear(texto).universidad.facultades[0].carreras[0].asignaturas[0].grupos[0]

        assert grupo.inscritos == 0
        assert grupo.bloques == []

    def test_horario_sin_grupo_se_ignora(self, parser):
        texto = _texto(
            *CABECERA[:2],
            "1001 CALCULO LUNES 6-8 TECNOLOGICA BLOQUE 9 AULA 101 GARCIA MARIA",
        )
        resultado = parser.parsear(texto)

        assert resultado.total_bloques == 0
        assert resultado.omitidas == []

    def test_horario_invertido_se_conserva(self, parser):
        texto = _texto(*CABECERA, "1001 CALCULO LUNES 10-8 TECNOLOGICA BLOQUE 9 AULA 101 GARCIA MARIA")
        bloque = parser.parsear(texto).universidad.facultades[0].carreras[0].asignaturas[0].grupos[0].bloques[0]
        assert (bloque.hora_inicio, bloque.hora_fin) == (10, 8)

    def test_ubicacion_desconocida(self, parser):
        texto = _texto(*CABECERA, "1001 CALCULO LUNES 6-8 TECNOLOGICA EDIFICIO NUEVO GARCIA MARIA")
        bloque = parser.parsear(texto).universidad.facultades[0].carreras[0].asignaturas[0].grupos[0].bloques[0]

        assert (bloque.edificio, bloque.salon) == ("UNKNOWN", "UNKNOWN")
        assert bloque.docente == "GARCIA MARIA"


# =============================================================================
# TESTS DE LÍNEAS OMITIDAS
# =============================================================================

class TestLineasOmitidas:
    """Tests para líneas de horario que no se convierten en bloque."""

    @pytest.mark.parametrize("linea,razon", [
        ("1001 CALCULO LUNESS 6-8 TECNOLOGICA BLOQUE 9 AULA 101 GARCIA MARIA", "dia no reconocido"),
        ("1001 CALCULO LUNES 6-8X TECNOLOGICA BLOQUE 9 AULA 101 GARCIA MARIA", "rango de horas no reconocido"),
        ("1001 CALCULO LUNES 6-8 TECNOLOGICAS BLOQUE 9 AULA 101 GARCIA MARIA", "sede no encontrada"),
    ])
    def test_razon_de_omision(self, parser, linea, razon):
        resultado = parser.parsear(_texto(*CABECERA, linea))

        assert resultado.omitidas == [LineaOmitida(numero_linea=4, texto=linea, razon=razon)]
        assert resultado.total_bloques == 0

    def test_omision_no_detiene_el_parseo(self, parser):
        texto = _texto(
            *CABECERA,
            "1001 CALCULO LUNES 6-8X TECNOLOGICA BLOQUE 9 AULA 101 GARCIA MARIA",
            "1001 CALCULO MARTES 6-8 TECNOLOGICA BLOQUE 9 AULA 101 GARCIA MARIA",
        )
        resultado = parser.parsear(texto)

        assert len(resultado.omitidas) == 1
        assert resultado.total_bloques == 1

    def test_error_inesperado_se_registra(self, docente_matcher):
        class EdificioMatcherRoto:
            def extraer_ubicacion(self, fragmento):
                raise RuntimeError("diccionario corrupto")

        parser = ParserHorarios(docente_matcher=docente_matcher, edificio_matcher=EdificioMatcherRoto())
        texto = _texto(*CABECERA, "1001 CALCULO LUNES 6-8 TECNOLOGICA BLOQUE 9 AULA 101 GARCIA MARIA")

        resultado = parser.parsear(texto)

        assert len(resultado.omitidas) == 1
        assert resultado.omitidas[0].razon == "error: diccionario corrupto"
        assert resultado.total_carreras == 1


# =============================================================================
# TESTS DE REUTILIZACIÓN E INYECCIÓN
# =============================================================================

class TestReutilizacion:
    """Tests para estado por llamada y dependencias inyectadas."""

    def test_parsear_dos_veces(self, parser, texto_horario_crudo):
        primero = parser.parsear(texto_horario_crudo)
        segundo = parser.parsear(texto_horario_crudo)

        assert primero.universidad is not segundo.universidad
        assert segundo.total_carreras == primero.total_carreras == 2
        assert segundo.total_bloques == primero.total_bloques == 5

    def test_parsear_desde_texto(self, texto_horario_crudo, roster):
        resultado = ParserHorarios.parsear_desde_texto(texto_horario_crudo, roster)
        assert resultado.bloques_con_docente == 4

    def test_sin_roster_nadie_es_identificado(self, texto_horario_crudo):
        resultado = ParserHorarios.parsear_desde_texto(texto_horario_crudo)

        assert resultado.total_bloques == 5
        assert resultado.bloques_con_docente == 0

    def test_edificio_matcher_inyectado(self, docente_matcher):
        class EdificioFijo:
            def extraer_ubicacion(self, fragmento):
                return Ubicacion(edificio="TORRE A", salon="SALON 1")

        parser = ParserHorarios(docente_matcher=docente_matcher, edificio_matcher=EdificioFijo())
        texto = _texto(*CABECERA, "1001 CALCULO LUNES 6-8 TECNOLOGICA BLOQUE 9 AULA 101 GARCIA MARIA")

        bloque = parser.parsear(texto).universidad.facultades[0].carreras[0].asignaturas[0].grupos[0].bloques[0]
        assert (bloque.edificio, bloque.salon) == ("TORRE A", "SALON 1")
