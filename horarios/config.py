"""
Configuración y datos de referencia del parser de horarios.

Contiene los diccionarios estáticos que usan los matchers y el parser:
- Palabras clave de estructura del PDF de horarios
- Días de la semana y palabra de sede
- Edificios con sus salones y aliases
- Palabras que NO forman parte del nombre de un docente
- Coordenadas de los edificios
- Configuración de entorno (roster, timeouts, logs)

Los matchers reciben estos datos por constructor, así que pueden
sustituirse por otro diccionario (otra sede) sin tocar el código.
"""

import os
from pathlib import Path
from typing import List

from .models import EdificioInfo, SalonInfo


# Directorio raíz del proyecto
BASE_DIR = Path(__file__).parent.parent

# Cargar .env si existe
env_path = BASE_DIR / ".env"
if env_path.exists():
    with open(env_path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith('#') and '=' in line:
                key, value = line.split('=', 1)
                os.environ.setdefault(key.strip(), value.strip())


# =============================================================================
# ESTRUCTURA DEL DOCUMENTO
# =============================================================================

PALABRA_CARRERA = "PROYECTO CURRICULAR"
PALABRA_ASIGNATURA = "ESPACIO ACADEMICO"
PALABRA_GRUPO = "GRP."
PALABRA_INSCRITOS = "INSCRITOS"
ENCABEZADO_TABLA = "Cod. Espacio Academico"

PALABRAS_ESTRUCTURA = (
    PALABRA_CARRERA,
    PALABRA_ASIGNATURA,
    PALABRA_GRUPO,
    PALABRA_INSCRITOS,
    ENCABEZADO_TABLA,
)

# Todas las carreras del PDF pertenecen a la misma facultad
FACULTAD_POR_DEFECTO = "FACULTAD TECNOLÓGICA"

SEDE = "TECNOLOGICA"

DIAS = ("LUNES", "MARTES", "MIERCOLES", "JUEVES", "VIERNES", "SABADO", "DOMINGO")

PALABRAS_UBICACION = ("TECNOLOGICA", "BLOQUE", "TECHNE", "AULA", "LABORATORIO")

# Subcadena del nombre de la carrera -> código
CODIGOS_CARRERA = {
    "TELEMATICA": "678",
    "SISTEMATIZACION": "578",
}
CODIGO_CARRERA_DESCONOCIDO = "000"

# Valores centinela
EDIFICIO_DESCONOCIDO = "UNKNOWN"
SALON_SIN_EDIFICIO = "UNKNOWN"
SALON_DESCONOCIDO = "SALON DESCONOCIDO"


# =============================================================================
# EDIFICIOS Y SALONES
# =============================================================================

def _aulas_bloque(prefijo: str, pisos: int) -> list:
    """Genera las aulas X01-X04 de cada piso de un bloque (ej: B-1 AULA 203)."""
    salones = []
    for piso in range(1, pisos + 1):
        for aula in range(1, 5):
            numero = f"{piso}0{aula}"
            salones.append({
                "nombre": f"{prefijo} AULA {numero}",
                "aliases": [f"{prefijo} AULA {numero}", f"AULA {numero} {prefijo}"],
            })
    return salones


# El orden importa: gana el primer edificio (y salón) cuyo nombre o alias
# aparezca en el texto.
EDIFICIOS = [
    {
        "nombre": "TECHNE",
        "aliases": ["TECHNE", "TECNE", "TECHNE BUILDING"],
        "salones": [
            {"nombre": "LABORATORIO OPTICA Y MODERNA",
             "aliases": ["LAB OPTICA", "LABORATORIO OPTICA", "LABORATORIO OPTICA Y MODERNA"]},
            {"nombre": "LABORATORIO DE BASES DE DATOS AVANZADAS",
             "aliases": ["LAB BASES DATOS", "LABORATORIO BASES",
                         "LABORATORIO DE BASES DE DATOS AVANZADAS"]},
            {"nombre": "LABORATORIO DE SISTEMAS DISTRIBUIDOS",
             "aliases": ["LAB SISTEMAS", "LABORATORIO SISTEMAS",
                         "LABORATORIO DE SISTEMAS DISTRIBUIDOS"]},
            {"nombre": "LABORATORIO REDES Y TELEMATICA",
             "aliases": ["LAB REDES", "LABORATORIO REDES", "LABORATORIO REDES Y TELEMATICA"]},
            {"nombre": "LABORATORIO DE INGENIERIA DE SOFTWARE",
             "aliases": ["LAB SOFTWARE", "LABORATORIO SOFTWARE",
                         "LABORATORIO DE INGENIERIA DE SOFTWARE"]},
            {"nombre": "LABORATORIO FISICA MECANICA 1",
             "aliases": ["LAB FISICA 1", "LABORATORIO FISICA MECANICA 1"]},
            {"nombre": "LABORATORIO FISICA MECANICA 3",
             "aliases": ["LAB FISICA 3", "LABORATORIO FISICA MECANICA 3"]},
            {"nombre": "LABORATORIO DE ELECTROMAGNETISMO/CIENCIAS BASICAS",
             "aliases": ["LAB ELECTROMAGNETISMO",
                         "LABORATORIO DE ELECTROMAGNETISMO /CIENCIAS BASICAS"]},
            {"nombre": "LABORATORIO DE SIMULACION Y REALIDAD VIRTUAL",
             "aliases": ["LAB SIMULACION", "LABORATORIO DE SIMULACION Y REALIDAD VIRTUAL"]},
            {"nombre": "LABORATORIO DE INTELIGENCIA ARTIFICIAL",
             "aliases": ["LAB IA", "LABORATORIO DE INTELIGENCIA ARTIFICIAL"]},
            {"nombre": "SALA DE INFORMATICA 1", "aliases": ["SALA INFO 1", "INFORMATICA 1"]},
            {"nombre": "SALA DE INFORMATICA 2", "aliases": ["SALA INFO 2", "INFORMATICA 2"]},
            {"nombre": "SALA DE INFORMATICA 3", "aliases": ["SALA INFO 3", "INFORMATICA 3"]},
            {"nombre": "SALA DE SOFTWARE DE CIENCIAS BASICAS",
             "aliases": ["SALA SOFTWARE", "SOFTWARE CIENCIAS",
                         "SALA DE SOFTWARE DE CIENCIAS BASICAS"]},
        ],
    },
    {
        "nombre": "BLOQUE 1-2-3-4",
        "aliases": ["BLOQUE 1, 2, 3 Y 4", "BLOQUE 1-4", "B-1", "B-2", "B-3"],
        "salones": (
            _aulas_bloque("B-1", 5)
            + _aulas_bloque("B-2", 5)
            + _aulas_bloque("B-3", 5)
            + _aulas_bloque("B-4", 3)
            + [{"nombre": "AULA 503", "aliases": ["AULA 503", "BLOQUE 1, 2, 3 Y 4 AULA 503"]}]
        ),
    },
    {
        "nombre": "BLOQUE 9",
        "aliases": ["BLOQUE 9", "BLQ 9"],
        "salones": [
            {"nombre": f"AULA {numero}", "aliases": [f"AULA {numero}"]}
            for numero in ("101", "102", "103", "104", "105", "106",
                           "201", "202", "203", "204", "205", "206")
        ],
    },
    {
        "nombre": "BLOQUE 11-12",
        "aliases": ["BLOQUE 11-12", "BLOQUE 11 Y 12"],
        "salones": [
            {"nombre": "SALON 1", "aliases": ["SALON 1"]},
            {"nombre": "SALON 2", "aliases": ["SALON 2"]},
            {"nombre": "AULA DE INFORMATICA 1", "aliases": ["AULA DE INFORMATICA 1"]},
            {"nombre": "AULA DE INFORMATICA 2", "aliases": ["AULA DE INFORMATICA 2"]},
            {"nombre": "AULA MULTIPLE 1", "aliases": ["MULTIPLE 1", "AULA MULT 1", "AULA MULTIPLE 1"]},
            {"nombre": "AULA MULTIPLE 2", "aliases": ["MULTIPLE 2", "AULA MULT 2", "AULA MULTIPLE 2"]},
        ],
    },
    {
        "nombre": "BLOQUE 13 - CAFETERIA",
        "aliases": ["BLOQUE 13 - CAFETERIA", "BLOQUE 13", "CAFETERIA"],
        "salones": [
            {"nombre": f"SALA DE INFORMATICA {n}", "aliases": [f"SALA INFO {n}", f"INFORMATICA {n}"]}
            for n in (4, 5, 6, 7)
        ],
    },
    {
        "nombre": "BLOQUE 5",
        "aliases": ["BLOQUE 5", "BLQ 5"],
        "salones": [
            {"nombre": "LABORATORIO DE FISICA", "aliases": ["LAB FISICA", "LABORATORIO DE FISICA"]},
            {"nombre": "SALA DE SOFTWARE CIENCIAS BASICAS",
             "aliases": ["SALA SOFTWARE CIENCIAS", "SALA DE SOFTWARE CIENCIAS BASICAS"]},
            {"nombre": "SALON 105", "aliases": ["SALON 105", "AULA 105"]},
        ],
    },
]


# =============================================================================
# PALABRAS QUE NO SON NOMBRE DE DOCENTE
# =============================================================================

PALABRAS_NO_DOCENTE = frozenset([
    "TECNOLOGICA", "BLOQUE", "AULA", "SALA", "LABORATORIO", "DE", "Y",
    "TECHNE", "OPTICA", "MODERNA", "BASES", "DATOS", "AVANZADAS",
    "SISTEMAS", "DISTRIBUIDOS", "REDES", "TELEMATICA", "INGENIERIA",
    "SOFTWARE", "INFORMATICA", "CIENCIAS", "BASICAS", "FISICA", "MECANICA",
    "ELECTROMAGNETISMO", "SIMULACION", "REALIDAD", "VIRTUAL",
    "INTELIGENCIA", "ARTIFICIAL",
    "1", "2", "3", "4", "5", "6", "7", "8", "9", "10", "11", "12", "13",
    "B-1", "B-2", "B-3", "MULTIPLE", "CAFETERIA",
])


# =============================================================================
# COORDENADAS DE EDIFICIOS
# =============================================================================

EDIFICIOS_LOCALIZACION = {
    "TECHNE": {
        "nombre": "Edificio TECHNE",
        "latitude": 4.5798467,
        "longitude": -74.1587685,
        "aliases": ["TECHNE", "TECNE", "TECHNE BUILDING"],
    },
    "BLOQUE 1-2-3-4": {
        "nombre": "Bloque 1-2-3-4",
        "latitude": 4.5794337,
        "longitude": -74.1578378,
        "aliases": ["BLOQUE 1-2-3-4", "BLOQUE 1, 2, 3 Y 4", "BLOQUE 1-4",
                    "B-1", "B-2", "B-3", "B-4"],
    },
    "BLOQUE 9": {
        "nombre": "Bloque 9",
        "latitude": 4.5786743,
        "longitude": -74.1583200,
        "aliases": ["BLOQUE 9", "BLQ 9"],
    },
    "BLOQUE 11-12": {
        "nombre": "Bloque 11-12",
        "latitude": 4.5789464,
        "longitude": -74.1581258,
        "aliases": ["BLOQUE 11-12", "BLOQUE 11 Y 12"],
    },
    "BLOQUE 5": {
        "nombre": "Bloque 5",
        "latitude": 4.5793208,
        "longitude": -74.1583214,
        "aliases": ["BLOQUE 5", "BLQ 5"],
    },
    "BLOQUE 13": {
        "nombre": "Bloque 13 - Cafetería",
        "latitude": 4.5791225,
        "longitude": -74.1577513,
        "aliases": ["BLOQUE 13 - CAFETERIA", "BLOQUE 13", "CAFETERIA"],
    },
}


# =============================================================================
# CONFIGURACIÓN DE ENTORNO
# =============================================================================

ENTORNO = {
    "docentes": os.environ.get("HORARIOS_DOCENTES"),
    "timeout": int(os.environ.get("HORARIOS_TIMEOUT", "30")),
    "max_retries": int(os.environ.get("HORARIOS_MAX_RETRIES", "3")),
    "log_dir": os.environ.get("HORARIOS_LOG_DIR"),
}


def get_config() -> dict:
    """Obtiene la configuración de entorno."""
    return dict(ENTORNO)


def construir_edificios(datos: list = None) -> List[EdificioInfo]:
    """Convierte la configuración de edificios en EdificioInfo (por defecto EDIFICIOS)."""
    datos = EDIFICIOS if datos is None else datos
    return [
        EdificioInfo(
            nombre=edificio["nombre"],
            aliases=list(edificio.get("aliases", [])),
            salones=[
                SalonInfo(
                    nombre=salon["nombre"],
                    aliases=list(salon.get("aliases", [])),
                    capacidad=salon.get("capacidad"),
                )
                for salon in edificio.get("salones", [])
            ],
        )
        for edificio in datos
    ]
