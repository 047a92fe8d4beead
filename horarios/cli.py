#!/usr/bin/env python3
"""
Parser de horarios desde la línea de comandos.

Lee el texto (o PDF) del horario, lo parsea contra el roster de docentes
y guarda el resultado en JSON.

Uso:
    parsear-horarios horarios.txt --docentes docentes.txt --salida horarios.json
    parsear-horarios horarios.pdf --momento 2025-03-10T09:15 --desde TECHNE --validar
    parsear-horarios horarios.txt --docentes docentes.txt --directorio --estado pendientes \\
        --encuestados encuestados.txt
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import requests

from .config import get_config
from .consultas import (
    docentes_activos,
    proximos_docentes,
    agrupar_por_bloques,
    directorio_docentes,
    filtrar_docentes,
    estadisticas_encuesta,
)
from .docentes import DocenteMatcher, cargar_docentes
from .extractor import crear_extractor
from .geolocalizacion import (
    calcular_distancia,
    formatear_distancia,
    nivel_proximidad,
    ubicacion_edificio,
)
from .models import EstadoEncuesta
from .parser import ParserHorarios
from .validador import ValidadorHorarios


DOCENTE_NO_IDENTIFICADO = "Docente no identificado"


def setup_logging(log_dir: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """Configura el sistema de logging."""
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)

    logger = logging.getLogger("horarios")
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    logger.addHandler(console_handler)

    if log_dir:
        logs = Path(log_dir)
        logs.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        file_handler = logging.FileHandler(logs / f"parseo_{timestamp}.log", encoding="utf-8")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        logger.addHandler(file_handler)

    return logger


def texto_distancia(origen, edificio: str) -> str:
    """' [120m, cerca]' desde el edificio de origen, o '' si alguno no tiene coordenadas."""
    if origen is None:
        return ""
    destino = ubicacion_edificio(edificio)
    if destino is None:
        return ""
    km = calcular_distancia(origen.coordenadas, destino.coordenadas)
    return f" [{formatear_distancia(km)}, {nivel_proximidad(km)}]"


def imprimir_bloques(titulo: str, bloques, origen=None) -> None:
    print(f"\n{titulo}")
    if not bloques:
        print("   (ninguno)")
        return
    for bloque in bloques:
        print(f"   {bloque.horario}")
        for d in bloque.docentes:
            nombre = d.docente or DOCENTE_NO_IDENTIFICADO
            distancia = texto_distancia(origen, d.edificio)
            print(f"      {nombre} - {d.asignatura} ({d.edificio} / {d.salon}){distancia}")


def imprimir_directorio(docentes, stats) -> None:
    print(f"\nDIRECTORIO ({stats.encuestados}/{stats.total} encuestados, "
          f"{stats.pendientes} pendientes, {stats.porcentaje}%)")
    if not docentes:
        print("   (ninguno)")
        return
    for docente in docentes:
        print(f"   {docente.nombre}: {', '.join(docente.materias)}")
        for h in docente.horarios:
            print(f"      {h.dia.value} {h.hora_inicio}-{h.hora_fin} {h.asignatura} ({h.edificio} / {h.salon})")


def main(argv=None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description='Parsear horarios académicos desde texto o PDF')
    parser.add_argument('archivo', help='Archivo .txt o .pdf con el horario')
    parser.add_argument('--docentes', default=config["docentes"],
                        help='Roster de docentes (ruta o URL, un nombre por línea)')
    parser.add_argument('--salida', help='Ruta del JSON de salida')
    parser.add_argument('--momento', help='Fecha/hora ISO para listar docentes activos y próximos')
    parser.add_argument('--desde', help='Edificio de referencia para mostrar distancias')
    parser.add_argument('--directorio', action='store_true', help='Mostrar el directorio de docentes')
    parser.add_argument('--buscar', default='', help='Filtrar el directorio por nombre o materia')
    parser.add_argument('--estado', choices=[e.value for e in EstadoEncuesta],
                        default=EstadoEncuesta.TODOS.value, help='Filtrar el directorio por encuesta')
    parser.add_argument('--encuestados', help='Docentes ya encuestados (ruta o URL, un nombre por línea)')
    parser.add_argument('--validar', action='store_true', help='Mostrar problemas de validación')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Mostrar detalle de depuración y progreso de extracción')
    args = parser.parse_args(argv)

    logger = setup_logging(config["log_dir"], verbose=args.verbose)

    try:
        texto = crear_extractor(Path(args.archivo), mostrar_progreso=args.verbose).extraer()
        if args.docentes:
            matcher = DocenteMatcher.desde_fuente(args.docentes, logger=logger)
            logger.info("%d docentes cargados desde %s", len(matcher.docentes), args.docentes)
        else:
            logger.warning("Sin roster de docentes: ningún docente será identificado")
            matcher = DocenteMatcher(logger=logger)
        encuestados = cargar_docentes(args.encuestados) if args.encuestados else []
        momento = datetime.fromisoformat(args.momento) if args.momento else None
        origen = None
        if args.desde:
            origen = ubicacion_edificio(args.desde)
            if origen is None:
                raise ValueError(f"Edificio sin coordenadas: {args.desde}")
    except (FileNotFoundError, ValueError, requests.RequestException) as e:
        logger.error("%s", e)
        return 1

    resultado = ParserHorarios(docente_matcher=matcher, logger=logger).parsear(texto)

    logger.info(
        "Carreras: %d | Asignaturas: %d | Grupos: %d | Bloques: %d",
        resultado.total_carreras,
        resultado.total_asignaturas,
        resultado.total_grupos,
        resultado.total_bloques,
    )
    logger.info("Docentes identificados: %.1f%%", resultado.porcentaje_docentes)
    if resultado.omitidas:
        logger.info("%d líneas omitidas", len(resultado.omitidas))

    if args.validar:
        validador = ValidadorHorarios()
        validador.validar(resultado.universidad)
        for tipo, cantidad in sorted(validador.resumen().items()):
            logger.info("   %s: %d", tipo, cantidad)

    if args.salida:
        salida = Path(args.salida)
        with open(salida, 'w', encoding='utf-8') as f:
            json.dump(resultado.to_dict(), f, ensure_ascii=False, indent=2)
        logger.info("Guardado: %s", salida)

    universidad = resultado.universidad

    if momento:
        imprimir_bloques("EN CLASE AHORA", agrupar_por_bloques(docentes_activos(universidad, momento)), origen)
        imprimir_bloques("PRÓXIMOS", agrupar_por_bloques(proximos_docentes(universidad, momento)), origen)

    if args.directorio:
        directorio = directorio_docentes(universidad)
        filtrados = filtrar_docentes(
            directorio,
            busqueda=args.buscar,
            encuestados=encuestados,
            estado=EstadoEncuesta(args.estado),
        )
        imprimir_directorio(filtrados, estadisticas_encuesta(directorio, encuestados))

    return 0


if __name__ == "__main__":
    sys.exit(main())
