"""
Fase 3: Validación del horario parseado.

Revisa el árbol ya construido y reporta lo que no se pudo resolver
o que luce inconsistente:
- Franjas con inicio >= fin
- Edificios y salones desconocidos
- Bloques sin docente identificado
- Grupos sin bloques
- Asignaturas sin código

Nada de esto detiene el flujo; el parser ya dejó centinelas en su lugar.
"""

from collections import Counter
from typing import List

from .config import EDIFICIO_DESCONOCIDO, SALON_DESCONOCIDO
from .models import (
    HorarioUniversidad,
    Problema,
    TipoProblema,
)


class ValidadorHorarios:
    """
    Validador estructural del horario.

    Usage:
        validador = ValidadorHorarios()
        problemas = validador.validar(resultado.universidad)
        validador.resumen()  # {"docente_no_resuelto": 12, ...}
    """

    def __init__(self):
        self.problemas: List[Problema] = []

    def validar(self, universidad: HorarioUniversidad) -> List[Problema]:
        """
        Valida el árbol completo.

        Returns:
            Lista de problemas detectados
        """
        self.problemas = []

        for facultad in universidad.facultades:
            for carrera in facultad.carreras:
                for asignatura in carrera.asignaturas:
                    ruta = f"{carrera.nombre} > {asignatura.nombre}"

                    if not asignatura.codigo:
                        self._agregar(
                            TipoProblema.ASIGNATURA_SIN_CODIGO,
                            "La asignatura no tiene código",
                            ruta,
                        )

                    for grupo in asignatura.grupos:
                        ruta_grupo = f"{ruta} > GRP. {grupo.numero}"
                        if not grupo.bloques:
                            self._agregar(
                                TipoProblema.GRUPO_SIN_BLOQUES,
                                "El grupo no tiene bloques horarios",
                                ruta_grupo,
                            )
                        for bloque in grupo.bloques:
                            self._validar_bloque(bloque, ruta_grupo)

        return self.problemas

    def _validar_bloque(self, bloque, ruta: str):
        franja = f"{bloque.dia.value} {bloque.hora_inicio}-{bloque.hora_fin}"
        ubicacion = f"{ruta} > {franja}"

        if bloque.hora_inicio >= bloque.hora_fin:
            self._agregar(
                TipoProblema.HORARIO_INVERTIDO,
                f"Hora de inicio {bloque.hora_inicio} no es menor que fin {bloque.hora_fin}",
                ubicacion,
                severidad="error",
            )

        if bloque.edificio == EDIFICIO_DESCONOCIDO:
            self._agregar(TipoProblema.EDIFICIO_DESCONOCIDO, "Edificio no identificado", ubicacion)
        elif bloque.salon == SALON_DESCONOCIDO:
            self._agregar(
                TipoProblema.SALON_DESCONOCIDO,
                f"Salón no identificado en {bloque.edificio}",
                ubicacion,
            )

        if not bloque.docente:
            self._agregar(TipoProblema.DOCENTE_NO_RESUELTO, "Docente no identificado", ubicacion)

    def _agregar(self, tipo: TipoProblema, descripcion: str, ubicacion: str, severidad: str = "warning"):
        self.problemas.append(Problema(
            tipo=tipo,
            descripcion=descripcion,
            ubicacion=ubicacion,
            severidad=severidad,
        ))

    def resumen(self) -> dict:
        """Cantidad de problemas por tipo."""
        return dict(Counter(p.tipo.value for p in self.problemas))

    @property
    def tiene_errores(self) -> bool:
        return any(p.severidad == "error" for p in self.problemas)
