import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..modelos import SesionEstudio
from ..utilidades.configuracion import configuracion
from ..utilidades.errores import ErrorAlmacen, ErrorNoEncontrado
from ..utilidades.semanas import normalizar_semana
from ..utilidades.validaciones import validar_identificador, validar_segundos
from .repositorio_sesiones import RepositorioSesiones

logger = logging.getLogger(__name__)

Semana = Optional[Union[str, date]]


@dataclass
class SesionRegistrada:
    id: int
    usuario_id: int
    clase_id: int
    segundos: int
    semana_inicio: date


@dataclass
class PosicionLeaderboard:
    posicion: int
    usuario_id: int
    nombre_usuario: str
    total_segundos: int


class AgregadorSemanal:
    """
    Registra sesiones de estudio y calcula totales por semana.

    Las sesiones solo se insertan; los totales se suman al consultar, así que
    inserciones concurrentes para la misma (usuario, clase, semana) no
    necesitan coordinación.
    """

    def __init__(self, db: Session, limite_leaderboard: Optional[int] = None):
        self.db = db
        self.repositorio = RepositorioSesiones(db)
        if limite_leaderboard is None:
            limite_leaderboard = configuracion.limite_leaderboard
        self.limite_leaderboard = limite_leaderboard

    def registrar_sesion(
        self,
        usuario_id: int,
        clase_id: int,
        segundos: int,
        semana_inicio: Semana = None
    ) -> SesionRegistrada:
        # Validar todo antes de tocar la base de datos
        validar_identificador(usuario_id, "usuario_id")
        validar_identificador(clase_id, "clase_id")
        validar_segundos(segundos)
        semana = normalizar_semana(semana_inicio)

        try:
            clase = self.repositorio.clase_de_usuario(clase_id, usuario_id)
            if clase is None:
                raise ErrorNoEncontrado("Clase no encontrada")

            sesion = SesionEstudio(
                usuario_id=usuario_id,
                clase_id=clase_id,
                segundos=segundos,
                semana_inicio=semana
            )
            sesion_id = self.repositorio.insertar(sesion)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error registrando sesión de usuario {usuario_id} en clase {clase_id}: {e}")
            raise ErrorAlmacen("No se pudo registrar la sesión")

        logger.info(f"Sesión registrada - Usuario: {usuario_id}, Clase: {clase_id}, Segundos: {segundos}, Semana: {semana}")

        return SesionRegistrada(
            id=sesion_id,
            usuario_id=usuario_id,
            clase_id=clase_id,
            segundos=segundos,
            semana_inicio=semana
        )

    def total_semanal(self, usuario_id: int, clase_id: int, semana_inicio: Semana = None) -> int:
        """Segundos de la clase en la semana; 0 si no hay sesiones"""
        semana = normalizar_semana(semana_inicio)
        try:
            return self.repositorio.sumar_segundos(usuario_id, clase_id, semana)
        except SQLAlchemyError as e:
            logger.error(f"Error obteniendo total semanal: {e}")
            raise ErrorAlmacen("No se pudo obtener el total semanal")

    def totales_semanales(self, usuario_id: int, semana_inicio: Semana = None) -> Dict[int, int]:
        """
        {clase_id: segundos} para las clases con al menos una sesión en la
        semana. Una clase ausente equivale a 0.
        """
        semana = normalizar_semana(semana_inicio)
        try:
            return self.repositorio.sumar_por_clase(usuario_id, semana)
        except SQLAlchemyError as e:
            logger.error(f"Error obteniendo totales semanales: {e}")
            raise ErrorAlmacen("No se pudieron obtener los totales semanales")

    def leaderboard(self, clase_id: int, semana_inicio: Semana = None) -> List[PosicionLeaderboard]:
        """
        Usuarios con total > 0 en la clase y semana, de mayor a menor total.
        El orden entre totales iguales no está definido.
        """
        semana = normalizar_semana(semana_inicio)
        try:
            filas = self.repositorio.sumar_por_usuario(clase_id, semana, self.limite_leaderboard)
        except SQLAlchemyError as e:
            logger.error(f"Error obteniendo leaderboard de clase {clase_id}: {e}")
            raise ErrorAlmacen("No se pudo obtener el leaderboard")

        return [
            PosicionLeaderboard(
                posicion=indice + 1,
                usuario_id=usuario_id,
                nombre_usuario=nombre_usuario,
                total_segundos=total
            )
            for indice, (usuario_id, nombre_usuario, total) in enumerate(filas)
        ]
