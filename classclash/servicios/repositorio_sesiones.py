from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, desc
from sqlalchemy.orm import Session

from ..modelos import Clase, SesionEstudio, Usuario


class RepositorioSesiones:
    """Acceso a la tabla sesiones_estudio sobre una sesión de SQLAlchemy"""

    def __init__(self, db: Session):
        self.db = db

    def clase_de_usuario(self, clase_id: int, usuario_id: int) -> Optional[Clase]:
        return self.db.query(Clase).filter(
            Clase.id == clase_id,
            Clase.usuario_id == usuario_id
        ).first()

    def insertar(self, sesion: SesionEstudio) -> int:
        self.db.add(sesion)
        self.db.commit()
        self.db.refresh(sesion)
        return sesion.id

    def sumar_segundos(self, usuario_id: int, clase_id: int, semana: date) -> int:
        total = self.db.query(func.coalesce(func.sum(SesionEstudio.segundos), 0)).filter(
            SesionEstudio.usuario_id == usuario_id,
            SesionEstudio.clase_id == clase_id,
            SesionEstudio.semana_inicio == semana
        ).scalar()
        return int(total or 0)

    def sumar_por_clase(self, usuario_id: int, semana: date) -> Dict[int, int]:
        filas = self.db.query(
            SesionEstudio.clase_id,
            func.sum(SesionEstudio.segundos)
        ).filter(
            SesionEstudio.usuario_id == usuario_id,
            SesionEstudio.semana_inicio == semana
        ).group_by(SesionEstudio.clase_id).all()

        return {clase_id: int(total or 0) for clase_id, total in filas}

    def sumar_por_usuario(self, clase_id: int, semana: date, limite: int) -> List[Tuple[int, str, int]]:
        """(usuario_id, nombre_usuario, total) con total > 0, de mayor a menor"""
        total = func.sum(SesionEstudio.segundos).label("total")
        filas = self.db.query(
            Usuario.id,
            Usuario.nombre_usuario,
            total
        ).join(
            SesionEstudio, SesionEstudio.usuario_id == Usuario.id
        ).filter(
            SesionEstudio.clase_id == clase_id,
            SesionEstudio.semana_inicio == semana
        ).group_by(
            Usuario.id, Usuario.nombre_usuario
        ).having(
            func.sum(SesionEstudio.segundos) > 0
        ).order_by(
            desc("total")
        ).limit(limite).all()

        return [(usuario_id, nombre, int(segundos)) for usuario_id, nombre, segundos in filas]
