import logging
from typing import List

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..modelos import Comentario, VotoComentario
from ..utilidades.errores import ErrorAlmacen, ErrorNoEncontrado
from ..utilidades.validaciones import validar_contenido_comentario

logger = logging.getLogger(__name__)


class ComentariosServicio:
    def __init__(self, db: Session):
        self.db = db

    def listar(self) -> List[Comentario]:
        """Comentarios con más votos primero; a igual voto, los más recientes"""
        return self.db.query(Comentario).options(
            joinedload(Comentario.usuario)
        ).order_by(
            desc(Comentario.votos),
            desc(Comentario.fecha_creacion),
            desc(Comentario.id)
        ).all()

    def crear(self, usuario_id: int, contenido: str) -> Comentario:
        contenido_limpio = validar_contenido_comentario(contenido)
        try:
            comentario = Comentario(usuario_id=usuario_id, contenido=contenido_limpio, votos=0)
            self.db.add(comentario)
            self.db.commit()
            self.db.refresh(comentario)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error creando comentario: {e}")
            raise ErrorAlmacen("No se pudo crear el comentario")
        return comentario

    def alternar_voto(self, comentario_id: int, usuario_id: int) -> bool:
        """Agrega el voto del usuario o lo quita si ya existía. Retorna si quedó votado"""
        comentario = self.db.query(Comentario).filter(Comentario.id == comentario_id).first()
        if not comentario:
            raise ErrorNoEncontrado("Comentario no encontrado")

        try:
            voto = self.db.query(VotoComentario).filter(
                VotoComentario.comentario_id == comentario_id,
                VotoComentario.usuario_id == usuario_id
            ).first()

            if voto:
                self.db.delete(voto)
                comentario.votos = max(0, comentario.votos - 1)
                votado = False
            else:
                self.db.add(VotoComentario(comentario_id=comentario_id, usuario_id=usuario_id))
                comentario.votos = comentario.votos + 1
                votado = True

            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error actualizando voto del comentario {comentario_id}: {e}")
            raise ErrorAlmacen("No se pudo actualizar el voto")

        return votado

    def eliminar(self, comentario_id: int, usuario_id: int) -> None:
        comentario = self.db.query(Comentario).filter(
            Comentario.id == comentario_id,
            Comentario.usuario_id == usuario_id
        ).first()
        if not comentario:
            raise ErrorNoEncontrado("Comentario no encontrado o no tienes permiso")

        try:
            self.db.delete(comentario)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error eliminando comentario {comentario_id}: {e}")
            raise ErrorAlmacen("No se pudo eliminar el comentario")
