import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..utilidades.base_datos import obtener_bd
from ..utilidades.seguridad import obtener_usuario_actual
from ..modelos.usuario import Usuario
from ..servicios.comentarios_servicio import ComentariosServicio
from ..esquemas.comentario_schemas import (
    ComentarioCrear,
    ComentarioRespuesta,
    ListaComentariosRespuesta,
    VotoRespuesta
)
from ..esquemas.respuestas import RespuestaAPI

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comentarios", tags=["Comentarios"])


@router.get("/", response_model=ListaComentariosRespuesta)
def listar_comentarios(db: Session = Depends(obtener_bd)):
    comentarios = ComentariosServicio(db).listar()
    return ListaComentariosRespuesta(
        comentarios=[ComentarioRespuesta.model_validate(c) for c in comentarios]
    )


@router.post("/", response_model=ComentarioRespuesta, status_code=status.HTTP_201_CREATED)
def crear_comentario(
    datos: ComentarioCrear,
    db: Session = Depends(obtener_bd),
    usuario_actual: Usuario = Depends(obtener_usuario_actual)
):
    comentario = ComentariosServicio(db).crear(usuario_actual.id, datos.contenido)
    logger.info(f"Comentario {comentario.id} creado por usuario {usuario_actual.id}")
    return ComentarioRespuesta.model_validate(comentario)


@router.post("/{comentario_id}/votar", response_model=VotoRespuesta)
def votar_comentario(
    comentario_id: int,
    db: Session = Depends(obtener_bd),
    usuario_actual: Usuario = Depends(obtener_usuario_actual)
):
    votado = ComentariosServicio(db).alternar_voto(comentario_id, usuario_actual.id)
    return VotoRespuesta(
        votado=votado,
        mensaje="Voto agregado" if votado else "Voto eliminado"
    )


@router.delete("/{comentario_id}", response_model=RespuestaAPI)
def eliminar_comentario(
    comentario_id: int,
    db: Session = Depends(obtener_bd),
    usuario_actual: Usuario = Depends(obtener_usuario_actual)
):
    ComentariosServicio(db).eliminar(comentario_id, usuario_actual.id)
    return RespuestaAPI(exito=True, mensaje="Comentario eliminado correctamente")
