from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class ComentarioCrear(BaseModel):
    contenido: str


class ComentarioRespuesta(BaseModel):
    id: int
    usuario_id: int
    nombre_usuario: Optional[str] = None
    contenido: str
    votos: int
    fecha_creacion: Optional[datetime] = None

    class Config:
        from_attributes = True


class ListaComentariosRespuesta(BaseModel):
    comentarios: List[ComentarioRespuesta]


class VotoRespuesta(BaseModel):
    votado: bool
    mensaje: str
