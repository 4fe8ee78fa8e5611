from pydantic import BaseModel
from typing import Optional, List, Generic, TypeVar

T = TypeVar('T')


class RespuestaAPI(BaseModel, Generic[T]):
    """Esquema base para respuestas de la API"""
    exito: bool
    mensaje: str
    datos: Optional[T] = None
    errores: Optional[List[str]] = None


class RespuestaError(BaseModel):
    """Esquema para respuestas de error"""
    error: bool = True
    mensaje: str
    codigo: int
