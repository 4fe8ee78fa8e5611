from pydantic import BaseModel
from typing import List, Optional

from .sesion_schemas import SesionRespuesta


class TemporizadorRespuesta(BaseModel):
    clase_id: int
    nombre: str
    estado: str
    segundos_guardados: float
    segundos_sesion: float
    segundos_en_vivo: float
    tiempo_sesion_formateado: str
    tiempo_guardado_formateado: str


class ListaTemporizadoresRespuesta(BaseModel):
    temporizadores: List[TemporizadorRespuesta]
    activo: Optional[int] = None


class AccionTemporizadorRespuesta(BaseModel):
    exito: bool
    mensaje: str
    temporizador: TemporizadorRespuesta
    # Solo al guardar
    sesion: Optional[SesionRespuesta] = None
