from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class ClaseCrear(BaseModel):
    # El nombre vacío se rechaza con ErrorValidacion al crear
    nombre: str = Field(..., max_length=255)


class ClaseRespuesta(BaseModel):
    id: int
    usuario_id: int
    nombre: str
    fecha_creacion: Optional[datetime] = None

    class Config:
        from_attributes = True


class ListaClasesRespuesta(BaseModel):
    clases: List[ClaseRespuesta]
