from pydantic import BaseModel, field_validator
from typing import Any, Dict, Optional
from datetime import date


class SesionCrear(BaseModel):
    # Sin tipo estricto: AgregadorSemanal los valida y responde con ErrorValidacion (400)
    clase_id: Optional[Any] = None
    segundos: Optional[Any] = None
    # "YYYY-MM-DD"; se normaliza al lunes de su semana
    semana_inicio: Optional[str] = None

    @field_validator('semana_inicio')
    @classmethod
    def convertir_vacio_a_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v


class SesionRespuesta(BaseModel):
    id: int
    usuario_id: int
    clase_id: int
    segundos: int
    semana_inicio: date


class TotalSemanalRespuesta(BaseModel):
    clase_id: int
    semana_inicio: date
    total_segundos: int
    tiempo_formateado: str


class TotalesSemanalesRespuesta(BaseModel):
    semana_inicio: date
    totales: Dict[int, int]
    total_segundos: int
    tiempo_formateado: str
