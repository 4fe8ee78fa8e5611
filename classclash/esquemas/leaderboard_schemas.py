from pydantic import BaseModel
from typing import List
from datetime import date


class PosicionRespuesta(BaseModel):
    posicion: int
    usuario_id: int
    nombre_usuario: str
    total_segundos: int
    tiempo_formateado: str


class LeaderboardRespuesta(BaseModel):
    clase_id: int
    semana_inicio: date
    leaderboard: List[PosicionRespuesta]
