from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..utilidades.base_datos import obtener_bd
from ..utilidades.formato import formatear_duracion
from ..utilidades.semanas import normalizar_semana
from ..servicios.agregador_semanal import AgregadorSemanal
from ..esquemas.leaderboard_schemas import LeaderboardRespuesta, PosicionRespuesta

router = APIRouter(prefix="/leaderboard", tags=["Leaderboard"])


@router.get("/{clase_id}", response_model=LeaderboardRespuesta)
def obtener_leaderboard(
    clase_id: int,
    semana_inicio: Optional[str] = None,
    db: Session = Depends(obtener_bd)
):
    """Ranking semanal de la clase; público"""
    semana = normalizar_semana(semana_inicio)
    posiciones = AgregadorSemanal(db).leaderboard(clase_id, semana)

    return LeaderboardRespuesta(
        clase_id=clase_id,
        semana_inicio=semana,
        leaderboard=[
            PosicionRespuesta(
                posicion=p.posicion,
                usuario_id=p.usuario_id,
                nombre_usuario=p.nombre_usuario,
                total_segundos=p.total_segundos,
                tiempo_formateado=formatear_duracion(p.total_segundos)
            )
            for p in posiciones
        ]
    )
