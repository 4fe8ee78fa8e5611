# classclash/rutas/sesiones.py
import dataclasses
from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..utilidades.base_datos import obtener_bd
from ..utilidades.formato import formatear_duracion
from ..utilidades.semanas import normalizar_semana
from ..utilidades.seguridad import obtener_usuario_actual
from ..modelos.usuario import Usuario
from ..servicios.agregador_semanal import AgregadorSemanal
from ..esquemas.sesion_schemas import (
    SesionCrear,
    SesionRespuesta,
    TotalSemanalRespuesta,
    TotalesSemanalesRespuesta
)

router = APIRouter(prefix="/sesiones", tags=["Sesiones de Estudio"])


@router.post("/", response_model=SesionRespuesta, status_code=status.HTTP_201_CREATED)
def registrar_sesion(
    sesion_data: SesionCrear,
    db: Session = Depends(obtener_bd),
    usuario_actual: Usuario = Depends(obtener_usuario_actual)
):
    """Registrar segundos estudiados; responde con el lunes de semana usado"""
    registrada = AgregadorSemanal(db).registrar_sesion(
        usuario_actual.id,
        sesion_data.clase_id,
        sesion_data.segundos,
        sesion_data.semana_inicio
    )
    return SesionRespuesta(**dataclasses.asdict(registrada))


@router.get("/semanal", response_model=TotalesSemanalesRespuesta)
def obtener_totales_semanales(
    semana_inicio: Optional[str] = None,
    db: Session = Depends(obtener_bd),
    usuario_actual: Usuario = Depends(obtener_usuario_actual)
):
    """Totales de todas las clases con sesiones en la semana"""
    semana = normalizar_semana(semana_inicio)
    totales = AgregadorSemanal(db).totales_semanales(usuario_actual.id, semana)
    total = sum(totales.values())

    return TotalesSemanalesRespuesta(
        semana_inicio=semana,
        totales=totales,
        total_segundos=total,
        tiempo_formateado=formatear_duracion(total)
    )


@router.get("/semanal/{clase_id}", response_model=TotalSemanalRespuesta)
def obtener_total_semanal(
    clase_id: int,
    semana_inicio: Optional[str] = None,
    db: Session = Depends(obtener_bd),
    usuario_actual: Usuario = Depends(obtener_usuario_actual)
):
    semana = normalizar_semana(semana_inicio)
    total = AgregadorSemanal(db).total_semanal(usuario_actual.id, clase_id, semana)

    return TotalSemanalRespuesta(
        clase_id=clase_id,
        semana_inicio=semana,
        total_segundos=total,
        tiempo_formateado=formatear_duracion(total)
    )
