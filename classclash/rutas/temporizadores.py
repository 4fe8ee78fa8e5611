import dataclasses
import enum
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from ..utilidades.base_datos import obtener_bd
from ..utilidades.configuracion import configuracion
from ..utilidades.errores import ErrorClassClash
from ..utilidades.formato import formatear_duracion, formatear_duracion_corta
from ..utilidades.seguridad import obtener_usuario_actual
from ..modelos.clase import Clase
from ..modelos.usuario import Usuario
from ..servicios.agregador_semanal import AgregadorSemanal
from ..servicios.temporizador import ControladorTemporizadores, RegistroTemporizadores
from ..esquemas.sesion_schemas import SesionRespuesta
from ..esquemas.temporizador_schemas import (
    TemporizadorRespuesta,
    ListaTemporizadoresRespuesta,
    AccionTemporizadorRespuesta
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/temporizadores", tags=["Temporizadores"])

# Los temporizadores viven en memoria del proceso; solo las sesiones
# guardadas se persisten.
registro_temporizadores = RegistroTemporizadores(exclusivo=configuracion.temporizador_exclusivo)


def obtener_registro_temporizadores() -> RegistroTemporizadores:
    return registro_temporizadores


def obtener_controlador(
    usuario_actual: Usuario = Depends(obtener_usuario_actual),
    registro: RegistroTemporizadores = Depends(obtener_registro_temporizadores)
) -> ControladorTemporizadores:
    return registro.para_usuario(usuario_actual.id)


class AccionTemporizador(str, enum.Enum):
    INICIAR = "iniciar"
    DETENER = "detener"
    REANUDAR = "reanudar"
    GUARDAR = "guardar"
    DESCARTAR = "descartar"


def _respuesta_temporizador(controlador: ControladorTemporizadores, clase_id: int) -> TemporizadorRespuesta:
    temporizador = controlador.obtener(clase_id)
    en_vivo = controlador.segundos_en_vivo(clase_id)
    return TemporizadorRespuesta(
        clase_id=temporizador.clase_id,
        nombre=temporizador.nombre,
        estado=temporizador.estado.value,
        segundos_guardados=temporizador.segundos_guardados,
        segundos_sesion=temporizador.segundos_sesion,
        segundos_en_vivo=en_vivo,
        tiempo_sesion_formateado=formatear_duracion(en_vivo),
        tiempo_guardado_formateado=formatear_duracion_corta(temporizador.segundos_guardados)
    )


def _asegurar_temporizador(
    clase_id: int,
    usuario: Usuario,
    db: Session,
    controlador: ControladorTemporizadores
) -> None:
    """Verifica que la clase sea del usuario y registra su temporizador si falta"""
    clase = db.query(Clase).filter(
        Clase.id == clase_id,
        Clase.usuario_id == usuario.id
    ).first()

    if not clase:
        # Una clase eliminada no debe conservar temporizador
        controlador.eliminar(clase_id)
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Clase no encontrada"
        )

    controlador.registrar(clase.id, clase.nombre)


@router.get("/", response_model=ListaTemporizadoresRespuesta)
def listar_temporizadores(
    db: Session = Depends(obtener_bd),
    usuario_actual: Usuario = Depends(obtener_usuario_actual),
    controlador: ControladorTemporizadores = Depends(obtener_controlador)
):
    """Un temporizador por cada clase del usuario, creando los que falten"""
    clases = db.query(Clase).filter(
        Clase.usuario_id == usuario_actual.id
    ).order_by(Clase.id).all()

    ids_clases = set()
    for clase in clases:
        controlador.registrar(clase.id, clase.nombre)
        ids_clases.add(clase.id)

    # Temporizadores de clases que ya no existen
    for temporizador in controlador.listar():
        if temporizador.clase_id not in ids_clases:
            controlador.eliminar(temporizador.clase_id)

    activo = controlador.temporizador_activo()
    return ListaTemporizadoresRespuesta(
        temporizadores=[
            _respuesta_temporizador(controlador, clase.id)
            for clase in clases
        ],
        activo=activo.clase_id if activo else None
    )


@router.get("/{clase_id}", response_model=TemporizadorRespuesta)
def obtener_temporizador(
    clase_id: int,
    db: Session = Depends(obtener_bd),
    usuario_actual: Usuario = Depends(obtener_usuario_actual),
    controlador: ControladorTemporizadores = Depends(obtener_controlador)
):
    _asegurar_temporizador(clase_id, usuario_actual, db, controlador)
    return _respuesta_temporizador(controlador, clase_id)


@router.post("/{clase_id}/{accion}", response_model=AccionTemporizadorRespuesta)
def ejecutar_accion(
    clase_id: int,
    accion: AccionTemporizador,
    db: Session = Depends(obtener_bd),
    usuario_actual: Usuario = Depends(obtener_usuario_actual),
    controlador: ControladorTemporizadores = Depends(obtener_controlador)
):
    """
    Aplica una transición al temporizador de la clase. Las transiciones que
    no aplican al estado actual no hacen nada. Guardar registra la sesión.
    """
    _asegurar_temporizador(clase_id, usuario_actual, db, controlador)

    sesion = None

    if accion == AccionTemporizador.INICIAR:
        controlador.iniciar(clase_id)
    elif accion == AccionTemporizador.DETENER:
        controlador.detener(clase_id)
    elif accion == AccionTemporizador.REANUDAR:
        controlador.reanudar(clase_id)
    elif accion == AccionTemporizador.DESCARTAR:
        controlador.descartar(clase_id)
    elif accion == AccionTemporizador.GUARDAR:
        respaldo = controlador.copia(clase_id)
        reporte = controlador.guardar(clase_id)
        if reporte is not None:
            try:
                registrada = AgregadorSemanal(db).registrar_sesion(
                    usuario_actual.id,
                    reporte.clase_id,
                    reporte.segundos
                )
            except ErrorClassClash:
                # Sin sesión persistida el temporizador vuelve a su estado previo
                controlador.restaurar(respaldo)
                raise
            sesion = SesionRespuesta(**dataclasses.asdict(registrada))

    logger.info(f"Temporizador {accion.value} - Usuario: {usuario_actual.id}, Clase: {clase_id}")

    return AccionTemporizadorRespuesta(
        exito=True,
        mensaje=f"Acción '{accion.value}' aplicada",
        temporizador=_respuesta_temporizador(controlador, clase_id),
        sesion=sesion
    )
