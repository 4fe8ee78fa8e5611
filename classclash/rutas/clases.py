import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..utilidades.base_datos import obtener_bd
from ..utilidades.errores import ErrorAlmacen
from ..utilidades.seguridad import obtener_usuario_actual
from ..utilidades.validaciones import validar_nombre_clase
from ..modelos.clase import Clase
from ..modelos.usuario import Usuario
from ..servicios.temporizador import ControladorTemporizadores
from ..esquemas.clase_schemas import ClaseCrear, ClaseRespuesta, ListaClasesRespuesta
from ..esquemas.respuestas import RespuestaAPI
from .temporizadores import obtener_controlador

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clases", tags=["Clases"])


@router.get("/", response_model=ListaClasesRespuesta)
def listar_clases(
    db: Session = Depends(obtener_bd),
    usuario_actual: Usuario = Depends(obtener_usuario_actual)
):
    clases = db.query(Clase).filter(
        Clase.usuario_id == usuario_actual.id
    ).order_by(Clase.fecha_creacion.desc(), Clase.id.desc()).all()

    return ListaClasesRespuesta(
        clases=[ClaseRespuesta.model_validate(clase) for clase in clases]
    )


@router.post("/", response_model=RespuestaAPI[ClaseRespuesta], status_code=status.HTTP_201_CREATED)
def crear_clase(
    clase: ClaseCrear,
    db: Session = Depends(obtener_bd),
    usuario_actual: Usuario = Depends(obtener_usuario_actual),
    controlador: ControladorTemporizadores = Depends(obtener_controlador)
):
    nombre = validar_nombre_clase(clase.nombre)

    try:
        nueva_clase = Clase(usuario_id=usuario_actual.id, nombre=nombre)
        db.add(nueva_clase)
        db.commit()
        db.refresh(nueva_clase)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Error al crear clase para usuario {usuario_actual.id}: {str(e)}")
        raise ErrorAlmacen("Error al crear la clase")

    # Cada clase nueva arranca con su temporizador inactivo
    controlador.registrar(nueva_clase.id, nueva_clase.nombre)

    logger.info(f"Clase creada: {nueva_clase.nombre} (id={nueva_clase.id}) - Usuario: {usuario_actual.id}")

    return RespuestaAPI[ClaseRespuesta](
        exito=True,
        mensaje="Clase creada exitosamente",
        datos=ClaseRespuesta.model_validate(nueva_clase)
    )


@router.get("/{clase_id}", response_model=ClaseRespuesta)
def obtener_clase(
    clase_id: int,
    db: Session = Depends(obtener_bd),
    usuario_actual: Usuario = Depends(obtener_usuario_actual)
):
    clase = db.query(Clase).filter(
        Clase.id == clase_id,
        Clase.usuario_id == usuario_actual.id
    ).first()

    if not clase:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Clase no encontrada"
        )

    return ClaseRespuesta.model_validate(clase)
