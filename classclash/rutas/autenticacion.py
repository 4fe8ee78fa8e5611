import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..utilidades.base_datos import obtener_bd
from ..utilidades.seguridad import (
    verificar_password,
    obtener_hash_password,
    crear_access_token,
    obtener_usuario_actual
)
from ..utilidades.configuracion import configuracion
from ..utilidades.errores import ErrorAlmacen
from ..modelos.usuario import Usuario
from ..esquemas.usuario_schemas import (
    UsuarioRegistro,
    UsuarioLogin,
    UsuarioRespuesta,
    TokenRespuesta
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Autenticación"])


def _token_para(usuario: Usuario) -> str:
    return crear_access_token(
        data={"sub": usuario.email, "id": usuario.id, "nombre_usuario": usuario.nombre_usuario},
        expires_delta=timedelta(minutes=configuracion.access_token_expire_minutes)
    )


@router.post("/registro", response_model=TokenRespuesta, status_code=status.HTTP_201_CREATED)
def registrar_usuario(
    datos_usuario: UsuarioRegistro,
    bd: Session = Depends(obtener_bd)
):
    email_normalizado = datos_usuario.email.lower().strip()

    usuario_existente = bd.query(Usuario).filter(
        or_(
            Usuario.email == email_normalizado,
            Usuario.nombre_usuario == datos_usuario.nombre_usuario
        )
    ).first()

    if usuario_existente:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="El nombre de usuario o email ya está registrado"
        )

    try:
        nuevo_usuario = Usuario(
            nombre_usuario=datos_usuario.nombre_usuario,
            email=email_normalizado,
            password_hash=obtener_hash_password(datos_usuario.password),
            activo=True
        )

        bd.add(nuevo_usuario)
        bd.commit()
        bd.refresh(nuevo_usuario)

    except IntegrityError:
        # Registro simultáneo con los mismos datos
        bd.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="El nombre de usuario o email ya está registrado"
        )
    except SQLAlchemyError as e:
        bd.rollback()
        logger.error(f"Error al crear usuario: {str(e)}")
        raise ErrorAlmacen("Error al crear usuario")

    logger.info(f"Usuario registrado: {nuevo_usuario.nombre_usuario} (id={nuevo_usuario.id})")

    return TokenRespuesta(
        access_token=_token_para(nuevo_usuario),
        usuario=UsuarioRespuesta.model_validate(nuevo_usuario)
    )


@router.post("/login", response_model=TokenRespuesta)
def iniciar_sesion(
    credenciales: UsuarioLogin,
    bd: Session = Depends(obtener_bd)
):
    identificador = credenciales.nombre_usuario.strip()

    usuario = bd.query(Usuario).filter(
        or_(
            Usuario.nombre_usuario == identificador,
            Usuario.email == identificador.lower()
        )
    ).first()

    if not usuario or not verificar_password(credenciales.password, usuario.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Credenciales inválidas",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not usuario.activo:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Usuario inactivo"
        )

    return TokenRespuesta(
        access_token=_token_para(usuario),
        usuario=UsuarioRespuesta.model_validate(usuario)
    )


@router.get("/yo", response_model=UsuarioRespuesta)
def obtener_perfil(usuario_actual: Usuario = Depends(obtener_usuario_actual)):
    return UsuarioRespuesta.model_validate(usuario_actual)
