import hashlib
import logging
from datetime import datetime, timedelta
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from .configuracion import configuracion
from .base_datos import obtener_bd
from ..modelos.usuario import Usuario

logger = logging.getLogger(__name__)

# Configuración de contraseñas
contexto_password = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Configuración de tokens
security = HTTPBearer()


def _prehash(password: str) -> str:
    # bcrypt solo usa los primeros 72 bytes; el pre-hash SHA256 tiene 64
    return hashlib.sha256(password.encode('utf-8')).hexdigest()


def obtener_hash_password(password: str) -> str:
    """
    Genera el hash de una contraseña usando bcrypt con pre-hash SHA256
    para manejar contraseñas largas de forma segura
    """
    return contexto_password.hash(_prehash(password))


def verificar_password(password_plano: str, password_hash: str) -> bool:
    """
    Verifica si una contraseña plana coincide con su hash
    usando el mismo pre-hash SHA256
    """
    try:
        return contexto_password.verify(_prehash(password_plano), password_hash)
    except ValueError as e:
        logger.warning(f"Hash de contraseña inválido: {str(e)}")
        return False


def crear_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    """Crear token JWT"""
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=configuracion.access_token_expire_minutes)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, configuracion.secret_key, algorithm=configuracion.algorithm)
    return encoded_jwt


def verificar_token(credentials: HTTPAuthorizationCredentials = Depends(security)):
    """Verificar y decodificar token JWT"""
    try:
        payload = jwt.decode(
            credentials.credentials,
            configuracion.secret_key,
            algorithms=[configuracion.algorithm]
        )
        email: str = payload.get("sub")
        if email is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token inválido",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return email
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token inválido",
            headers={"WWW-Authenticate": "Bearer"},
        )


def obtener_usuario_actual(
    email: str = Depends(verificar_token),
    bd: Session = Depends(obtener_bd)
) -> Usuario:
    """Obtener usuario actual basado en el token"""
    usuario = bd.query(Usuario).filter(Usuario.email == email).first()
    if not usuario:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuario no encontrado"
        )
    if not usuario.activo:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Usuario inactivo"
        )
    return usuario
