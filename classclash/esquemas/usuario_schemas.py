from pydantic import BaseModel, EmailStr, field_validator
from typing import Optional
from datetime import datetime

from ..utilidades.validaciones import LONGITUD_MINIMA_PASSWORD

# Límite de bcrypt
MAX_PASSWORD_LENGTH = 72


# ============================================
# SCHEMAS DE REGISTRO Y LOGIN
# ============================================


class UsuarioRegistro(BaseModel):
    """Schema para registro de usuario"""
    nombre_usuario: str
    email: EmailStr
    password: str

    @field_validator('nombre_usuario')
    @classmethod
    def validar_nombre_usuario(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('El nombre de usuario es obligatorio')
        if len(v) > 100:
            raise ValueError('El nombre de usuario no puede exceder 100 caracteres')
        return v

    @field_validator('password')
    @classmethod
    def validar_password(cls, v):
        if len(v) > MAX_PASSWORD_LENGTH:
            raise ValueError(f'La contraseña no puede exceder {MAX_PASSWORD_LENGTH} caracteres')
        if len(v) < LONGITUD_MINIMA_PASSWORD:
            raise ValueError(f'La contraseña debe tener al menos {LONGITUD_MINIMA_PASSWORD} caracteres')
        return v


class UsuarioLogin(BaseModel):
    """Login con nombre de usuario o email"""
    nombre_usuario: str
    password: str


# ============================================
# SCHEMAS DE RESPUESTA
# ============================================


class UsuarioRespuesta(BaseModel):
    id: int
    nombre_usuario: str
    email: str
    fecha_creacion: Optional[datetime] = None

    class Config:
        from_attributes = True


class TokenRespuesta(BaseModel):
    access_token: str
    token_type: str = "bearer"
    usuario: UsuarioRespuesta
