from typing import Optional

from .errores import ErrorValidacion

LONGITUD_MINIMA_PASSWORD = 6
LONGITUD_MAXIMA_COMENTARIO = 1000


def limpiar_texto(texto: Optional[str]) -> str:
    """Quitar espacios sobrantes al inicio y al final"""
    if not texto:
        return ""
    return texto.strip()


def validar_nombre_clase(nombre: Optional[str]) -> str:
    """Retorna el nombre limpio o lanza ErrorValidacion si está vacío"""
    nombre_limpio = limpiar_texto(nombre)
    if not nombre_limpio:
        raise ErrorValidacion("El nombre de la clase es obligatorio")
    return nombre_limpio


def validar_contenido_comentario(contenido: Optional[str]) -> str:
    contenido_limpio = limpiar_texto(contenido)
    if not contenido_limpio:
        raise ErrorValidacion("El contenido del comentario es obligatorio")
    if len(contenido) > LONGITUD_MAXIMA_COMENTARIO:
        raise ErrorValidacion(
            f"El comentario no puede exceder {LONGITUD_MAXIMA_COMENTARIO} caracteres"
        )
    return contenido_limpio


def validar_segundos(segundos) -> int:
    """
    Los segundos reportados deben ser un entero no negativo.
    bool se rechaza aunque sea subclase de int.
    """
    if segundos is None:
        raise ErrorValidacion("segundos es obligatorio")
    if isinstance(segundos, bool) or not isinstance(segundos, int):
        raise ErrorValidacion("segundos debe ser un número entero")
    if segundos < 0:
        raise ErrorValidacion("segundos debe ser mayor o igual a 0")
    return segundos


def validar_identificador(valor, campo: str) -> int:
    if valor is None:
        raise ErrorValidacion(f"{campo} es obligatorio")
    if isinstance(valor, bool) or not isinstance(valor, int) or valor < 1:
        raise ErrorValidacion(f"{campo} debe ser un identificador válido")
    return valor
