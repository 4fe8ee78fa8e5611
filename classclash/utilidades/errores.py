"""
Excepciones de dominio de ClassClash.

Los servicios lanzan estas excepciones; la capa HTTP (classclash.main) las
traduce a respuestas JSON con el mismo formato que HTTPException.
"""
from fastapi import status


class ErrorClassClash(Exception):
    """Error base con un mensaje apto para mostrar al usuario"""
    codigo = status.HTTP_400_BAD_REQUEST

    def __init__(self, mensaje: str):
        super().__init__(mensaje)
        self.mensaje = mensaje


class ErrorValidacion(ErrorClassClash):
    """Datos inválidos: segundos negativos, id faltante, fecha mal formada"""
    codigo = status.HTTP_400_BAD_REQUEST


class ErrorNoEncontrado(ErrorClassClash):
    """El recurso no existe o no pertenece al usuario"""
    codigo = status.HTTP_404_NOT_FOUND


class ErrorAlmacen(ErrorClassClash):
    """Fallo de persistencia; el detalle interno solo va al log"""
    codigo = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, mensaje: str = "Error al acceder a la base de datos"):
        super().__init__(mensaje)
