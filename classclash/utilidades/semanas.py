"""
Cálculo del inicio de semana (lunes 00:00) usado como clave de los totales
semanales. Las semanas se serializan como "YYYY-MM-DD".
"""
from datetime import date, datetime, timedelta
from typing import Optional, Union

from .errores import ErrorValidacion

FORMATO_SEMANA = "%Y-%m-%d"


def inicio_semana(fecha: Optional[Union[date, datetime]] = None) -> date:
    """
    Retorna el lunes de la semana ISO que contiene `fecha`, sin hora.

    Con domingo = 0 ... sábado = 6, el lunes está en
    dia_del_mes - dia + (-6 si dia == 0 si no 1); restar días con timedelta
    retrocede correctamente entre meses y años.
    """
    if fecha is None:
        fecha = date.today()
    if isinstance(fecha, datetime):
        fecha = fecha.date()

    dia = fecha.isoweekday() % 7
    desplazamiento = -6 if dia == 0 else 1 - dia
    return fecha + timedelta(days=desplazamiento)


def parsear_semana(texto: str) -> date:
    """Convierte "YYYY-MM-DD" en fecha; lanza ErrorValidacion si está mal formada"""
    if not isinstance(texto, str) or not texto.strip():
        raise ErrorValidacion("semana_inicio debe tener formato YYYY-MM-DD")
    try:
        return datetime.strptime(texto.strip(), FORMATO_SEMANA).date()
    except ValueError:
        raise ErrorValidacion(f"semana_inicio inválida: '{texto}'. Formato esperado YYYY-MM-DD")


def normalizar_semana(valor: Optional[Union[str, date, datetime]] = None) -> date:
    """
    Acepta None (semana actual), una fecha o un texto "YYYY-MM-DD" y
    retorna el lunes correspondiente.
    """
    if valor is None:
        return inicio_semana()
    if isinstance(valor, str):
        valor = parsear_semana(valor)
    return inicio_semana(valor)


def formatear_semana(semana: date) -> str:
    return semana.strftime(FORMATO_SEMANA)
