from .temporizador import (
    ControladorTemporizadores,
    EstadoTemporizador,
    RegistroTemporizadores,
    ReporteSesion,
    TemporizadorClase,
)
from .repositorio_sesiones import RepositorioSesiones
from .agregador_semanal import AgregadorSemanal, PosicionLeaderboard, SesionRegistrada
from .comentarios_servicio import ComentariosServicio

__all__ = [
    "ControladorTemporizadores",
    "EstadoTemporizador",
    "RegistroTemporizadores",
    "ReporteSesion",
    "TemporizadorClase",
    "RepositorioSesiones",
    "AgregadorSemanal",
    "PosicionLeaderboard",
    "SesionRegistrada",
    "ComentariosServicio",
]
