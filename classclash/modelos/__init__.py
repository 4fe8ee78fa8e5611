from .usuario import Usuario
from .clase import Clase
from .estudio import SesionEstudio
from .comentario import Comentario, VotoComentario

__all__ = [
    "Usuario",
    "Clase",
    "SesionEstudio",
    "Comentario",
    "VotoComentario",
]
