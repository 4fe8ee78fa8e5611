# classclash/rutas/__init__.py
from . import autenticacion
from . import clases
from . import sesiones
from . import leaderboard
from . import temporizadores
from . import comentarios


__all__ = [
    'autenticacion',
    'clases',
    'sesiones',
    'leaderboard',
    'temporizadores',
    'comentarios',
]
