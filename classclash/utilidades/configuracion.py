from pydantic_settings import BaseSettings
from typing import List


class Configuracion(BaseSettings):
    # Base de datos
    database_url: str = "sqlite:///./classclash.db"

    # Seguridad
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 7 * 24 * 60

    # Servidor
    host: str = "0.0.0.0"
    port: int = 3000
    debug: bool = False

    # CORS
    allowed_origins: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5500",
        "http://127.0.0.1:5500",
    ]

    # Leaderboard
    limite_leaderboard: int = 100

    # Temporizadores: un solo temporizador corriendo por usuario
    temporizador_exclusivo: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False


configuracion = Configuracion()
