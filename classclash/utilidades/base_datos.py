import logging
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import QueuePool

from .configuracion import configuracion

logger = logging.getLogger(__name__)


def _crear_engine(database_url: str):
    if database_url.startswith("sqlite"):
        motor = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=False,
        )

        # SQLite no valida claves foraneas salvo que se pida por conexion
        @event.listens_for(motor, "connect")
        def _activar_claves_foraneas(conexion_dbapi, registro):
            cursor = conexion_dbapi.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return motor

    return create_engine(
        database_url,
        poolclass=QueuePool,
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=False,
        connect_args={
            "connect_timeout": 10,
            "application_name": "classclash_api"
        }
    )


engine = _crear_engine(configuracion.database_url)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False
)

Base = declarative_base()


def obtener_bd() -> Generator:
    """
    Dependency para obtener sesión de base de datos
    """
    db = SessionLocal()
    try:
        yield db
    except Exception as e:
        logger.error(f"Error en sesión de BD: {str(e)}")
        db.rollback()
        raise
    finally:
        db.close()


def crear_tablas():
    """
    Crear todas las tablas en la base de datos
    """
    # Importar modelos para registrarlos en Base.metadata
    from classclash.modelos import Usuario, Clase, SesionEstudio, Comentario, VotoComentario  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Tablas creadas/verificadas exitosamente")


def eliminar_tablas():
    """Eliminar todas las tablas (solo para pruebas y scripts)"""
    from classclash.modelos import Usuario, Clase, SesionEstudio, Comentario, VotoComentario  # noqa: F401

    Base.metadata.drop_all(bind=engine)


def verificar_conexion() -> bool:
    """Verificar conexión a la base de datos"""
    try:
        with engine.connect() as conexion:
            conexion.execute(text("SELECT 1"))
        logger.info("Conexión a la base de datos verificada")
        return True
    except Exception as e:
        logger.error(f"Error conectando a la base de datos: {str(e)}")
        return False
