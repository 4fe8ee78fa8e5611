import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from classclash.utilidades.configuracion import configuracion
from classclash.utilidades.base_datos import crear_tablas
from classclash.utilidades.errores import ErrorClassClash, ErrorAlmacen
from classclash.esquemas.respuestas import RespuestaError
from classclash.rutas import (
    autenticacion,
    clases,
    sesiones,
    leaderboard,
    temporizadores,
    comentarios,
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"

app = FastAPI(
    title="ClassClash API",
    description="API para medir tiempo de estudio por clase y competir en el leaderboard semanal",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=configuracion.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    max_age=3600,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    method = request.method
    path = request.url.path

    logger.debug(f"IN {method} {path}")

    response = await call_next(request)

    logger.info(f"{method} {path} | Status: {response.status_code}")

    return response


@app.on_event("startup")
async def startup_event():
    logger.info(f"Iniciando ClassClash API v{VERSION}")
    crear_tablas()
    logger.info("ClassClash API lista")


app.include_router(autenticacion.router, prefix="/api/v1")
app.include_router(clases.router, prefix="/api/v1")
app.include_router(sesiones.router, prefix="/api/v1")
app.include_router(leaderboard.router, prefix="/api/v1")
app.include_router(temporizadores.router, prefix="/api/v1")
app.include_router(comentarios.router, prefix="/api/v1")


@app.get("/", tags=["General"])
async def root():
    return {
        "nombre": "ClassClash API",
        "version": VERSION,
        "estado": "activo",
        "documentacion": "/docs",
        "salud": "/health"
    }


@app.get("/health", tags=["General"])
async def health_check():
    return {
        "estado": "ok",
        "mensaje": "ClassClash API funcionando",
        "version": VERSION
    }


def _respuesta_error(codigo: int, mensaje, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=codigo,
        content=RespuestaError(mensaje=mensaje, codigo=codigo).model_dump(),
        headers=headers
    )


@app.exception_handler(ErrorClassClash)
async def error_dominio_handler(request: Request, exc: ErrorClassClash):
    if isinstance(exc, ErrorAlmacen):
        logger.error(f"Error de almacenamiento en {request.method} {request.url.path}: {exc.mensaje}")
    return _respuesta_error(exc.codigo, exc.mensaje)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return _respuesta_error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errores = "; ".join(
        f"{'.'.join(str(p) for p in error.get('loc', []))}: {error.get('msg')}"
        for error in exc.errors()
    )
    return _respuesta_error(422, f"Datos inválidos: {errores}")


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Error no manejado en {request.method} {request.url.path}: {exc}")
    return _respuesta_error(500, "Error interno del servidor")
