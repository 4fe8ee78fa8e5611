"""
Motor de temporizadores por clase.

Cada clase tiene un TemporizadorClase con tres estados (inactivo, corriendo,
detenido). El tiempo transcurrido nunca se cuenta por ticks: se recalcula a
partir del instante de inicio guardado, así que una consulta perdida o tardía
no pierde tiempo.
"""
import enum
import logging
import threading
import time
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class EstadoTemporizador(str, enum.Enum):
    INACTIVO = "idle"
    CORRIENDO = "running"
    DETENIDO = "stopped"


@dataclass
class TemporizadorClase:
    clase_id: int
    nombre: str
    segundos_guardados: float = 0.0
    segundos_sesion: float = 0.0
    # Instante (reloj de pared) en que empezó la corrida actual
    inicio: Optional[float] = None
    estado: EstadoTemporizador = EstadoTemporizador.INACTIVO

    @property
    def corriendo(self) -> bool:
        return self.estado == EstadoTemporizador.CORRIENDO


@dataclass(frozen=True)
class ReporteSesion:
    """Reporte emitido al guardar; se registra como SesionEstudio"""
    clase_id: int
    segundos: int




class ControladorTemporizadores:
    """
    Colección de temporizadores de un usuario, indexada por clase_id.

    Las acciones sobre una clase desconocida, o en un estado donde no aplican,
    no hacen nada: la interfaz puede llamar con referencias obsoletas.

    Con `exclusivo=True` solo un temporizador puede estar corriendo: iniciar o
    reanudar uno detiene cualquier otro que esté corriendo.

    Las rutas síncronas de FastAPI corren en un pool de hilos; todo acceso a
    la colección pasa por `_lock`.
    """

    def __init__(self, reloj: Callable[[], float] = time.time, exclusivo: bool = True):
        self._reloj = reloj
        self.exclusivo = exclusivo
        self._temporizadores: Dict[int, TemporizadorClase] = {}
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Colección
    # ------------------------------------------------------------------

    def registrar(self, clase_id: int, nombre: str) -> TemporizadorClase:
        """Crea el temporizador de la clase; si ya existe lo retorna intacto"""
        with self._lock:
            temporizador = self._temporizadores.get(clase_id)
            if temporizador is None:
                temporizador = TemporizadorClase(clase_id=clase_id, nombre=nombre)
                self._temporizadores[clase_id] = temporizador
                logger.debug(f"Temporizador registrado para clase {clase_id} ('{nombre}')")
            return temporizador

    def eliminar(self, clase_id: int) -> None:
        with self._lock:
            self._temporizadores.pop(clase_id, None)

    def copia(self, clase_id: int) -> Optional[TemporizadorClase]:
        """Copia independiente del temporizador, útil como respaldo"""
        with self._lock:
            temporizador = self._temporizadores.get(clase_id)
            return replace(temporizador) if temporizador is not None else None

    def restaurar(self, respaldo: TemporizadorClase) -> None:
        """Reemplaza el temporizador de la clase por una copia previa"""
        with self._lock:
            self._temporizadores[respaldo.clase_id] = respaldo

    def obtener(self, clase_id: int) -> Optional[TemporizadorClase]:
        with self._lock:
            return self._temporizadores.get(clase_id)

    def listar(self) -> List[TemporizadorClase]:
        with self._lock:
            return list(self._temporizadores.values())

    def __contains__(self, clase_id) -> bool:
        with self._lock:
            return clase_id in self._temporizadores

    def __len__(self) -> int:
        with self._lock:
            return len(self._temporizadores)

    def temporizador_activo(self) -> Optional[TemporizadorClase]:
        """Primer temporizador corriendo, o None"""
        with self._lock:
            for temporizador in self._temporizadores.values():
                if temporizador.corriendo:
                    return temporizador
            return None

    # ------------------------------------------------------------------
    # Consultas
    # ------------------------------------------------------------------

    def _transcurrido(self, temporizador: TemporizadorClase) -> float:
        # Un reloj que retrocede no puede restar tiempo
        return max(0.0, self._reloj() - temporizador.inicio)

    def segundos_en_vivo(self, clase_id: int) -> float:
        """
        Segundos de la sesión actual sin modificar el estado: lo acumulado
        más la corrida en curso si está corriendo.
        """
        with self._lock:
            temporizador = self._temporizadores.get(clase_id)
            if temporizador is None:
                return 0.0
            if temporizador.corriendo and temporizador.inicio is not None:
                return temporizador.segundos_sesion + self._transcurrido(temporizador)
            return temporizador.segundos_sesion

    # ------------------------------------------------------------------
    # Transiciones
    # ------------------------------------------------------------------

    def _correr(self, temporizador: TemporizadorClase) -> None:
        # Llamar con _lock tomado
        if self.exclusivo:
            for otro in self._temporizadores.values():
                if otro is not temporizador and otro.corriendo:
                    logger.info(f"Deteniendo temporizador de clase {otro.clase_id} para correr {temporizador.clase_id}")
                    self._detener(otro)
        temporizador.inicio = self._reloj()
        temporizador.estado = EstadoTemporizador.CORRIENDO

    def _detener(self, temporizador: TemporizadorClase) -> None:
        temporizador.segundos_sesion += self._transcurrido(temporizador)
        temporizador.inicio = None
        temporizador.estado = EstadoTemporizador.DETENIDO

    def iniciar(self, clase_id: int) -> Optional[TemporizadorClase]:
        """Inactivo -> corriendo"""
        with self._lock:
            temporizador = self._temporizadores.get(clase_id)
            if temporizador is None or temporizador.estado != EstadoTemporizador.INACTIVO:
                return temporizador
            self._correr(temporizador)
            logger.debug(f"Iniciado temporizador de clase {clase_id} en {temporizador.inicio}")
            return temporizador

    def detener(self, clase_id: int) -> Optional[TemporizadorClase]:
        """Corriendo -> detenido, acumulando la corrida en segundos_sesion"""
        with self._lock:
            temporizador = self._temporizadores.get(clase_id)
            if temporizador is None or not temporizador.corriendo:
                return temporizador
            self._detener(temporizador)
            logger.debug(f"Detenido temporizador de clase {clase_id} con {temporizador.segundos_sesion:.1f}s en sesión")
            return temporizador

    # Salir de la vista de una clase equivale a detenerla
    abandonar = detener

    def reanudar(self, clase_id: int) -> Optional[TemporizadorClase]:
        """Detenido -> corriendo"""
        with self._lock:
            temporizador = self._temporizadores.get(clase_id)
            if temporizador is None or temporizador.estado != EstadoTemporizador.DETENIDO:
                return temporizador
            self._correr(temporizador)
            logger.debug(f"Reanudado temporizador de clase {clase_id}")
            return temporizador

    def guardar(self, clase_id: int) -> Optional[ReporteSesion]:
        """
        Detenido -> inactivo. Si el temporizador está corriendo se detiene
        primero. Retorna None si no aplica.

        El reporte lleva los segundos enteros de la sesión y esos mismos
        segundos se suman a segundos_guardados, así el total en memoria
        coincide con lo persistido. La fracción de segundo se descarta.
        """
        with self._lock:
            temporizador = self._temporizadores.get(clase_id)
            if temporizador is None or temporizador.estado == EstadoTemporizador.INACTIVO:
                return None
            if temporizador.corriendo:
                self._detener(temporizador)

            segundos = int(temporizador.segundos_sesion)
            temporizador.segundos_guardados += segundos
            temporizador.segundos_sesion = 0.0
            temporizador.inicio = None
            temporizador.estado = EstadoTemporizador.INACTIVO

            logger.info(f"Guardada sesión de {segundos}s para clase {clase_id}")
            return ReporteSesion(clase_id=clase_id, segundos=segundos)

    def descartar(self, clase_id: int) -> Optional[TemporizadorClase]:
        """Detenido o corriendo -> inactivo, sin reporte"""
        with self._lock:
            temporizador = self._temporizadores.get(clase_id)
            if temporizador is None or temporizador.estado == EstadoTemporizador.INACTIVO:
                return temporizador
            temporizador.segundos_sesion = 0.0
            temporizador.inicio = None
            temporizador.estado = EstadoTemporizador.INACTIVO
            logger.debug(f"Descartada sesión de clase {clase_id}")
            return temporizador


class RegistroTemporizadores:
    """Un ControladorTemporizadores por usuario, creado bajo demanda"""

    def __init__(self, reloj: Callable[[], float] = time.time, exclusivo: bool = True):
        self._reloj = reloj
        self._exclusivo = exclusivo
        self._controladores: Dict[int, ControladorTemporizadores] = {}
        self._lock = threading.Lock()

    def para_usuario(self, usuario_id: int) -> ControladorTemporizadores:
        with self._lock:
            controlador = self._controladores.get(usuario_id)
            if controlador is None:
                controlador = ControladorTemporizadores(reloj=self._reloj, exclusivo=self._exclusivo)
                self._controladores[usuario_id] = controlador
            return controlador

    def limpiar(self) -> None:
        with self._lock:
            self._controladores.clear()
