# classclash/modelos/estudio.py
from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, CheckConstraint, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..utilidades.base_datos import Base


class SesionEstudio(Base):
    """
    Registro inmutable de segundos estudiados. Solo se insertan filas;
    los totales semanales se calculan sumando al consultar.
    """
    __tablename__ = "sesiones_estudio"
    __table_args__ = (
        CheckConstraint("segundos >= 0", name="ck_sesiones_estudio_segundos"),
        Index("ix_sesiones_estudio_semana", "usuario_id", "clase_id", "semana_inicio"),
    )

    id = Column(Integer, primary_key=True, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False)
    clase_id = Column(Integer, ForeignKey("clases.id", ondelete="CASCADE"), nullable=False)

    segundos = Column(Integer, nullable=False)
    # Lunes de la semana
    semana_inicio = Column(Date, nullable=False)

    fecha_creacion = Column(DateTime(timezone=True), server_default=func.now())

    usuario = relationship("Usuario", back_populates="sesiones_estudio")
    clase = relationship("Clase", back_populates="sesiones_estudio")

    def __repr__(self):
        return f"<SesionEstudio(usuario_id={self.usuario_id}, clase_id={self.clase_id}, segundos={self.segundos}s)>"
