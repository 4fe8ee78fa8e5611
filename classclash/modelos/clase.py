from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..utilidades.base_datos import Base


class Clase(Base):
    __tablename__ = "clases"

    id = Column(Integer, primary_key=True, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)

    nombre = Column(String(255), nullable=False)

    fecha_creacion = Column(DateTime(timezone=True), server_default=func.now())

    usuario = relationship("Usuario", back_populates="clases")
    sesiones_estudio = relationship("SesionEstudio", back_populates="clase", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Clase(id={self.id}, nombre='{self.nombre}', usuario_id={self.usuario_id})>"
