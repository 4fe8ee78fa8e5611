from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..utilidades.base_datos import Base


class Comentario(Base):
    __tablename__ = "comentarios"

    id = Column(Integer, primary_key=True, index=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False)

    contenido = Column(Text, nullable=False)
    votos = Column(Integer, nullable=False, default=0)

    fecha_creacion = Column(DateTime(timezone=True), server_default=func.now())

    usuario = relationship("Usuario", back_populates="comentarios")
    votos_usuarios = relationship("VotoComentario", back_populates="comentario", cascade="all, delete-orphan")

    @property
    def nombre_usuario(self):
        return self.usuario.nombre_usuario if self.usuario else None

    def __repr__(self):
        return f"<Comentario(id={self.id}, votos={self.votos})>"


class VotoComentario(Base):
    __tablename__ = "votos_comentarios"
    __table_args__ = (
        UniqueConstraint("comentario_id", "usuario_id", name="uq_voto_comentario_usuario"),
    )

    id = Column(Integer, primary_key=True, index=True)
    comentario_id = Column(Integer, ForeignKey("comentarios.id", ondelete="CASCADE"), nullable=False)
    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False)

    fecha_creacion = Column(DateTime(timezone=True), server_default=func.now())

    comentario = relationship("Comentario", back_populates="votos_usuarios")
