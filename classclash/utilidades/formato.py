def formatear_duracion(segundos: float) -> str:
    """Formatear segundos como "1h 02m 03s" o "4m 05s" """
    total = int(max(0, segundos))
    horas = total // 3600
    minutos = (total % 3600) // 60
    segundos_restantes = total % 60

    if horas > 0:
        return f"{horas}h {minutos:02d}m {segundos_restantes:02d}s"
    return f"{minutos}m {segundos_restantes:02d}s"


def formatear_duracion_corta(segundos: float) -> str:
    """Formatear segundos como "1h 02m" o "4m" """
    total = int(max(0, segundos))
    horas = total // 3600
    minutos = (total % 3600) // 60

    if horas > 0:
        return f"{horas}h {minutos:02d}m"
    return f"{minutos}m"
