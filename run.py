# run.py
import logging
import os
import sys
from dotenv import load_dotenv

# Cargar variables de entorno
load_dotenv()

# Agregar directorio actual al path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))


def verificar_variables_entorno():
    """Verificar que las variables de entorno estén configuradas"""
    variables_requeridas = [
        'SECRET_KEY'
    ]

    variables_opcionales = {
        'DATABASE_URL': 'Se usará SQLite local (sqlite:///./classclash.db)',
    }

    faltantes = [var for var in variables_requeridas if not os.getenv(var)]

    if faltantes:
        print("\n Faltan variables de entorno REQUERIDAS:")
        for var in faltantes:
            print(f"   - {var}")
        print("\n Copia .env.example a .env y configura las variables necesarias")
        sys.exit(1)

    print(" Variables de entorno requeridas configuradas")

    advertencias = [
        f"    {var}: {mensaje}"
        for var, mensaje in variables_opcionales.items()
        if not os.getenv(var)
    ]
    if advertencias:
        print("\n  Variables opcionales no configuradas:")
        for adv in advertencias:
            print(adv)


def mostrar_info_servidor(host, port, debug):
    """Mostrar información del servidor"""
    display_host = "localhost" if host == "0.0.0.0" else host

    print("\n                     CLASSCLASH API")
    print(" URLs de acceso:")
    print(f"   • API Principal:    http://{display_host}:{port}")
    print(f"   • Documentación:    http://{display_host}:{port}/docs")
    print(f"   • Health Check:     http://{display_host}:{port}/health")
    print(f"\n Modo: {'DEBUG (auto-reload)' if debug else 'PRODUCCIÓN'}")
    print("\n Presiona CTRL+C para detener el servidor")


def main():
    """Función principal"""
    print(" Verificando configuración...\n")
    verificar_variables_entorno()

    from classclash.utilidades.configuracion import configuracion

    logging.basicConfig(
        level=logging.DEBUG if configuracion.debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )

    mostrar_info_servidor(
        configuracion.host,
        configuracion.port,
        configuracion.debug
    )

    import uvicorn

    uvicorn.run(
        "classclash.main:app",
        host=configuracion.host,
        port=configuracion.port,
        reload=configuracion.debug,
        log_level="info"
    )


if __name__ == "__main__":
    main()
