import os
import shutil
import tempfile

# La configuración se lee al importar classclash: definir el entorno antes
_DIRECTORIO_PRUEBAS = tempfile.mkdtemp(prefix="classclash_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DIRECTORIO_PRUEBAS, 'pruebas.db')}"
os.environ.setdefault("SECRET_KEY", "clave-de-pruebas")
os.environ.setdefault("TEMPORIZADOR_EXCLUSIVO", "true")


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_DIRECTORIO_PRUEBAS, ignore_errors=True)
