"""Pruebas de la API HTTP con TestClient"""
import unittest
from datetime import date
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from classclash.main import app
from classclash.rutas.temporizadores import obtener_registro_temporizadores
from classclash.servicios.repositorio_sesiones import RepositorioSesiones
from classclash.servicios.temporizador import RegistroTemporizadores
from classclash.utilidades.semanas import formatear_semana, inicio_semana
from tests.utilidades_pruebas import PruebaConBaseDatos, RelojFalso

API = "/api/v1"


class PruebaAPI(PruebaConBaseDatos):

    def setUp(self):
        super().setUp()
        self.reloj = RelojFalso()
        self.registro = RegistroTemporizadores(reloj=self.reloj, exclusivo=True)
        app.dependency_overrides[obtener_registro_temporizadores] = lambda: self.registro
        self.cliente = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        super().tearDown()

    def registrar(self, nombre="ana", password="secreto123"):
        respuesta = self.cliente.post(f"{API}/auth/registro", json={
            "nombre_usuario": nombre,
            "email": f"{nombre}@ejemplo.com",
            "password": password,
        })
        self.assertEqual(respuesta.status_code, 201, respuesta.text)
        datos = respuesta.json()
        return {"Authorization": f"Bearer {datos['access_token']}"}, datos["usuario"]

    def crear_clase(self, headers, nombre="Cálculo"):
        respuesta = self.cliente.post(f"{API}/clases/", json={"nombre": nombre}, headers=headers)
        self.assertEqual(respuesta.status_code, 201, respuesta.text)
        return respuesta.json()["datos"]


class TestGeneral(PruebaAPI):

    def test_health(self):
        respuesta = self.cliente.get("/health")
        self.assertEqual(respuesta.status_code, 200)
        self.assertEqual(respuesta.json()["estado"], "ok")


class TestAutenticacion(PruebaAPI):

    def test_registro_y_perfil(self):
        headers, usuario = self.registrar()
        respuesta = self.cliente.get(f"{API}/auth/yo", headers=headers)
        self.assertEqual(respuesta.status_code, 200)
        self.assertEqual(respuesta.json()["nombre_usuario"], "ana")
        self.assertEqual(respuesta.json()["id"], usuario["id"])

    def test_registro_duplicado(self):
        self.registrar()
        respuesta = self.cliente.post(f"{API}/auth/registro", json={
            "nombre_usuario": "ana",
            "email": "otra@ejemplo.com",
            "password": "secreto123",
        })
        self.assertEqual(respuesta.status_code, 409)
        self.assertTrue(respuesta.json()["error"])

    def test_password_corta(self):
        respuesta = self.cliente.post(f"{API}/auth/registro", json={
            "nombre_usuario": "ana",
            "email": "ana@ejemplo.com",
            "password": "123",
        })
        self.assertEqual(respuesta.status_code, 422)

    def test_login_con_usuario_o_email(self):
        self.registrar()
        for identificador in ("ana", "ana@ejemplo.com"):
            respuesta = self.cliente.post(f"{API}/auth/login", json={
                "nombre_usuario": identificador,
                "password": "secreto123",
            })
            self.assertEqual(respuesta.status_code, 200, identificador)
            self.assertIn("access_token", respuesta.json())

    def test_login_invalido(self):
        self.registrar()
        respuesta = self.cliente.post(f"{API}/auth/login", json={
            "nombre_usuario": "ana",
            "password": "incorrecta",
        })
        self.assertEqual(respuesta.status_code, 401)
        self.assertEqual(respuesta.json()["mensaje"], "Credenciales inválidas")

    def test_token_invalido(self):
        respuesta = self.cliente.get(f"{API}/auth/yo", headers={"Authorization": "Bearer basura"})
        self.assertEqual(respuesta.status_code, 401)


class TestClases(PruebaAPI):

    def test_crear_y_listar(self):
        headers, usuario = self.registrar()
        clase = self.crear_clase(headers, "  Historia  ")
        self.assertEqual(clase["nombre"], "Historia")
        self.assertEqual(clase["usuario_id"], usuario["id"])

        respuesta = self.cliente.get(f"{API}/clases/", headers=headers)
        self.assertEqual([c["id"] for c in respuesta.json()["clases"]], [clase["id"]])

    def test_nombre_vacio(self):
        headers, _ = self.registrar()
        respuesta = self.cliente.post(f"{API}/clases/", json={"nombre": "   "}, headers=headers)
        self.assertEqual(respuesta.status_code, 400)
        self.assertEqual(respuesta.json()["mensaje"], "El nombre de la clase es obligatorio")

    def test_clase_ajena_no_visible(self):
        headers_ana, _ = self.registrar("ana")
        headers_beto, _ = self.registrar("beto")
        clase = self.crear_clase(headers_ana)

        respuesta = self.cliente.get(f"{API}/clases/{clase['id']}", headers=headers_beto)
        self.assertEqual(respuesta.status_code, 404)

    def test_requiere_token(self):
        respuesta = self.cliente.get(f"{API}/clases/")
        self.assertIn(respuesta.status_code, (401, 403))


class TestSesiones(PruebaAPI):

    def test_registrar_y_total_semanal(self):
        headers, _ = self.registrar()
        clase = self.crear_clase(headers)

        for segundos in (120, 300):
            respuesta = self.cliente.post(f"{API}/sesiones/", json={
                "clase_id": clase["id"],
                "segundos": segundos,
                "semana_inicio": "2025-06-02",
            }, headers=headers)
            self.assertEqual(respuesta.status_code, 201, respuesta.text)
            self.assertEqual(respuesta.json()["semana_inicio"], "2025-06-02")

        respuesta = self.cliente.get(
            f"{API}/sesiones/semanal/{clase['id']}",
            params={"semana_inicio": "2025-06-02"},
            headers=headers
        )
        self.assertEqual(respuesta.status_code, 200)
        self.assertEqual(respuesta.json()["total_segundos"], 420)
        self.assertEqual(respuesta.json()["tiempo_formateado"], "7m 00s")

    def test_semana_se_normaliza_al_lunes(self):
        headers, _ = self.registrar()
        clase = self.crear_clase(headers)
        respuesta = self.cliente.post(f"{API}/sesiones/", json={
            "clase_id": clase["id"],
            "segundos": 10,
            "semana_inicio": "2025-06-08",
        }, headers=headers)
        self.assertEqual(respuesta.json()["semana_inicio"], "2025-06-02")

    def test_semana_por_defecto(self):
        headers, _ = self.registrar()
        clase = self.crear_clase(headers)
        respuesta = self.cliente.post(f"{API}/sesiones/", json={
            "clase_id": clase["id"],
            "segundos": 10,
        }, headers=headers)
        self.assertEqual(respuesta.json()["semana_inicio"], formatear_semana(inicio_semana(date.today())))

    def test_segundos_negativos(self):
        headers, _ = self.registrar()
        clase = self.crear_clase(headers)
        respuesta = self.cliente.post(f"{API}/sesiones/", json={
            "clase_id": clase["id"],
            "segundos": -5,
        }, headers=headers)
        self.assertEqual(respuesta.status_code, 400)
        self.assertTrue(respuesta.json()["error"])

    def test_segundos_no_enteros(self):
        headers, _ = self.registrar()
        clase = self.crear_clase(headers)
        for valor in (12.5, "10", True):
            respuesta = self.cliente.post(f"{API}/sesiones/", json={
                "clase_id": clase["id"],
                "segundos": valor,
            }, headers=headers)
            self.assertEqual(respuesta.status_code, 400, valor)
            self.assertEqual(respuesta.json()["codigo"], 400)

    def test_clase_faltante(self):
        headers, _ = self.registrar()
        respuesta = self.cliente.post(f"{API}/sesiones/", json={"segundos": 5}, headers=headers)
        self.assertEqual(respuesta.status_code, 400)

    def test_semana_mal_formada(self):
        headers, _ = self.registrar()
        clase = self.crear_clase(headers)
        respuesta = self.cliente.post(f"{API}/sesiones/", json={
            "clase_id": clase["id"],
            "segundos": 5,
            "semana_inicio": "junio",
        }, headers=headers)
        self.assertEqual(respuesta.status_code, 400)

    def test_clase_ajena(self):
        headers_ana, _ = self.registrar("ana")
        headers_beto, _ = self.registrar("beto")
        clase = self.crear_clase(headers_ana)
        respuesta = self.cliente.post(f"{API}/sesiones/", json={
            "clase_id": clase["id"],
            "segundos": 5,
        }, headers=headers_beto)
        self.assertEqual(respuesta.status_code, 404)

    def test_total_sin_sesiones(self):
        headers, _ = self.registrar()
        respuesta = self.cliente.get(f"{API}/sesiones/semanal/12345", headers=headers)
        self.assertEqual(respuesta.status_code, 200)
        self.assertEqual(respuesta.json()["total_segundos"], 0)

    def test_totales_semanales(self):
        headers, _ = self.registrar()
        algebra = self.crear_clase(headers, "Álgebra")
        self.crear_clase(headers, "Sin sesiones")
        self.cliente.post(f"{API}/sesiones/", json={
            "clase_id": algebra["id"], "segundos": 90, "semana_inicio": "2025-06-02"
        }, headers=headers)

        respuesta = self.cliente.get(f"{API}/sesiones/semanal", params={"semana_inicio": "2025-06-04"}, headers=headers)
        datos = respuesta.json()
        self.assertEqual(datos["semana_inicio"], "2025-06-02")
        self.assertEqual(datos["totales"], {str(algebra["id"]): 90})
        self.assertEqual(datos["total_segundos"], 90)


class TestLeaderboard(PruebaAPI):

    def test_leaderboard_publico(self):
        headers, usuario = self.registrar()
        clase = self.crear_clase(headers)
        self.cliente.post(f"{API}/sesiones/", json={
            "clase_id": clase["id"], "segundos": 3700, "semana_inicio": "2025-06-02"
        }, headers=headers)

        respuesta = self.cliente.get(f"{API}/leaderboard/{clase['id']}", params={"semana_inicio": "2025-06-02"})
        self.assertEqual(respuesta.status_code, 200)
        tabla = respuesta.json()["leaderboard"]
        self.assertEqual(len(tabla), 1)
        self.assertEqual(tabla[0]["posicion"], 1)
        self.assertEqual(tabla[0]["usuario_id"], usuario["id"])
        self.assertEqual(tabla[0]["tiempo_formateado"], "1h 01m 40s")

    def test_leaderboard_sin_tiempo(self):
        headers, _ = self.registrar()
        clase = self.crear_clase(headers)
        self.cliente.post(f"{API}/sesiones/", json={
            "clase_id": clase["id"], "segundos": 0, "semana_inicio": "2025-06-02"
        }, headers=headers)

        respuesta = self.cliente.get(f"{API}/leaderboard/{clase['id']}", params={"semana_inicio": "2025-06-02"})
        self.assertEqual(respuesta.json()["leaderboard"], [])


class TestTemporizadores(PruebaAPI):

    def accion(self, headers, clase_id, accion):
        respuesta = self.cliente.post(f"{API}/temporizadores/{clase_id}/{accion}", headers=headers)
        self.assertEqual(respuesta.status_code, 200, respuesta.text)
        return respuesta.json()

    def test_flujo_guardar_registra_sesion(self):
        headers, _ = self.registrar()
        clase = self.crear_clase(headers)

        self.accion(headers, clase["id"], "iniciar")
        self.reloj.avanzar(10)
        self.accion(headers, clase["id"], "detener")
        self.accion(headers, clase["id"], "reanudar")
        self.reloj.avanzar(15)

        respuesta = self.cliente.get(f"{API}/temporizadores/{clase['id']}", headers=headers)
        self.assertEqual(respuesta.json()["segundos_en_vivo"], 25)
        self.assertEqual(respuesta.json()["estado"], "running")

        self.accion(headers, clase["id"], "detener")
        datos = self.accion(headers, clase["id"], "guardar")
        self.assertEqual(datos["temporizador"]["estado"], "idle")
        self.assertEqual(datos["temporizador"]["segundos_guardados"], 25)
        self.assertEqual(datos["temporizador"]["segundos_sesion"], 0)
        self.assertEqual(datos["sesion"]["segundos"], 25)

        respuesta = self.cliente.get(f"{API}/sesiones/semanal/{clase['id']}", headers=headers)
        self.assertEqual(respuesta.json()["total_segundos"], 25)

    def test_descartar_no_registra(self):
        headers, _ = self.registrar()
        clase = self.crear_clase(headers)

        self.accion(headers, clase["id"], "iniciar")
        self.reloj.avanzar(50)
        datos = self.accion(headers, clase["id"], "descartar")
        self.assertEqual(datos["temporizador"]["segundos_en_vivo"], 0)
        self.assertIsNone(datos["sesion"])

        respuesta = self.cliente.get(f"{API}/sesiones/semanal/{clase['id']}", headers=headers)
        self.assertEqual(respuesta.json()["total_segundos"], 0)

    def test_guardar_en_inactivo_no_hace_nada(self):
        headers, _ = self.registrar()
        clase = self.crear_clase(headers)
        datos = self.accion(headers, clase["id"], "guardar")
        self.assertIsNone(datos["sesion"])
        self.assertEqual(datos["temporizador"]["estado"], "idle")

    def test_un_solo_temporizador_corriendo(self):
        headers, _ = self.registrar()
        primera = self.crear_clase(headers, "Primera")
        segunda = self.crear_clase(headers, "Segunda")

        self.accion(headers, primera["id"], "iniciar")
        self.reloj.avanzar(5)
        self.accion(headers, segunda["id"], "iniciar")

        respuesta = self.cliente.get(f"{API}/temporizadores/", headers=headers)
        datos = respuesta.json()
        self.assertEqual(datos["activo"], segunda["id"])
        estados = {t["clase_id"]: t["estado"] for t in datos["temporizadores"]}
        self.assertEqual(estados, {primera["id"]: "stopped", segunda["id"]: "running"})

    def test_clase_ajena_o_inexistente(self):
        headers_ana, _ = self.registrar("ana")
        headers_beto, _ = self.registrar("beto")
        clase = self.crear_clase(headers_ana)

        respuesta = self.cliente.post(f"{API}/temporizadores/{clase['id']}/iniciar", headers=headers_beto)
        self.assertEqual(respuesta.status_code, 404)
        respuesta = self.cliente.post(f"{API}/temporizadores/999/iniciar", headers=headers_ana)
        self.assertEqual(respuesta.status_code, 404)

    def test_listar_tras_reinicio_incluye_todas_las_clases(self):
        headers, _ = self.registrar()
        primera = self.crear_clase(headers, "Primera")
        segunda = self.crear_clase(headers, "Segunda")
        self.registro.limpiar()

        respuesta = self.cliente.get(f"{API}/temporizadores/", headers=headers)
        self.assertEqual(respuesta.status_code, 200)
        temporizadores = respuesta.json()["temporizadores"]
        self.assertEqual([t["clase_id"] for t in temporizadores], [primera["id"], segunda["id"]])
        self.assertTrue(all(t["estado"] == "idle" for t in temporizadores))

    def test_guardar_con_fallo_del_almacen_conserva_el_temporizador(self):
        headers, _ = self.registrar()
        clase = self.crear_clase(headers)
        self.accion(headers, clase["id"], "iniciar")
        self.reloj.avanzar(30)

        with patch.object(
            RepositorioSesiones, "insertar",
            side_effect=OperationalError("INSERT", {}, Exception("disco lleno"))
        ):
            respuesta = self.cliente.post(f"{API}/temporizadores/{clase['id']}/guardar", headers=headers)
        self.assertEqual(respuesta.status_code, 500)
        self.assertNotIn("disco lleno", respuesta.json()["mensaje"])

        respuesta = self.cliente.get(f"{API}/temporizadores/{clase['id']}", headers=headers)
        self.assertEqual(respuesta.json()["estado"], "running")
        self.assertEqual(respuesta.json()["segundos_en_vivo"], 30)
        self.assertEqual(respuesta.json()["segundos_guardados"], 0)

        respuesta = self.cliente.get(f"{API}/sesiones/semanal/{clase['id']}", headers=headers)
        self.assertEqual(respuesta.json()["total_segundos"], 0)

    def test_accion_desconocida(self):
        headers, _ = self.registrar()
        clase = self.crear_clase(headers)
        respuesta = self.cliente.post(f"{API}/temporizadores/{clase['id']}/pausar", headers=headers)
        self.assertEqual(respuesta.status_code, 422)

    def test_temporizador_creado_tras_reinicio(self):
        headers, _ = self.registrar()
        clase = self.crear_clase(headers)
        # Simula un reinicio del proceso: se pierden los temporizadores en memoria
        self.registro.limpiar()

        datos = self.accion(headers, clase["id"], "iniciar")
        self.assertEqual(datos["temporizador"]["estado"], "running")
        self.assertEqual(datos["temporizador"]["nombre"], "Cálculo")


class TestComentarios(PruebaAPI):

    def comentar(self, headers, contenido):
        respuesta = self.cliente.post(f"{API}/comentarios/", json={"contenido": contenido}, headers=headers)
        self.assertEqual(respuesta.status_code, 201, respuesta.text)
        return respuesta.json()

    def test_crear_y_listar_por_votos(self):
        headers_ana, _ = self.registrar("ana")
        headers_beto, _ = self.registrar("beto")
        primero = self.comentar(headers_ana, "Agregar modo oscuro")
        segundo = self.comentar(headers_beto, "Exportar sesiones")
        self.assertEqual(primero["nombre_usuario"], "ana")
        self.assertEqual(primero["votos"], 0)

        self.cliente.post(f"{API}/comentarios/{segundo['id']}/votar", headers=headers_ana)

        respuesta = self.cliente.get(f"{API}/comentarios/")
        ids = [c["id"] for c in respuesta.json()["comentarios"]]
        self.assertEqual(ids, [segundo["id"], primero["id"]])

    def test_votar_alterna(self):
        headers, _ = self.registrar()
        comentario = self.comentar(headers, "Sonido al terminar")
        url = f"{API}/comentarios/{comentario['id']}/votar"

        self.assertTrue(self.cliente.post(url, headers=headers).json()["votado"])
        self.assertFalse(self.cliente.post(url, headers=headers).json()["votado"])

        votos = self.cliente.get(f"{API}/comentarios/").json()["comentarios"][0]["votos"]
        self.assertEqual(votos, 0)

    def test_votar_inexistente(self):
        headers, _ = self.registrar()
        respuesta = self.cliente.post(f"{API}/comentarios/999/votar", headers=headers)
        self.assertEqual(respuesta.status_code, 404)

    def test_contenido_invalido(self):
        headers, _ = self.registrar()
        for contenido in ("   ", "x" * 1001):
            respuesta = self.cliente.post(f"{API}/comentarios/", json={"contenido": contenido}, headers=headers)
            self.assertEqual(respuesta.status_code, 400)

    def test_eliminar_solo_propios(self):
        headers_ana, _ = self.registrar("ana")
        headers_beto, _ = self.registrar("beto")
        comentario = self.comentar(headers_ana, "Estadísticas mensuales")
        url = f"{API}/comentarios/{comentario['id']}"

        self.assertEqual(self.cliente.delete(url, headers=headers_beto).status_code, 404)
        respuesta = self.cliente.delete(url, headers=headers_ana)
        self.assertEqual(respuesta.status_code, 200)
        self.assertTrue(respuesta.json()["exito"])
        self.assertEqual(self.cliente.get(f"{API}/comentarios/").json()["comentarios"], [])


if __name__ == "__main__":
    unittest.main()
