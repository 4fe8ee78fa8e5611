"""Pruebas del cálculo de inicio de semana"""
import unittest
from datetime import date, datetime, timedelta
from unittest.mock import patch

from classclash.utilidades.errores import ErrorValidacion
from classclash.utilidades.semanas import (
    formatear_semana,
    inicio_semana,
    normalizar_semana,
    parsear_semana,
)


class TestInicioSemana(unittest.TestCase):

    def test_lunes_es_su_propio_inicio(self):
        self.assertEqual(inicio_semana(date(2025, 6, 2)), date(2025, 6, 2))

    def test_dias_de_la_semana(self):
        # 2025-06-02 es lunes; del martes al domingo vuelven a ese lunes
        for desplazamiento in range(7):
            dia = date(2025, 6, 2) + timedelta(days=desplazamiento)
            self.assertEqual(inicio_semana(dia), date(2025, 6, 2), dia)

    def test_domingo_retrocede_seis_dias(self):
        self.assertEqual(inicio_semana(date(2025, 6, 8)), date(2025, 6, 2))

    def test_cruza_limite_de_mes(self):
        # Domingo 1 de junio de 2025 -> lunes 26 de mayo
        self.assertEqual(inicio_semana(date(2025, 6, 1)), date(2025, 5, 26))

    def test_cruza_limite_de_anio(self):
        # Jueves 1 de enero de 2026 -> lunes 29 de diciembre de 2025
        self.assertEqual(inicio_semana(date(2026, 1, 1)), date(2025, 12, 29))

    def test_cruza_29_de_febrero(self):
        # Domingo 3 de marzo de 2024 -> lunes 26 de febrero
        self.assertEqual(inicio_semana(date(2024, 3, 3)), date(2024, 2, 26))

    def test_datetime_pierde_la_hora(self):
        resultado = inicio_semana(datetime(2025, 6, 5, 23, 59, 59))
        self.assertEqual(resultado, date(2025, 6, 2))
        self.assertNotIsInstance(resultado, datetime)

    def test_siempre_lunes_y_punto_fijo(self):
        dia = date(2023, 1, 1)
        for _ in range(800):
            semana = inicio_semana(dia)
            self.assertEqual(semana.weekday(), 0)
            self.assertEqual(inicio_semana(semana), semana)
            self.assertLessEqual((dia - semana).days, 6)
            dia += timedelta(days=1)

    def test_sin_fecha_usa_hoy(self):
        with patch("classclash.utilidades.semanas.date") as fecha_mock:
            fecha_mock.today.return_value = date(2025, 6, 4)
            self.assertEqual(inicio_semana(), date(2025, 6, 2))


class TestParseo(unittest.TestCase):

    def test_parsear_valido(self):
        self.assertEqual(parsear_semana("2025-06-02"), date(2025, 6, 2))

    def test_parsear_mal_formado(self):
        for texto in ("", "   ", "2025/06/02", "02-06-2025", "2025-13-01", "mañana"):
            with self.assertRaises(ErrorValidacion):
                parsear_semana(texto)

    def test_normalizar_texto_que_no_es_lunes(self):
        self.assertEqual(normalizar_semana("2025-06-05"), date(2025, 6, 2))

    def test_normalizar_fecha(self):
        self.assertEqual(normalizar_semana(date(2025, 6, 8)), date(2025, 6, 2))

    def test_formatear(self):
        self.assertEqual(formatear_semana(date(2025, 6, 2)), "2025-06-02")


if __name__ == "__main__":
    unittest.main()
