"""Superficies HTTP (FastAPI) de los dos servicios.

Cada módulo expone una factory `create_*_app` para que la CLI y los tests
construyan la aplicación con configuración y adaptadores explícitos.
"""
