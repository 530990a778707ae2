"""Adaptadores de infraestructura (HTTP, ficheros, stdio).

Aquí vive todo el I/O; el Core solo conoce modelos y contratos.
"""
