"""Servicios del Core (superficie de comandos invocables por el host)."""
