"""Core de FjordVind: configuración, dominio, contratos y servicios."""
