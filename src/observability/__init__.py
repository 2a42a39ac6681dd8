"""Observabilidad compartida por ambos servicios (logging, métricas, request id)."""
