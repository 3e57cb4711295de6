"""Capa de servicios: descarga de blobs y orquestación del pipeline."""

__all__ = ["fetch", "pipeline"]
