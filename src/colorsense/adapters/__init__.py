"""Adaptadores de I/O (proveedor IA, HTTP, exportación)."""
