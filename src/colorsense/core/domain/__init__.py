"""Dominio (modelos, value objects).

Por qué:
- Mantiene el Core independiente de frameworks (CLI/HTTP) y de proveedores IA.
"""
