"""ColorSense: descripciones libres de color -> datos de color estructurados."""

__version__ = "0.1.0"
