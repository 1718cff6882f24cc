"""Core de ColorSense: dominio, contratos y servicios sin I/O concreto."""
