"""Application layer: interfaces, DTOs, authorization engine and services.

Depends only on domain and protocol definitions (DIP).
"""
