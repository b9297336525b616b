from .matrix import create_matrix_router
from .systems import create_systems_router

__all__ = ["create_matrix_router", "create_systems_router"]
