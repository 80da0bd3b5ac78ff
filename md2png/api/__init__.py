
from . import render

routers = [
    render.router,
]

__all__ = [
    "routers",
]
