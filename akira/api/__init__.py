from .routers import api
