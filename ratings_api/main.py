import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from ratings_api.config import get_settings
from ratings_api.database import engine
from ratings_api.errors import NotFound, register_exception_handlers
from ratings_api.models import Base
from ratings_api.routers import auth, ratings, employees, branches, users, public
from ratings_api.uploads import images_dir

VERSION = "1.0.0"


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # 1. CREACIÓN AUTOMÁTICA DE TABLAS
    Base.metadata.create_all(bind=engine)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Calificaciones de empleados por sucursal",
        version=VERSION,
    )
    app.state.settings = settings

    # 2. CONFIGURACIÓN DE CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 3. MANEJO DE ERRORES -> {"error": "..."}
    register_exception_handlers(app)

    # 4. REGISTRO DE ROUTERS (API)
    app.include_router(auth.router, tags=["Autenticación"])
    app.include_router(ratings.router, prefix="/ratings", tags=["Calificaciones"])
    app.include_router(employees.router, prefix="/employees", tags=["Empleados"])
    app.include_router(branches.router, prefix="/branches", tags=["Sucursales"])
    app.include_router(users.router, prefix="/users", tags=["Usuarios"])
    app.include_router(public.router, prefix="/api", tags=["Pantalla cliente"])

    @app.get("/", tags=["health"])
    async def root():
        return {"message": "API funcionando correctamente"}

    @app.get("/healthz", tags=["health"])
    async def healthz():
        return {"status": "ok", "env": settings.ENV, "version": VERSION}

    # 5. ARCHIVOS ESTÁTICOS (fotos subidas)
    app.mount(f"/{settings.IMAGES_SUBDIR}", StaticFiles(directory=images_dir()), name="images")

    # 6. PANTALLA CLIENTE: cualquier /<sucursal> devuelve la SPA (va al final)
    @app.get("/{branch}", include_in_schema=False)
    async def client_page(branch: str):
        page = os.path.join(settings.PUBLIC_DIR, "client.html")
        if not os.path.isfile(page):
            raise NotFound("Recurso no encontrado")
        return FileResponse(page, media_type="text/html")

    return app


app = create_app()
