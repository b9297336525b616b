from fastapi import FastAPI

from locmatrix.api.routers import create_matrix_router, create_systems_router


def create_app(container) -> FastAPI:
    """Build the FastAPI application from a wired container."""
    app = FastAPI(title="LocMatrix", description="Localization coverage matrix for linked content")
    app.state.container = container

    app.include_router(create_systems_router(container.config()))
    app.include_router(
        create_matrix_router(
            matrix_service=container.matrix_service(),
            locale_selection=container.locale_selection(),
        )
    )
    return app
