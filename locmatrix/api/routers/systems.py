from fastapi import APIRouter

SECRET_KEYS = {"CONTENTFUL_CMA_TOKEN"}


def create_systems_router(container_env: dict):
    """Create systems router with access to container environment config."""
    router = APIRouter(prefix="/systems", tags=["System"])

    @router.get("/health")
    def health():
        return {"status": "ok"}

    @router.get("/config")
    def get_config():
        """Return current environment configuration values, secrets redacted."""
        env = {}
        for key, value in container_env.items():
            if value is None:
                env[key] = None
            elif key in SECRET_KEYS:
                env[key] = "***"
            else:
                env[key] = str(value)
        return {"environment": env}

    return router
