from fastapi import FastAPI

from taskhub.logconfig import configure_logging
from taskhub.routes.auth import router as auth_router
from taskhub.routes.health import router as health_router
from taskhub.routes.orgs import router as orgs_router
from taskhub.routes.tasks import router as tasks_router
from taskhub.routes.users import router as users_router

def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title="taskhub", version="0.1.0")
    app.include_router(health_router)
    app.include_router(auth_router)
    app.include_router(orgs_router)
    app.include_router(users_router)
    app.include_router(tasks_router)
    return app

app = create_app()
