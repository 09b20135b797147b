from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings
from routes import games, games_ws
from services.engine import GameEngine
from services.game_hub import GameHub
from services.role_catalog import load_role_catalog
from services.store import SessionStore


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    catalog = load_role_catalog(settings.role_catalog_path)
    store = SessionStore(code_length=settings.game_code_length)

    app = FastAPI(title="Clocktower Assistant API", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings
    app.state.engine = GameEngine(store, catalog, player_id_length=settings.player_id_length)
    app.state.hub = GameHub()

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(games.router, prefix="/api")
    app.include_router(games_ws.router)
    return app


app = create_app()
