"""
api/app.py — FastAPI application factory
==========================================
Creates and configures the FastAPI instance.  All configuration is
centralised here so that `main.py` stays minimal.

Session
-------
Each app instance owns one `TherapySession` on `app.state.session`; the
routes reach it through the `get_session` dependency.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router
from api.session import TherapySession
from config import API_TITLE, API_VERSION


def create_app() -> FastAPI:
    """
    Construct and return the configured FastAPI application.

    This is a *factory function* (rather than a module-level singleton)
    so that tests get an isolated app and session each time.
    """
    app = FastAPI(
        title=API_TITLE,
        version=API_VERSION,
        description=(
            "Turns a photo of the area to treat and a selected condition into "
            "suggested LED colour/intensity and infrared minutes. "
            "⚠️ HEURISTIC VALUES — validate clinically before use."
        ),
    )

    # ── CORS ────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],           # Restrict in production!
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.session = TherapySession()

    # ── Mount routes ────────────────────────────────────────────────────
    app.include_router(router)

    return app
