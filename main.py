#!/usr/bin/env python3
"""
Phototherapy Settings Generator — Main Entry Point
===================================================
Launches the FastAPI backend (and the browser form at /) with Uvicorn.
Run with:  python main.py

⚠️  DISCLAIMER: The phototype estimate and the LED / infrared settings are
    HEURISTICS derived from the average colour of a photo.  They are not
    a medical assessment.  Validate every value with a health professional
    before applying it to a lamp or smart plug.
"""

import uvicorn

from api.app import create_app
from config import API_HOST, API_PORT

if __name__ == "__main__":
    app = create_app()
    uvicorn.run(
        app,
        host=API_HOST,
        port=API_PORT,
        reload=False,
        log_level="info",
    )
