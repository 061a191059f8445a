#!/usr/bin/env python3
"""
Clip Search Gateway Server — entrypoint for uvicorn server.server:app.

For uvicorn server:app use server/__init__.py (exposes app from server.app).
"""

from .app import app

if __name__ == "__main__":
    import uvicorn
    from .config import get_config

    config = get_config()
    uvicorn.run(app, host=config.host, port=config.port)
