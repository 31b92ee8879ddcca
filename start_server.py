#!/usr/bin/env python3
"""
Startup script for the Taskboard backend
This script starts the FastAPI server with configuration from the environment
"""

import logging

import uvicorn

from taskboard.config.settings import settings

logger = logging.getLogger(__name__)


def main():
    host = settings.SERVER['host']
    port = settings.SERVER['port']
    reload = settings.SERVER['reload']

    logging.basicConfig(level=settings.LOG_LEVEL)
    logger.info(f"Starting Taskboard server on {host}:{port} (reload={reload})")

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower()
    )

if __name__ == "__main__":
    main()
