#!/usr/bin/env python3
"""
microthemes - Quick Start Script

Run this script to start the microthemes server.
"""
import sys
import os

# Add the project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

if __name__ == "__main__":
    import uvicorn
    from microthemes.config import get_settings

    settings = get_settings()

    print("=" * 50)
    print("microthemes")
    print("=" * 50)
    print(f"Server starting at http://{settings.host}:{settings.port}")
    print(f"Default theme: {settings.default_theme}")
    print(f"Microsites: {settings.microsites_root}")
    print("=" * 50)

    uvicorn.run(
        "microthemes.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
