#!/usr/bin/env python3
"""
WSGI entry point for the school management API.
Run it under a single worker process: every record and session lives in
this process's memory.
"""

from app import create_app

# Create the application instance
app = create_app()

if __name__ == "__main__":
    app.run()
