"""
ASGI entry point for the FastAPI application.
Point uvicorn, gunicorn or a hosting platform at `asgi:application`.
"""

from main import app

# Export the app for ASGI servers
application = app

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(application, host="0.0.0.0", port=app.state.settings.port)
