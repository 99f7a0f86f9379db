"""
StudyShelf - study material sharing API

Entry point for the FastAPI application.
Logging is configured automatically by create_app() via logging_config.
"""
from studyshelf.core import create_app

# Create FastAPI application
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "studyshelf.main:app",
        host="0.0.0.0",
        port=5000,
        reload=True
    )
