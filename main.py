"""
Powerplay - T20 Match Simulation API
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from powerplay.config import settings
from powerplay.database import init_db
from powerplay.logging_config import setup_logging
from powerplay.api.match import router as match_router
from powerplay.api.ratings import router as ratings_router
from powerplay.api.teams import router as teams_router

# Initialize FastAPI app
app = FastAPI(
    title="Powerplay",
    description="T20 Match Simulation and Player Rating API",
    version="0.1.0",
)

# CORS origins - local frontends plus any from CORS_ORIGINS
default_origins = [
    "http://localhost:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5173",
    "http://127.0.0.1:5174",
]
default_origins.extend(o for o in settings.CORS_ORIGINS if o not in default_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=default_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(ratings_router, prefix="/api")
app.include_router(match_router, prefix="/api")
app.include_router(teams_router, prefix="/api")


@app.on_event("startup")
def startup_event():
    """Configure logging and initialize database on startup"""
    setup_logging(settings.LOG_LEVEL)
    init_db()


@app.get("/")
def root():
    """Health check endpoint"""
    return {
        "name": "Powerplay API",
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/api/health")
def health_check():
    """API health check"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
