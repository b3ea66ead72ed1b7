"""
Aplicação FastAPI principal
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from ambiental import __version__
from ambiental.config import settings
from ambiental.api import datasets, charts
import logging

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Monitor Ambiental API",
    description="API para carga e visualização de amostras de temperatura, umidade e CO2",
    version=__version__
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Rotas
app.include_router(datasets.router, prefix=settings.API_V1_PREFIX)
app.include_router(charts.router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    return {
        "message": "Monitor Ambiental API",
        "version": __version__,
        "status": "running"
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}
