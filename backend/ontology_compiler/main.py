from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ontology_compiler import config
from ontology_compiler.api.routes import router
from ontology_compiler.logging_config import configure_logging

configure_logging()

app = FastAPI(
    title="Ontology Interface Compiler",
    version="0.1.0",
)

# Middleware FIRST
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes AFTER middleware
app.include_router(router)
