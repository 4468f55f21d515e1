import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()

API_TITLE = os.getenv("ONTOLOGY_API_TITLE", "Ontology API")
API_VERSION = os.getenv("ONTOLOGY_API_VERSION", "1.0.0")
COLLISION_POLICY = os.getenv("ONTOLOGY_COLLISION_POLICY", "overwrite")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
    if origin.strip()
]
