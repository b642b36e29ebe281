import os

from dotenv import load_dotenv

load_dotenv()

PORT = int(os.getenv("PORT", "5000"))

# Path to the Firebase service account JSON
FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS", "./firebase.json")

USE_IN_MEMORY_STORE = os.getenv("USE_IN_MEMORY_STORE", "false").lower() in ("1", "true", "yes")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
