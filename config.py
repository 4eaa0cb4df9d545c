# config.py
import os
from dotenv import load_dotenv

load_dotenv()

MONGO_URI = os.getenv("MONGO_URI", "mongodb://127.0.0.1:27017/movieDB")
MONGO_DB_NAME = os.getenv("MONGO_DB_NAME", "movieDB")
MOVIES_COLLECTION = os.getenv("MOVIES_COLLECTION", "movies")
USERS_COLLECTION = os.getenv("USERS_COLLECTION", "users")
MONGO_TIMEOUT_MS = int(os.getenv("MONGO_TIMEOUT_MS", "5000"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
