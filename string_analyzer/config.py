import os
import logging
from dotenv import load_dotenv

load_dotenv()
logger = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# DATABASE
# ------------------------------------------------------------------------------

DATABASE_URL = os.getenv("DATABASE_URL")

if not DATABASE_URL:
    # Fallback for local dev
    logger.warning("DATABASE_URL not found in environment, using local SQLite file.")
    DATABASE_URL = "sqlite:///./strings.db"

# Hosting providers hand out plain mysql:// URLs
if DATABASE_URL.startswith("mysql://"):
    # SQLAlchemy expects "mysql+pymysql://"
    DATABASE_URL = DATABASE_URL.replace("mysql://", "mysql+pymysql://", 1)

# ------------------------------------------------------------------------------
# SERVER
# ------------------------------------------------------------------------------

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))
