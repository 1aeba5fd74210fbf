import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "choir_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# First administrator, created by scripts/init_db.py
ADMIN_NAME = os.getenv("ADMIN_NAME", "Choir Admin")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@choir.local")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
