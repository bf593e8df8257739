import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "member_events"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "30")),
}

UPLOAD_DIR = os.getenv("UPLOAD_DIR", "/var/lib/member-events/uploads/images")
MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "10"))
PAGE_SIZE = int(os.getenv("PAGE_SIZE", "10"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
