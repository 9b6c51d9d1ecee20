import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

MONGO_CONFIG = {
    "uri": os.getenv("MONGODB_URI", "mongodb://localhost:27017/school_management"),
    # Empty means: use the database named in the URI.
    "database": os.getenv("MONGODB_DB_NAME", ""),
}

DEBUG = True

# If enabled, app creates the attendance indexes on startup (idempotent)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
