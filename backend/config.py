# backend/config.py
import os
from dotenv import load_dotenv

# Load .env from the same folder as config.py
load_dotenv(os.path.join(os.path.dirname(__file__), ".env"))

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "fallback_key")

    DB_USER = os.getenv("DB_USER")
    DB_PASSWORD = os.getenv("DB_PASSWORD")
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = os.getenv("DB_PORT", "3306")
    DB_NAME = os.getenv("DB_NAME", "IMDB")

    DB_CHARSET = "utf8mb4"
    DB_COLLATION = "utf8mb4_unicode_ci"

    # Full URI wins over the DB_* parts when set
    DATABASE_URL = os.getenv("DATABASE_URL")

    SQLALCHEMY_TRACK_MODIFICATIONS = False

    @classmethod
    def database_uri(cls):
        if cls.DATABASE_URL:
            return cls.DATABASE_URL

        parts = {
            "DB_USER": cls.DB_USER,
            "DB_PASSWORD": cls.DB_PASSWORD,
            "DB_HOST": cls.DB_HOST,
            "DB_PORT": cls.DB_PORT,
            "DB_NAME": cls.DB_NAME,
        }
        missing = [name for name, value in parts.items() if not value]
        if missing:
            raise ValueError(f"Missing database environment variables: {', '.join(missing)}")

        return (
            f"mysql+pymysql://{cls.DB_USER}:{cls.DB_PASSWORD}@{cls.DB_HOST}:{cls.DB_PORT}/{cls.DB_NAME}"
            f"?charset={cls.DB_CHARSET}"
        )


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "testing"
    DATABASE_URL = "sqlite://"
