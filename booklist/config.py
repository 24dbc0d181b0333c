"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""

    # Book API
    BOOK_API_URL = os.getenv("BOOK_API_URL", "http://localhost:3000")
    BOOK_API_TIMEOUT = int(os.getenv("BOOK_API_TIMEOUT", "10"))

    # OpenLibrary
    OPENLIBRARY_URL = os.getenv("OPENLIBRARY_URL", "https://openlibrary.org")
    EDITION_LOOKUP_TIMEOUT = int(os.getenv("EDITION_LOOKUP_TIMEOUT", "5"))

    # Local cache
    CACHE_NAMESPACE = os.getenv("CACHE_NAMESPACE", "@booklist_app")

    # Database
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = os.getenv("DB_PORT", "5432")
    DB_NAME = os.getenv("DB_NAME", "booklist")
    DB_USER = os.getenv("DB_USER", "postgres")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "")

    @property
    def DATABASE_URL(self):
        """Build PostgreSQL connection string."""
        return f"postgresql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
