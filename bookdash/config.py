"""Configuration management."""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config:
    """Application configuration."""
    
    # API
    BOOKS_API_URL = os.getenv("BOOKS_API_URL", "http://localhost:4000")

    # Dashboard
    PAGE_SIZE = int(os.getenv("PAGE_SIZE", "10"))
    NOTIFICATION_SECONDS = float(os.getenv("NOTIFICATION_SECONDS", "3.0"))
    
    # Defaults
    DEFAULT_TIMEOUT = int(os.getenv("DEFAULT_TIMEOUT", "10"))
