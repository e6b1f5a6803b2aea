import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

class Config:
    # Secrets
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-only-change-me")

    # SQLite database file stored next to the app as base_booking.db
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL",
        "sqlite:///" + os.path.join(BASE_DIR, "base_booking.db")
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Wall-clock times in requests are read in STORAGE_TIMEZONE,
    # responses are rendered in DISPLAY_TIMEZONE
    STORAGE_TIMEZONE = os.getenv("STORAGE_TIMEZONE", "UTC")
    DISPLAY_TIMEZONE = os.getenv("DISPLAY_TIMEZONE", "Asia/Kolkata")

    # Cancellation policy
    CANCEL_CUTOFF_MINUTES = int(os.getenv("CANCEL_CUTOFF_MINUTES", "60"))

    # Longest date range a single booking may span
    MAX_BOOKING_RANGE_DAYS = int(os.getenv("MAX_BOOKING_RANGE_DAYS", "365"))

    # Default page size for the user listing
    USERS_PAGE_LIMIT = int(os.getenv("USERS_PAGE_LIMIT", "10"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Basic app settings
    DEBUG = False


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    LOG_LEVEL = "WARNING"
