from decouple import config

class Settings:
    # Database Configuration
    DATABASE_URL: str = config("DATABASE_URL", default="sqlite:///./agroshop.db")
    DATABASE_ECHO: bool = config("DATABASE_ECHO", default=False, cast=bool)

    # Geo search Configuration
    NEARBY_SHOPS_MAX_DISTANCE_KM: float = config("NEARBY_SHOPS_MAX_DISTANCE_KM", default=10.0, cast=float)
    NEARBY_SHOPS_LIMIT: int = config("NEARBY_SHOPS_LIMIT", default=20, cast=int)

    # Listing Configuration
    DEFAULT_PAGE_SIZE: int = config("DEFAULT_PAGE_SIZE", default=20, cast=int)
    REVIEW_COMMENT_MAX_LENGTH: int = config("REVIEW_COMMENT_MAX_LENGTH", default=1000, cast=int)

    # Environment
    ENVIRONMENT: str = config("ENVIRONMENT", default="development")
    DEBUG: bool = config("DEBUG", default=True, cast=bool)

    # Logging
    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO")
    LOG_FORMAT: str = config("LOG_FORMAT", default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

settings = Settings()
