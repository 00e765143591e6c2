from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # App
    APP_NAME: str = "Houston Local Loop"
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    # MongoDB
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "localloop"
    MONGO_COLL_ZIPCODES: str = "zipcodes"
    MONGO_COLL_EVENTS: str = "events"

    # Display
    DEFAULT_CITY: str = "Houston"
    STATE_NAME: str = "Texas"
    DISPLAY_TIMEZONE: str = "America/Chicago"

    # Auth service (empty URL disables sign-in lookups)
    AUTH_URL: str = ""
    AUTH_API_KEY: str = ""
    AUTH_COOKIE_NAME: str = "sb-access-token"
    AUTH_TIMEOUT: float = 10.0

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
