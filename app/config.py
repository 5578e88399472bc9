"""
Application configuration with Pydantic Settings for validation and type safety.
Supports environment-specific configurations and .env file loading.
"""

from decimal import Decimal
from enum import Enum
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator


class Environment(str, Enum):
    """Application environment types"""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """
    Application settings with validation.
    Settings are loaded from environment variables or .env file.
    """

    # Application settings
    app_name: str = Field(default="Honest Meals", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT, description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Database settings
    database_url: str = Field(
        default="postgresql+psycopg2://user@localhost:5432/honestmeals",
        description="SQLAlchemy database URL",
    )
    db_echo: bool = Field(default=False, description="SQLAlchemy echo SQL statements")
    db_init_attempts: int = Field(
        default=8, ge=1, description="Database initialization retry attempts"
    )
    db_init_delay_sec: float = Field(
        default=2.0, ge=0, description="Delay between DB init attempts"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="%(asctime)s %(levelname)s %(name)s: %(message)s",
        description="Log format string",
    )

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:8000"],
        description="Allowed CORS origins",
    )
    cors_allow_credentials: bool = Field(
        default=True, description="Allow CORS credentials"
    )
    cors_allow_methods: list[str] = Field(
        default=["*"], description="Allowed HTTP methods"
    )
    cors_allow_headers: list[str] = Field(
        default=["*"], description="Allowed HTTP headers"
    )

    # API settings
    api_prefix: str = Field(default="", description="API route prefix")
    api_title: str = Field(
        default="Honest Meals API", description="API documentation title"
    )
    api_description: str = Field(
        default="Meal storefront with catalog, checkout and admin back-office",
        description="API documentation description",
    )

    # Storefront pricing
    currency_symbol: str = Field(default="₹", description="Currency symbol in messages")
    delivery_fee: Decimal = Field(
        default=Decimal("40"), ge=0, description="Flat delivery fee per order"
    )
    custom_meal_base_price: Decimal = Field(
        default=Decimal("49"), ge=0, description="Base price of every custom meal"
    )
    custom_ingredient_default_grams: int = Field(
        default=50, gt=0, description="Default grams when adding an ingredient"
    )
    standard_ingredient_price_per_100_kcal: Decimal = Field(
        default=Decimal("5"),
        ge=0,
        description="Price charged per 100 kcal of a catalog ingredient",
    )

    # Order submission
    whatsapp_number: str = Field(
        default="918888756746", description="WhatsApp number receiving orders"
    )
    whatsapp_base_url: str = Field(
        default="https://wa.me", description="WhatsApp deep link base URL"
    )

    # Media storage
    media_root: str = Field(default="media", description="Directory for uploads")
    media_url: str = Field(default="/media", description="Public URL for uploads")
    max_image_bytes: int = Field(
        default=5 * 1024 * 1024, gt=0, description="Maximum meal image size"
    )

    # Admin
    admin_recent_orders_limit: int = Field(
        default=5, ge=1, description="Orders shown on the admin dashboard"
    )
    event_queue_size: int = Field(
        default=100, ge=1, description="Buffered order events per subscriber"
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v):
        """Validate and normalize environment value"""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    def is_production(self) -> bool:
        """Check if running in production environment"""
        return self.environment == Environment.PRODUCTION

    def is_development(self) -> bool:
        """Check if running in development environment"""
        return self.environment == Environment.DEVELOPMENT

    def is_testing(self) -> bool:
        """Check if running in testing environment"""
        return self.environment == Environment.TESTING

    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


# Global settings instance
settings = Settings()
