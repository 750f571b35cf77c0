from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Application Metadata
    PROJECT_NAME: str = "Food Ordering API"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Database Configuration
    # Uses default credentials for local Docker Compose setup
    DATABASE_URL: str = "postgres://postgres:postgres@db:5432/food_delivery"
    GENERATE_SCHEMAS: bool = True

    # Identity provider (Auth0 tenant)
    AUTH0_DOMAIN: str = ""
    AUTH0_CLIENT_ID: str = ""
    AUTH0_CLIENT_SECRET: str = ""
    AUTH0_CONNECTION: str = "Username-Password-Authentication"

    # Pricing: floor the discounted subtotal at zero before VAT
    CLAMP_NEGATIVE_TOTAL: bool = False

    DEFAULT_PAGE_SIZE: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @property
    def auth0_base_url(self) -> str:
        return f"https://{self.AUTH0_DOMAIN}"

    @property
    def jwks_url(self) -> str:
        return f"{self.auth0_base_url}/.well-known/jwks.json"

    @property
    def token_issuer(self) -> str:
        return f"{self.auth0_base_url}/"
