from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Amadeus
    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_base_url: str = "https://test.api.amadeus.com"
    amadeus_timeout_seconds: float = 30.0
    amadeus_max_concurrency: int = 10

    # Hotel Search
    hotel_search_radius: int = 5
    hotel_search_radius_unit: str = "KM"
    hotel_offer_batch_size: int = 20
    hotel_currency: str = "USD"
    default_adults: int = 2
    synthetic_seed: int | None = None  # None = seed per search

    # Supabase Auth
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_jwt_audience: str = "authenticated"
    auth_required: bool = False

    # Client
    api_base_url: str = "http://localhost:5000/api"
    page_size: int = 10
    compare_storage_key: str = "compare"
    compare_storage_path: str = ".hotelscout/storage.json"

    # CORS
    cors_origins: str = "http://localhost:3000"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
