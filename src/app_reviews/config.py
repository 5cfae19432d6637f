"""Application configuration via environment variables.

All service settings are prefixed with APP_REVIEWS_ and can be overridden via
environment variables (e.g. APP_REVIEWS_API_VERSION=2025-10). A .env file in
the working directory is loaded first.

Priority: environment variables > .env file > code defaults.
"""

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()

ENV_PREFIX = "APP_REVIEWS_"


class Settings(BaseSettings):
    """App Reviews configuration. All fields map to APP_REVIEWS_<FIELD_NAME> env vars."""

    model_config = {"env_prefix": ENV_PREFIX}

    # Admin API
    api_version: str = "2025-07"
    gid_namespace: str = "shopify"
    metaobject_type: str = "review"
    review_status: str = "approved"
    remote_timeout: float = 30.0
    response_log_limit: int = 600

    # App credentials
    api_key: str = ""
    api_secret: str = ""
    verify_proxy_signature: bool = False

    # Credential store
    credential_store_path: str = "config/sessions.yaml"
    dev_shop_domain: str = ""
    dev_admin_token: str = ""

    # HTTP surface
    frame_ancestors: str = "https://admin.shopify.com https://*.myshopify.com"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000


settings = Settings()

if __name__ == "__main__":
    print(settings)
