"""
Environment configuration for the Sora Clean Creator Desk.
This file manages environment-specific settings and configurations.
"""

import os
from typing import Any, Optional
import logging
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from config.feature_flags import FeatureFlags
from modules.core.error_handler import ConfigurationError

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: str = 'False') -> bool:
    return os.getenv(name, default).strip().lower() == 'true'


class AppConfig(BaseModel):
    """Settings resolved once at startup and handed to every view."""
    api_base_url: str
    featured_price: str = "14.99"
    uploads_page_size: int = Field(default=50, gt=0)
    request_timeout: float = Field(default=30.0, gt=0)
    features: FeatureFlags = Field(default_factory=FeatureFlags)

    model_config = {'frozen': True, 'arbitrary_types_allowed': True}

    @property
    def subscriptions_enabled(self) -> bool:
        return self.features.is_feature_enabled('subscriptions')


class Environment:
    """Environment configuration class"""

    # Application Settings
    APP_NAME = "Sora Clean"
    APP_TAGLINE = "Creator Desk"
    APP_VERSION = "1.0.0"
    DEBUG_MODE = _env_bool('DEBUG_MODE')

    # Logging Settings
    LOGGING_CONFIG = {
        'level': os.getenv('LOG_LEVEL', 'INFO'),
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    }

    DEFAULT_FEATURED_PRICE = "14.99"
    DEFAULT_PAGE_SIZE = 50
    DEFAULT_TIMEOUT = 30.0

    @classmethod
    def is_production(cls):
        """Check if running in production environment"""
        return not cls.DEBUG_MODE

    @classmethod
    def get_setting(cls, key: str, default: Any = None) -> Any:
        """Get a setting value from the process environment"""
        value = os.getenv(key)
        return value if value is not None else default

    @classmethod
    def get_api_base_url(cls) -> Optional[str]:
        value = cls.get_setting('SORA_CLEAN_API_BASE_URL')
        if value:
            value = value.strip().rstrip('/')
        return value or None

    @classmethod
    def load(cls) -> AppConfig:
        """
        Build the application configuration from the environment.

        Returns:
            AppConfig: Immutable settings for this process

        Raises:
            ConfigurationError: If the API location is missing or a numeric
                setting cannot be parsed or is out of range
        """
        api_base_url = cls.get_api_base_url()
        if not api_base_url:
            logger.error("Missing required setting: SORA_CLEAN_API_BASE_URL")
            raise ConfigurationError(
                "SORA_CLEAN_API_BASE_URL is not set",
                error_code="MISSING_API_BASE_URL"
            )

        try:
            page_size = int(cls.get_setting('SORA_CLEAN_UPLOADS_PAGE_SIZE', cls.DEFAULT_PAGE_SIZE))
            timeout = float(cls.get_setting('SORA_CLEAN_REQUEST_TIMEOUT', cls.DEFAULT_TIMEOUT))
        except ValueError as e:
            raise ConfigurationError(
                "Invalid numeric setting",
                error_code="INVALID_SETTING",
                details=str(e)
            )

        features = FeatureFlags.from_environment()
        try:
            config = AppConfig(
                api_base_url=api_base_url,
                featured_price=cls.get_setting('SORA_CLEAN_FEATURED_PRICE', cls.DEFAULT_FEATURED_PRICE),
                uploads_page_size=page_size,
                request_timeout=timeout,
                features=features
            )
        except PydanticValidationError as e:
            logger.error(f"Rejected configuration: {str(e)}")
            raise ConfigurationError(
                "Invalid setting value",
                error_code="INVALID_SETTING",
                details=str(e)
            )
        logger.info(
            f"Loaded configuration for {api_base_url} "
            f"(features: {', '.join(features.get_enabled_features()) or 'none'})"
        )
        return config

    @classmethod
    def validate_config(cls) -> bool:
        """Validate the configuration"""
        try:
            cls.load()
            return True
        except ConfigurationError as e:
            logger.error(f"Configuration validation failed: {e.message}")
            return False
