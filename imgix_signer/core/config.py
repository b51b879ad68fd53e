import os
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict
from dotenv import load_dotenv

from imgix_signer.core.errors import ConfigurationMissingError

# Load environment variables from .env file if it exists
load_dotenv()


class ImgixSource(BaseModel):
    """Credentials and base URL for one imgix source."""
    token: str = Field(..., description="Secure token used to sign URLs")
    domain: str = Field(..., description="Source domain, e.g. https://my-source.imgix.net")

    model_config = ConfigDict(frozen=True)


class Settings(BaseModel):
    """Application settings."""
    # imgix Configuration
    imgix_secure_token: str = Field(
        default_factory=lambda: os.getenv("IMGIX_SECURE_TOKEN", "")
    )
    imgix_domain: str = Field(
        default_factory=lambda: os.getenv("IMGIX_DOMAIN", "")
    )

    # Server settings
    workers: int = Field(
        default_factory=lambda: int(os.getenv("WORKERS", "1"))
    )

    model_config = ConfigDict()

    def is_imgix_configured(self) -> bool:
        """Whether both imgix settings are present."""
        return bool(self.imgix_secure_token and self.imgix_domain)


# Create global settings instance
settings = Settings()


def configured_source(current: Optional[Settings] = None) -> ImgixSource:
    """Build the default imgix source from process-wide settings.

    The settings are read on every call, so changes made after import
    are picked up.

    Args:
        current: Settings to read from, defaults to the global instance

    Returns:
        The configured imgix source

    Raises:
        ConfigurationMissingError: If the token or domain is unset
    """
    if current is None:
        current = settings

    missing = []
    if not current.imgix_secure_token:
        missing.append("IMGIX_SECURE_TOKEN")
    if not current.imgix_domain:
        missing.append("IMGIX_DOMAIN")
    if missing:
        raise ConfigurationMissingError(missing)

    return ImgixSource(token=current.imgix_secure_token, domain=current.imgix_domain)
