from pydantic import Field
from pydantic_settings import BaseSettings


class DeploymentConfig(BaseSettings):
    """
    Configuration settings for application deployment
    """

    DEBUG: bool = Field(
        description="Enable debug mode for additional logging and development features",
        default=False,
    )
