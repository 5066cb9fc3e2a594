"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use FLOWTYPE_ prefix (e.g., FLOWTYPE_TYPING_SPEED=0.05).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use FLOWTYPE_ prefix.

    Examples:
        FLOWTYPE_TYPING_SPEED=0.05
        FLOWTYPE_DISABLE_TYPING=true
        FLOWTYPE_STREAM_CHUNK_SIZE=4
    """

    model_config = SettingsConfigDict(
        env_prefix="FLOWTYPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Reveal configuration
    typing_speed: float = Field(
        default=0.03,
        gt=0,
        description="Delay in seconds between two reveal ticks",
    )

    disable_typing: bool = Field(
        default=False,
        description="Show content immediately instead of revealing it token by token",
    )

    # Input configuration
    normalize_input: bool = Field(
        default=True,
        description="Unescape and normalize incoming Markdown before tokenizing",
    )

    # Stream replay configuration (CLI only)
    stream_chunk_size: int = Field(
        default=3,
        ge=1,
        description="Number of characters delivered per simulated stream event",
    )

    stream_interval: float = Field(
        default=0.01,
        ge=0,
        description="Delay in seconds between two simulated stream events",
    )

    debug_mode: bool = Field(
        default=False,
        description="Force debug verbosity (-vv) in the CLI",
    )

    def chunks_make(self, text: str) -> list[str]:
        """
        Split text into the growing prefixes a live stream would deliver.

        Args:
            text: Complete text to replay

        Returns:
            List of prefixes, each extending the previous one by at most
            stream_chunk_size characters. The last prefix is the full text.

        Example:
            >>> settings = AppSettings(stream_chunk_size=2)
            >>> settings.chunks_make("abcde")
            ['ab', 'abcd', 'abcde']
        """
        size = self.stream_chunk_size
        return [text[:end] for end in range(size, len(text) + size, size)] if text else []


# Singleton instance - import this in your code
appsettings = AppSettings()
