"""
Transcription module - Speech-to-text abstraction layer.

Factory function for creating STT instances based on provider configuration.
"""

from src.core.exceptions import ProviderConfigurationError

from .base import BaseSTT

__all__ = ["BaseSTT", "create_stt"]


def create_stt(provider: str, **kwargs) -> BaseSTT:
    """
    Factory function to create STT instance based on provider.

    Args:
        provider: STT provider name ("deepgram").
        **kwargs: Provider-specific configuration

    Returns:
        BaseSTT implementation instance

    Raises:
        ProviderConfigurationError: If provider is unknown
    """
    if provider == "deepgram":
        from .deepgram import DeepgramSTT

        return DeepgramSTT(**kwargs)
    else:
        raise ProviderConfigurationError(f"Unknown STT provider: {provider}")
