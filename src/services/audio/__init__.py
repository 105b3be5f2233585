"""
Audio module - Capture sources, fragment buffering, and payload encoding.
"""

from .codec import decode_audio, encode_audio, split_data_url
from .recorder import AudioBlob, FragmentBuffer
from .sources import AudioSource, ClipAudioSource

__all__ = [
    "AudioBlob",
    "AudioSource",
    "ClipAudioSource",
    "FragmentBuffer",
    "decode_audio",
    "encode_audio",
    "split_data_url",
]
