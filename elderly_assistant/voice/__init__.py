"""
Module 'voice': proxy de reconnaissance vocale (Baidu ASR).
"""

from .config import VoiceConfig
from .client import BaiduSpeechClient
from .service import VoiceService, audio_format_for

__all__ = ["VoiceConfig", "BaiduSpeechClient", "VoiceService", "audio_format_for"]
