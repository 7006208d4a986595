"""
Custom exceptions for Audio Info
Provides a hierarchy of exceptions for the failure points of a run
"""
from typing import Optional


class AudioInfoError(Exception):
    """Base exception for all audio info errors"""
    
    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class DiscoveryError(AudioInfoError):
    """
    Raised when input paths cannot be turned into a file list
    
    Examples:
    - Path does not exist
    - Directory given without --recursive
    - Standard input cannot be read
    """
    pass


class ExtractionError(AudioInfoError):
    """
    Raised when metadata cannot be extracted from one file
    
    Examples:
    - File cannot be opened
    - Probe does not recognize the container
    - Container has no audio track
    """
    pass


class ConfigError(AudioInfoError):
    """Raised when a configuration file cannot be read or parsed"""
    pass
