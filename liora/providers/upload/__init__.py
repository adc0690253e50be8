"""
Upload transports.
Import all transports here to register them with the registry.
"""

from liora.providers.upload.simulated import SimulatedUploadTransport
from liora.providers.upload.http import HttpxUploadTransport

__all__ = ["SimulatedUploadTransport", "HttpxUploadTransport"]
