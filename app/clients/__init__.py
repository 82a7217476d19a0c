"""Outbound HTTP clients"""
from .functions import FunctionsClient

__all__ = ["FunctionsClient"]
