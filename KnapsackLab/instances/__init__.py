"""
Random instance generation and the plain-text instance format.
"""

from .generator import InstanceSpec, generate_instance
from .io import format_instance, parse_instance, read_instance, write_instance

__all__ = [
    'InstanceSpec', 'generate_instance',
    'format_instance', 'parse_instance', 'read_instance', 'write_instance',
]
