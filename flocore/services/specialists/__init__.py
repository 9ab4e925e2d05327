"""Specialist generators and their per-domain task tables"""

from .base import Preflight, Specialist

__all__ = ["Preflight", "Specialist"]
