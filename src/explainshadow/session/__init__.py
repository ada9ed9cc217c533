"""
Configuration, sessions and the session factory.
"""

from .configuration import Configuration
from .factory import SqlSessionFactory
from .session import SqlSession

__all__ = ["Configuration", "SqlSession", "SqlSessionFactory"]
