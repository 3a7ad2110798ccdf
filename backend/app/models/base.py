"""
Declarative base shared by every feature model.
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
