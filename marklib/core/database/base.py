# File: marklib/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. All feature models (Book, ReadingProgress) inherit from this.
Base = declarative_base()
