"""
Persistence collaborators.
"""

from app.repositories.users import UserRecord, UserRepository, MongoUserRepository

__all__ = ["UserRecord", "UserRepository", "MongoUserRepository"]
