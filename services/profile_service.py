from typing import Optional
from models.schemas import UserProfile
from utils.logging_utils import logger

class ProfileService:
    """
    Holds the user profile for the running process.
    Nothing is written to disk; a restart starts without a profile.
    """

    def __init__(self):
        self.profile: Optional[UserProfile] = None

    def get(self) -> Optional[UserProfile]:
        return self.profile

    def update(self, profile: UserProfile) -> UserProfile:
        self.profile = profile
        logger.info(f"Profile updated for {profile.name}")
        return profile

    def clear(self):
        self.profile = None

# Global service instance
profile_service = ProfileService()
