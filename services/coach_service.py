import os
from typing import Optional

from dotenv import load_dotenv
from openai import OpenAI

from models.schemas import UserProfile
from utils.logging_utils import logger

load_dotenv()

SYSTEM_PROMPT = (
    "You are a friendly fitness coach inside a workout form tracker. "
    "Answer questions about exercise technique, training plans and recovery. "
    "Keep answers short and practical. "
    "Avoid medical advice; suggest seeing a professional if asked about pain or injury."
)

DEFAULT_MODEL = "gpt-4.1-mini"
FALLBACK_REPLY = "I'm having trouble connecting right now. Please try again later."


class CoachService:
    """
    Conversational assistant backed by the OpenAI API.
    Every failure path answers with FALLBACK_REPLY instead of raising.
    """

    def __init__(self):
        api_key = os.getenv("OPENAI_API_KEY")
        self.model = os.getenv("OPENAI_MODEL", DEFAULT_MODEL)
        self.client: Optional[OpenAI] = OpenAI(api_key=api_key) if api_key else None
        if self.client is None:
            logger.warning("OPENAI_API_KEY not set; chat coach disabled")

    @staticmethod
    def build_prompt(message: str, profile: Optional[UserProfile] = None) -> str:
        profile_ctx = ""
        if profile is not None:
            profile_ctx = (
                f"User profile: {profile.name}, {profile.age} years, "
                f"{profile.height:g} cm, {profile.weight:g} kg.\n"
            )
        return f"{SYSTEM_PROMPT}\n{profile_ctx}User: {message}\nAssistant:"

    def reply(self, message: str, profile: Optional[UserProfile] = None) -> str:
        if self.client is None:
            return FALLBACK_REPLY

        try:
            response = self.client.responses.create(
                model=self.model,
                input=self.build_prompt(message, profile),
            )
            text = (response.output_text or "").strip()
            return text or FALLBACK_REPLY
        except Exception as e:
            logger.error(f"Error in chat response: {e}")
            return FALLBACK_REPLY

# Global service instance
coach_service = CoachService()
