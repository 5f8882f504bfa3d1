# schemas.py
from pydantic import BaseModel, Field
from typing import Dict, List, Optional

class WorkoutState(BaseModel):
    """
    Pydantic model representing the workout state returned to clients.
    Mirrors the current ExerciseState plus display text and session bookkeeping.
    """
    exercise: str = "none"                      # Active exercise identifier
    repCount: int = 0                           # Reps in the current set
    setCount: int = 1                           # Current set number
    totalReps: int = 0                          # Reps across all sets of this exercise
    repState: str = "starting"                  # Phase of the rep/set cycle
    formCorrect: bool = True                    # Whether the last evaluated pose had good form
    formFeedback: List[str] = []                # Feedback lines for the last evaluated pose
    formIssues: Dict[str, bool] = {}            # Landmarks to highlight in the overlay
    repProgress: float = 0.0                    # Percent of current set done
    setProgress: float = 0.0                    # Percent of sets done
    status: Optional[str] = None                # Short form status banner
    formAlert: Optional[str] = None             # Set when form flips between correct and incorrect
    motivation: str = "Let's get started!"      # Motivational message for user engagement
    isWorkoutActive: bool = False               # Whether workout session is active
    isConnected: bool = False                   # Connection status to backend
    errorMessage: Optional[str] = None          # Error details if processing failed
    framesSent: int = 0                         # Total frames processed in session
    lastRepAt: int = 0                          # Timestamp of last completed rep or set boundary (milliseconds)


class KeypointIn(BaseModel):
    x: float
    y: float
    confidence: Optional[float] = None


class PoseRequest(BaseModel):
    """Pose computed client-side, keyed by landmark name"""
    exercise: str = "squat"
    keypoints: Dict[str, KeypointIn] = {}
    sessionId: str = "default"


class ThresholdsOut(BaseModel):
    upAngle: float
    downAngle: float
    backAngleMin: Optional[float] = None
    backAngleMax: Optional[float] = None
    kneePositionThreshold: Optional[float] = None


class ExerciseInfo(BaseModel):
    """Catalog entry as exposed to clients"""
    type: str
    name: str
    targetReps: int
    sets: int
    restBetweenSets: float
    thresholds: ThresholdsOut
    formInstructions: List[str]
    musclesTargeted: List[str]
    primaryLandmarks: List[str]


class UserProfile(BaseModel):
    """User profile kept in memory for the current process"""
    name: str = Field(min_length=2)
    age: int = Field(ge=13, le=120)
    height: float = Field(ge=100, le=250)       # Centimetres
    weight: float = Field(ge=30, le=300)        # Kilograms


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)


class ChatResponse(BaseModel):
    reply: str
