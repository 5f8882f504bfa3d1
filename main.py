# main.py
import cv2
import numpy as np
import time
from typing import Dict, List, Optional
from fastapi import FastAPI, File, UploadFile, HTTPException, Form
from fastapi.middleware.cors import CORSMiddleware

from config import config
from utils.logging_utils import logger
from utils.motivation import get_motivation_text, get_status_text
from services.pose_service import pose_service
from services.debug_service import debug_service
from services.profile_service import profile_service
from services.coach_service import coach_service
from models.exercise_catalog import ExerciseSettings, list_exercises, settings_for
from models.exercise_state import ExerciseType, rep_progress, set_progress
from models.pose import pose_from_mapping
from models.workout_counter import WorkoutCounter
from models.schemas import (
    WorkoutState, PoseRequest, ExerciseInfo, ThresholdsOut,
    UserProfile, ChatRequest, ChatResponse,
)

logger.info(f"Starting in: {config.mode_description}")

app = FastAPI(title=f"Form Coach Backend - {config.mode_description}")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# Session storage for maintaining workout state across requests
workout_sessions: Dict[str, WorkoutCounter] = {}

@app.on_event("startup")
async def startup_event():
    """Initialize pose detection model and log available exercises"""
    await pose_service.initialize()
    logger.info(f"Supported exercises: {config.supported_exercises}")


def resolve_exercise(exercise: str) -> ExerciseType:
    """Map a client-supplied identifier onto a supported exercise, falling back to the default"""
    if exercise not in config.supported_exercises:
        logger.warning(f"Unsupported exercise '{exercise}', defaulting to {config.default_exercise}")
        exercise = config.default_exercise
    return ExerciseType(exercise)


def get_session(session_id: str, exercise: ExerciseType) -> WorkoutCounter:
    """Retrieve or create a workout session; selecting another exercise starts it fresh"""
    counter = workout_sessions.get(session_id)
    if counter is None:
        counter = WorkoutCounter(mode=exercise)
        workout_sessions[session_id] = counter
    elif counter.mode is not exercise:
        counter.switch_mode(exercise)
    return counter


def build_response(counter: WorkoutCounter, active: bool = True) -> WorkoutState:
    """Build response with current workout state"""
    state = counter.state
    settings = counter.settings
    return WorkoutState(
        exercise=state.type.value,
        repCount=state.rep_count,
        setCount=state.set_count,
        totalReps=state.total_reps,
        repState=state.rep_state.value,
        formCorrect=state.form_correct,
        formFeedback=list(state.form_feedback),
        formIssues=dict(state.form_issues),
        repProgress=round(rep_progress(state, settings.target_reps), 1),
        setProgress=round(set_progress(state, settings.sets), 1),
        status=get_status_text(state),
        formAlert=counter.form_alert,
        motivation=get_motivation_text(state.total_reps),
        isWorkoutActive=active,
        isConnected=True,
        errorMessage=None,
        framesSent=counter.frame_count,
        lastRepAt=int(state.last_rep_timestamp * 1000)
    )


def exercise_info(settings: ExerciseSettings) -> ExerciseInfo:
    t = settings.thresholds
    return ExerciseInfo(
        type=settings.type.value,
        name=settings.name,
        targetReps=settings.target_reps,
        sets=settings.sets,
        restBetweenSets=settings.rest_between_sets,
        thresholds=ThresholdsOut(
            upAngle=t.up_angle,
            downAngle=t.down_angle,
            backAngleMin=t.back_angle_min,
            backAngleMax=t.back_angle_max,
            kneePositionThreshold=t.knee_position_threshold,
        ),
        formInstructions=list(settings.form_instructions),
        musclesTargeted=list(settings.muscles_targeted),
        primaryLandmarks=list(settings.primary_landmarks),
    )


@app.post("/analyze_frame", response_model=WorkoutState)
async def analyze_frame(
    file: UploadFile = File(...),
    exercise: str = Form(config.default_exercise),
    session_id: str = Form("default")
):
    """
    Core endpoint for exercise analysis from uploaded image frames.
    Detects the pose, advances the exercise state machine and returns workout state.
    """
    exercise_type = resolve_exercise(exercise)

    if not pose_service.model:
        raise HTTPException(status_code=500, detail="Model not loaded")

    try:
        # Decode uploaded image
        contents = await file.read()
        nparr = np.frombuffer(contents, np.uint8)
        img = cv2.imdecode(nparr, cv2.IMREAD_COLOR)

        if img is None:
            raise HTTPException(status_code=400, detail="Invalid image")

        counter = get_session(session_id, exercise_type)

        # No pose detected leaves the state unchanged
        pose = pose_service.detect_pose(img)
        state = counter.update(pose)

        logger.info(
            f"Exercise: {exercise_type.value}, Rep: {state.rep_count}, Set: {state.set_count}, "
            f"State: {state.rep_state.value}, Form OK: {state.form_correct}"
        )

        # Save debug frame if enabled
        if config.save_frames:
            debug_service.save_debug_frame(
                contents, counter.frame_count, pose, state,
                counter.settings.primary_landmarks, pose_service.scale
            )

        return build_response(counter)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error processing frame: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/analyze_pose", response_model=WorkoutState)
async def analyze_pose(request: PoseRequest):
    """Advance the state machine with a pose estimated on the client"""
    exercise_type = resolve_exercise(request.exercise)
    counter = get_session(request.sessionId, exercise_type)

    pose = pose_from_mapping(
        {name: kp.model_dump() for name, kp in request.keypoints.items()},
        config.min_confidence,
    )
    counter.update(pose)
    return build_response(counter)


@app.post("/reset_session", response_model=WorkoutState)
async def reset_session(
    exercise: str = Form(config.default_exercise),
    session_id: str = Form("default")
):
    """Reset workout session to a fresh state, optionally changing exercise"""
    exercise_type = resolve_exercise(exercise)
    counter = get_session(session_id, exercise_type)
    counter.reset()
    logger.info(f"Session {session_id} reset successfully (exercise={exercise_type.value})")

    response = build_response(counter, active=False)
    response.motivation = "Ready to start!"
    return response


@app.get("/exercises", response_model=List[ExerciseInfo])
async def get_exercises():
    """List the selectable exercises with their targets and thresholds"""
    return [exercise_info(s) for s in list_exercises()]


@app.get("/exercises/{exercise}", response_model=ExerciseInfo)
async def get_exercise(exercise: str):
    if exercise not in config.supported_exercises:
        raise HTTPException(status_code=404, detail=f"Unknown exercise '{exercise}'")
    return exercise_info(settings_for(exercise))


@app.get("/summary")
async def get_summary(session_id: str = "default"):
    """Per-exercise totals for the session (kept in memory only)"""
    counter = workout_sessions.get(session_id)
    return counter.summary() if counter else {}


@app.get("/profile", response_model=Optional[UserProfile])
async def get_profile():
    return profile_service.get()


@app.put("/profile", response_model=UserProfile)
async def update_profile(profile: UserProfile):
    return profile_service.update(profile)


@app.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest):
    """Forward a question to the chat coach"""
    return ChatResponse(reply=coach_service.reply(request.message, profile_service.get()))


@app.get("/health")
async def health_check():
    """Simple health check endpoint for service monitoring"""
    return {"status": "healthy", "timestamp": time.time(), "modelLoaded": pose_service.model is not None}
