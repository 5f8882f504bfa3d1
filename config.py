import argparse
from pathlib import Path
from typing import Optional

class Config:
    """
    Central configuration manager for the Form Coach backend.
    Handles command-line argument parsing, debug modes, and pose/exercise parameters.
    """

    def __init__(self):
        # Application mode settings
        self.debug_mode: str = "debug_no_save"
        self.save_frames: bool = False
        self.debug_dir: Optional[Path] = None
        self.host: str = "0.0.0.0"
        self.port: int = 8000

        # Pose detection thresholds
        self.min_confidence: float = 0.3  # Keypoints below this are treated as missing landmarks
        self.model_conf_threshold: float = 0.4  # YOLO model confidence threshold
        self.pose_model_path: str = "yolov8n-pose.pt"

        # Image processing settings
        self.image_width_limit: int = 640  # Resize images larger than this for performance

        # Exercise selection
        self.supported_exercises = ["squat", "bicepCurl", "shoulderPress", "pushup"]
        self.default_exercise: str = "squat"

        # Human-readable descriptions for each debug mode
        self.mode_descriptions = {
            "debug": "Debug Mode (with frame saving)",
            "debug_no_save": "Debug Mode (without frame saving)",
            "non_debug": "Non-Debug Mode (minimal logging)"
        }

    def setup_from_args(self, argv=None):
        """
        Parse command line arguments and configure application settings.
        Creates debug directory if frame saving is enabled.
        """
        parser = argparse.ArgumentParser(description="Form Coach Backend")
        parser.add_argument(
            "--mode",
            choices=["debug", "debug_no_save", "non_debug"],
            default="debug_no_save",
            help="Debug mode setting"
        )
        parser.add_argument(
            "--exercise",
            choices=self.supported_exercises,
            default=self.default_exercise,
            help="Exercise selected when a session starts"
        )
        parser.add_argument("--host", default=self.host, help="Bind address")
        parser.add_argument("--port", type=int, default=self.port, help="Bind port")
        args = parser.parse_args(argv)

        self.debug_mode = args.mode
        self.save_frames = (self.debug_mode == "debug")
        self.default_exercise = args.exercise
        self.host = args.host
        self.port = args.port

        # Create debug frame directory if needed
        if self.save_frames:
            self.debug_dir = Path("debug_frames")
            self.debug_dir.mkdir(exist_ok=True)

    @property
    def mode_description(self) -> str:
        """Get human-readable description of current mode"""
        return self.mode_descriptions[self.debug_mode]

# Global configuration instance - import this in other modules
config = Config()
