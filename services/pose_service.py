import cv2
import numpy as np
from typing import Optional
from ultralytics import YOLO
from utils.logging_utils import logger
from config import config
from models.pose import Pose, pose_from_keypoints

class PoseService:
    """
    YOLO-based pose detection service.
    Handles model initialization, image preprocessing, and conversion of the
    first detected person's keypoints into a Pose.
    """

    def __init__(self):
        self.model = None
        self.scale: float = 1.0

    async def initialize(self):
        """
        Initialize YOLO pose detection model and perform warm-up inference.
        Runs a dummy inference so the first real frame is not slowed down.
        """
        logger.info(f"Loading YOLO pose model from {config.pose_model_path}...")
        self.model = YOLO(config.pose_model_path)

        # Warm up model with dummy inference to optimize subsequent calls
        dummy = np.zeros((480, 640, 3), dtype=np.uint8)
        _ = self.model(dummy, verbose=False)

        logger.info("Pose model loaded successfully!")

    def prepare_image(self, img: np.ndarray) -> np.ndarray:
        """Resize large images for performance while maintaining aspect ratio"""
        height, width = img.shape[:2]
        self.scale = 1.0
        if width > config.image_width_limit:
            self.scale = config.image_width_limit / width
            new_width = int(width * self.scale)
            new_height = int(height * self.scale)
            img = cv2.resize(img, (new_width, new_height))
        return img

    def detect_pose(self, img: np.ndarray) -> Optional[Pose]:
        """
        Detect the pose of the first person in the image.
        Returns a Pose in the resized image's pixel space, or None if nobody was detected.
        Low-confidence keypoints are left out of the Pose.
        """
        if not self.model:
            raise RuntimeError("Model not initialized")

        img = self.prepare_image(img)

        results = self.model(img, verbose=False, conf=config.model_conf_threshold)

        # Extract first detected person's keypoints
        if results[0].keypoints is not None and len(results[0].keypoints.data) > 0:
            keypoints = results[0].keypoints.data[0].cpu().numpy()
            return pose_from_keypoints(keypoints, config.min_confidence)

        return None

# Global service instance
pose_service = PoseService()
