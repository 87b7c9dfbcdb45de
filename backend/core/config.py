"""
BadForce Configuration
======================

Central tunables for pose comparison and keypoint extraction.
Services take these as constructor defaults; override per instance.
"""

# =============================================================================
# Comparison Settings
# =============================================================================
CONFIDENCE_THRESHOLD = 0.3   # Keypoint must be strictly above this in both frames
TARGET_FRAMES = 60           # Frame budget after timeline normalization
MIDPOINT_WEIGHT_FALLOFF = 0.5  # Weight drop from sequence midpoint to the ends
STABILITY_SCALE = 50         # Points lost per unit of mean acceleration
MIN_STABILITY_FRAMES = 3     # Shorter sequences are trivially stable

SCORE_MIN = 0.0
SCORE_MAX = 100.0

# =============================================================================
# Feedback Thresholds
# =============================================================================
ACCURACY_EXCELLENT = 80      # positionAccuracy >= this: top-tier praise
ACCURACY_GOOD = 60           # positionAccuracy >= this: encouragement
TIMING_THRESHOLD = 70        # timing below this triggers a note
STABILITY_THRESHOLD = 70     # stability below this triggers a note
KEYPOINT_THRESHOLD = 60      # per-joint notes below this score
SMASH_JOINT_THRESHOLD = 70   # smash shoulder/elbow advice below this score

DEFAULT_LANGUAGE = "ko"
SUPPORTED_LANGUAGES = ("ko", "en")

# =============================================================================
# Keypoint Extraction (MediaPipe)
# =============================================================================
MODEL_COMPLEXITY = 1
MIN_DETECTION_CONFIDENCE = 0.5
MIN_TRACKING_CONFIDENCE = 0.5

ASSUMED_FPS = 30             # Used to estimate expected frames for progress
DEFAULT_VIDEO_DURATION_S = 2.0

# =============================================================================
# Analysis Progress (percent)
# =============================================================================
PROGRESS_REFERENCE_DONE = 50
PROGRESS_USER_DONE = 90
PROGRESS_COMPLETE = 100

API_VERSION = "1.0.0"
