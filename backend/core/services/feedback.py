"""
Feedback Generator

Turns comparison metrics into human-readable feedback and
shot-specific recommendations.

Rule order is presentation order:
1. Accuracy tier message
2. Timing note (timing < 70)
3. Stability note (stability < 70)
4. One note per keypoint scoring below 60
Recommendations: shot-specific advice first, then general advice.
"""

import logging
from typing import Dict, List, Mapping, Tuple

from ..config import (
    ACCURACY_EXCELLENT,
    ACCURACY_GOOD,
    DEFAULT_LANGUAGE,
    KEYPOINT_THRESHOLD,
    SMASH_JOINT_THRESHOLD,
    STABILITY_THRESHOLD,
    SUPPORTED_LANGUAGES,
    TIMING_THRESHOLD,
)
from ..domain.analysis import ComparisonDetails, ShotType

logger = logging.getLogger(__name__)


# =============================================================================
# Message catalog
# =============================================================================

MESSAGES: Dict[str, Dict[str, str]] = {
    "ko": {
        "accuracy_excellent": "🎯 훌륭합니다! 자세가 매우 정확합니다.",
        "accuracy_good": "👍 좋은 자세입니다. 조금만 더 정확하게!",
        "accuracy_practice": "💪 자세 연습이 더 필요합니다.",
        "timing": "⏱️ 동작의 타이밍을 개선해보세요.",
        "stability": "🧘‍♂️ 동작을 더 안정적으로 수행해보세요.",
        "keypoint": "{body_part} 위치를 확인해보세요.",
        "smash_shoulder": "어깨를 더 높이 올려보세요.",
        "smash_elbow": "팔꿈치 각도를 조정해보세요.",
        "serve": "서브 시 무게중심을 앞으로 이동하세요.",
        "clear": "클리어 시 라켓을 완전히 뒤로 빼세요.",
        "practice_slowly": "천천히 동작을 연습하여 안정성을 높이세요.",
        "watch_reference": "기준 영상을 반복 시청하여 타이밍을 익히세요.",
    },
    "en": {
        "accuracy_excellent": "🎯 Excellent! Your form is very accurate.",
        "accuracy_good": "👍 Good form. Just a little more precision!",
        "accuracy_practice": "💪 Your form needs more practice.",
        "timing": "⏱️ Work on the timing of your motion.",
        "stability": "🧘‍♂️ Try to perform the motion more steadily.",
        "keypoint": "Check the position of your {body_part}.",
        "smash_shoulder": "Raise your shoulder higher.",
        "smash_elbow": "Adjust your elbow angle.",
        "serve": "Shift your weight forward when serving.",
        "clear": "Take the racket fully back on a clear.",
        "practice_slowly": "Practice the motion slowly to build stability.",
        "watch_reference": "Rewatch the reference video to learn the timing.",
    },
}

BODY_PART_LABELS: Dict[str, Dict[str, str]] = {
    "ko": {
        "left_shoulder": "왼쪽 어깨",
        "right_shoulder": "오른쪽 어깨",
        "left_elbow": "왼쪽 팔꿈치",
        "right_elbow": "오른쪽 팔꿈치",
        "left_wrist": "왼쪽 손목",
        "right_wrist": "오른쪽 손목",
        "left_hip": "왼쪽 엉덩이",
        "right_hip": "오른쪽 엉덩이",
        "left_knee": "왼쪽 무릎",
        "right_knee": "오른쪽 무릎",
    },
    "en": {
        "left_shoulder": "left shoulder",
        "right_shoulder": "right shoulder",
        "left_elbow": "left elbow",
        "right_elbow": "right elbow",
        "left_wrist": "left wrist",
        "right_wrist": "right wrist",
        "left_hip": "left hip",
        "right_hip": "right hip",
        "left_knee": "left knee",
        "right_knee": "right knee",
    },
}


class FeedbackGenerator:
    """
    Generates feedback and recommendations from comparison metrics.

    Usage:
        generator = FeedbackGenerator(language="en")
        feedback, recommendations = generator.generate(
            key_point_scores, details, ShotType.SMASH
        )
    """

    def __init__(self, language: str = DEFAULT_LANGUAGE):
        if language not in SUPPORTED_LANGUAGES:
            logger.warning(f"Unsupported language '{language}', using '{DEFAULT_LANGUAGE}'")
            language = DEFAULT_LANGUAGE
        self.language = language
        self._messages = MESSAGES[language]
        self._labels = BODY_PART_LABELS[language]

    def generate(
        self,
        key_point_scores: Mapping[str, float],
        details: ComparisonDetails,
        shot_type: ShotType,
    ) -> Tuple[List[str], List[str]]:
        """Return (feedback, recommendations)."""
        return (
            self.generate_feedback(key_point_scores, details),
            self.generate_recommendations(key_point_scores, details, shot_type),
        )

    def body_part_label(self, keypoint: str) -> str:
        """Localized label for a keypoint name; unknown names pass through."""
        return self._labels.get(keypoint, keypoint)

    # -------------------------------------------------------------------------
    # Feedback
    # -------------------------------------------------------------------------

    def generate_feedback(
        self,
        key_point_scores: Mapping[str, float],
        details: ComparisonDetails,
    ) -> List[str]:
        msg = self._messages
        feedback = []

        if details.position_accuracy >= ACCURACY_EXCELLENT:
            feedback.append(msg["accuracy_excellent"])
        elif details.position_accuracy >= ACCURACY_GOOD:
            feedback.append(msg["accuracy_good"])
        else:
            feedback.append(msg["accuracy_practice"])

        if details.timing < TIMING_THRESHOLD:
            feedback.append(msg["timing"])

        if details.stability < STABILITY_THRESHOLD:
            feedback.append(msg["stability"])

        for keypoint, score in key_point_scores.items():
            if score < KEYPOINT_THRESHOLD:
                feedback.append(
                    msg["keypoint"].format(body_part=self.body_part_label(keypoint))
                )

        return feedback

    # -------------------------------------------------------------------------
    # Recommendations
    # -------------------------------------------------------------------------

    def generate_recommendations(
        self,
        key_point_scores: Mapping[str, float],
        details: ComparisonDetails,
        shot_type: ShotType,
    ) -> List[str]:
        msg = self._messages
        recommendations = []

        if shot_type == ShotType.SMASH:
            # A joint that never qualified, or averaged exactly 0, gets no advice
            shoulder = key_point_scores.get("right_shoulder")
            if shoulder and shoulder < SMASH_JOINT_THRESHOLD:
                recommendations.append(msg["smash_shoulder"])
            elbow = key_point_scores.get("right_elbow")
            if elbow and elbow < SMASH_JOINT_THRESHOLD:
                recommendations.append(msg["smash_elbow"])
        elif shot_type == ShotType.SERVE:
            recommendations.append(msg["serve"])
        elif shot_type == ShotType.CLEAR:
            recommendations.append(msg["clear"])

        if details.stability < STABILITY_THRESHOLD:
            recommendations.append(msg["practice_slowly"])

        if details.timing < TIMING_THRESHOLD:
            recommendations.append(msg["watch_reference"])

        return recommendations
