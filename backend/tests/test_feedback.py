import pytest

from core.domain.analysis import ComparisonDetails, ShotType
from core.config import SUPPORTED_LANGUAGES
from core.services.feedback import BODY_PART_LABELS, MESSAGES, FeedbackGenerator

KO = MESSAGES["ko"]
EN = MESSAGES["en"]


def details(accuracy=90.0, timing=100.0, stability=100.0):
    return ComparisonDetails(
        position_accuracy=accuracy, timing=timing, stability=stability
    )


@pytest.fixture
def generator():
    return FeedbackGenerator()


@pytest.mark.parametrize(
    "accuracy, key",
    [
        (80.0, "accuracy_excellent"),
        (99.0, "accuracy_excellent"),
        (79.9, "accuracy_good"),
        (60.0, "accuracy_good"),
        (59.9, "accuracy_practice"),
        (0.0, "accuracy_practice"),
    ],
)
def test_accuracy_tiers(generator, accuracy, key):
    feedback = generator.generate_feedback({}, details(accuracy=accuracy))
    assert feedback == [KO[key]]


def test_feedback_order(generator):
    scores = {"left_knee": 55.0, "right_wrist": 90.0, "mystery_joint": 10.0}
    feedback = generator.generate_feedback(
        scores, details(accuracy=50.0, timing=69.0, stability=40.0)
    )

    assert feedback == [
        KO["accuracy_practice"],
        KO["timing"],
        KO["stability"],
        "왼쪽 무릎 위치를 확인해보세요.",
        "mystery_joint 위치를 확인해보세요.",
    ]


def test_thresholds_are_strict(generator):
    feedback = generator.generate_feedback(
        {"left_hip": 60.0}, details(timing=70.0, stability=70.0)
    )
    assert feedback == [KO["accuracy_excellent"]]


def test_smash_joint_advice(generator):
    scores = {"right_shoulder": 65.0, "right_elbow": 50.0}
    recommendations = generator.generate_recommendations(scores, details(), ShotType.SMASH)
    assert recommendations == [KO["smash_shoulder"], KO["smash_elbow"]]


def test_smash_skips_missing_or_zero_joints(generator):
    recommendations = generator.generate_recommendations(
        {"right_shoulder": 0.0}, details(), ShotType.SMASH
    )
    assert recommendations == []


@pytest.mark.parametrize(
    "shot_type, expected",
    [
        (ShotType.SERVE, [KO["serve"]]),
        (ShotType.CLEAR, [KO["clear"]]),
        (ShotType.DROP, []),
        (ShotType.NET, []),
    ],
)
def test_shot_specific_branch(generator, shot_type, expected):
    assert generator.generate_recommendations({}, details(), shot_type) == expected


def test_general_advice_follows_shot_advice(generator):
    recommendations = generator.generate_recommendations(
        {}, details(timing=10.0, stability=10.0), ShotType.SERVE
    )
    assert recommendations == [KO["serve"], KO["practice_slowly"], KO["watch_reference"]]


def test_english_catalog():
    generator = FeedbackGenerator(language="en")
    feedback, recommendations = generator.generate(
        {"right_elbow": 30.0}, details(), ShotType.SMASH
    )
    assert feedback == [EN["accuracy_excellent"], "Check the position of your right elbow."]
    assert recommendations == [EN["smash_elbow"]]


def test_unknown_language_falls_back_to_korean():
    generator = FeedbackGenerator(language="fr")
    assert generator.language == "ko"
    assert generator.body_part_label("right_knee") == "오른쪽 무릎"


@pytest.mark.parametrize("language", SUPPORTED_LANGUAGES)
def test_supported_languages_have_catalogs(language):
    generator = FeedbackGenerator(language=language)
    assert generator.language == language
    assert set(MESSAGES[language]) == set(KO)
    assert set(BODY_PART_LABELS[language]) == set(BODY_PART_LABELS["ko"])
