from quiz_portal.enums import ScoreBand

# (band, exclusive lower bound), checked top-down
SCORE_THRESHOLDS = (
    (ScoreBand.EXCELLENT, 90),
    (ScoreBand.GOOD, 70),
    (ScoreBand.AVERAGE, 50),
)


def classify(percentage: float) -> ScoreBand:
    """
    Bucket a percentage score. Bounds are strict, so an exact
    boundary value lands in the lower band (90.0 is GOOD).
    """
    for band, lower_bound in SCORE_THRESHOLDS:
        if percentage > lower_bound:
            return band
    return ScoreBand.POOR


def percentage_of(score: float, total_marks: float) -> float:
    if total_marks > 0:
        return 100 * score / total_marks
    return 0.0
