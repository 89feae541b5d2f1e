"""
Grade classification into effort bands.

Used by: processed track points, map legends.
Single source of truth for grade band thresholds.

Naming convention: {direction}_{lower}_{upper} or {direction}_{bound}_over
  - direction: "up" or "down" (except "flat")
  - numbers: absolute grade boundaries in percent
  - "over": unbounded extreme category
Examples: up_3_8 = uphill 3% to 8%, down_15_over = downhill steeper than -15%
"""

# 9-category grade thresholds in percent
GRADE_THRESHOLDS = {
    'down_15_over': (-100.0, -15.0),   # < -15%
    'down_8_15':    (-15.0, -8.0),     # -15% to -8%
    'down_3_8':     (-8.0, -3.0),      # -8% to -3%
    'down_0_3':     (-3.0, -0.5),      # -3% to -0.5%
    'flat':         (-0.5, 0.5),       # -0.5% to +0.5%
    'up_0_3':       (0.5, 3.0),        # +0.5% to +3%
    'up_3_8':       (3.0, 8.0),        # +3% to +8%
    'up_8_15':      (8.0, 15.0),       # +8% to +15%
    'up_15_over':   (15.0, 100.0),     # > +15%
}


def classify_grade(grade: float) -> str:
    """
    Classify a grade into one of 9 effort bands.

    Args:
        grade: Grade as a ratio (e.g., 0.10 for 10%)

    Returns:
        Category name (e.g., 'up_8_15', 'down_15_over', 'flat')
    """
    percent = grade * 100
    for category, (min_grade, max_grade) in GRADE_THRESHOLDS.items():
        if min_grade <= percent < max_grade:
            return category
    # Values at or beyond the extreme boundaries
    if percent >= 15.0:
        return 'up_15_over'
    if percent <= -15.0:
        return 'down_15_over'
    return 'flat'

