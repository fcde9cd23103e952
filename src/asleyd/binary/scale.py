# Gaze coordinates are stored as signed tenths of a unit.
GAZE_SCALE = 0.1


def tenths_to_units(v: int) -> float:
    return v * GAZE_SCALE
