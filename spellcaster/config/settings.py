"""
Configuration settings for gesture matching and spell casting.
"""

# Cast attempt outcomes
CAST = 'cast'
FIZZLED = 'fizzled'
UNKNOWN_INCANTATION = 'unknown_incantation'


class MatchConfig:
    """Default constants for the gesture matcher."""

    # Every path and pattern is resampled to this many points
    NUM_POINTS = 64

    # Longer bounding-box side after normalization
    SQUARE_SIZE = 1.0

    # Average distance that maps to a score of 0.0; larger is more forgiving
    SCORE_SCALE = 0.5

    # Minimum score the caster accepts as a successful cast
    MATCH_THRESHOLD = 0.8

    # Bounding boxes at or below this extent are treated as a single point
    NORMALIZE_EPSILON = 1e-12


class RecorderConfig:
    """Configuration constants for gesture recording."""

    # Distance from the camera to the invisible casting plane (world units)
    PLANE_DISTANCE = 1.0

    # Minimum distance the cursor must travel to record a new point (world units)
    MIN_POINT_DISTANCE = 0.01


class DisplayConfig:
    """Defaults for on-screen spell messages."""

    MESSAGE = "Magic!"
    FONT_SIZE = 24
    LIFETIME = 2.0  # seconds
    SCREEN_POSITION = (0.5, 0.5)  # (0,0) bottom-left, (1,1) top-right


class RecognitionConfig:
    """Tunable parameters for one matcher/caster pairing."""

    def __init__(self,
                 num_points: int = MatchConfig.NUM_POINTS,
                 square_size: float = MatchConfig.SQUARE_SIZE,
                 score_scale: float = MatchConfig.SCORE_SCALE,
                 match_threshold: float = MatchConfig.MATCH_THRESHOLD):
        if num_points < 2:
            raise ValueError("num_points must be at least 2")
        if square_size <= 0:
            raise ValueError("square_size must be positive")
        if score_scale <= 0:
            raise ValueError("score_scale must be positive")

        self.num_points = int(num_points)
        self.square_size = float(square_size)
        self.score_scale = float(score_scale)
        self.match_threshold = 0.0
        self.set_threshold(match_threshold)

    def set_threshold(self, threshold: float):
        """Set the match threshold (0.0-1.0)."""
        self.match_threshold = max(0.0, min(1.0, float(threshold)))

    def get_threshold(self) -> float:
        """Get the current match threshold."""
        return self.match_threshold

    def __repr__(self):
        return (f"RecognitionConfig(num_points={self.num_points}, "
                f"square_size={self.square_size}, score_scale={self.score_scale}, "
                f"match_threshold={self.match_threshold})")
