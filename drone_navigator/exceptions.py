"""
Exception hierarchy for the drone navigator.
"""


class NavigatorError(Exception):
    """Base exception for navigation errors."""
    pass


class InvalidHeadingError(NavigatorError, ValueError):
    """Raised when a heading is not a multiple of 10 in [0, 350] or the hover sentinel."""

    def __init__(self, heading):
        self.heading = heading
        super().__init__(f"{heading} is invalid for the heading")


class InvalidGeometryError(NavigatorError, ValueError):
    """Raised when a polygon cannot form a closed ring."""
    pass


class NoValidMoveError(NavigatorError):
    """Raised when every candidate heading leads to a forbidden move."""

    def __init__(self, position, target, tried):
        self.position = position
        self.target = target
        self.tried = list(tried)
        super().__init__(
            f"No safe heading from {position} towards {target} "
            f"after {len(self.tried)} candidate headings"
        )
