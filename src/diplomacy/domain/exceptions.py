class DiplomacyError(Exception):
    """Base class for diplomacy engine errors."""
    pass


class PerspectiveIntegrityError(DiplomacyError):
    """
    Raised when a viewpoint matches neither or both sides of an edge.
    Indicates corrupted upstream data, never a normal classification outcome.
    """

    def __init__(self, edge, viewpoint_tag: str):
        self.edge = edge
        self.viewpoint_tag = viewpoint_tag
        super().__init__(
            f"Viewpoint {viewpoint_tag!r} does not match exactly one side of "
            f"{edge.kind.value} edge {edge.first.tag}->{edge.second.tag}"
        )


class InvalidDiplomacyPayload(DiplomacyError):
    """Raised when an upstream diplomacy row cannot be converted to an edge."""
    pass
