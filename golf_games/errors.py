class GolfGamesError(Exception):
    pass


class InvalidRoundError(GolfGamesError):
    """Round data cannot be scored under the requested format."""
