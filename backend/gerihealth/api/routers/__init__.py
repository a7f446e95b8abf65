from . import drugs, locations, profile, scan, speech

__all__ = ["drugs", "locations", "profile", "scan", "speech"]
