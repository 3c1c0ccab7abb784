"""
Default values used when converting API responses to models.
"""

EMPTY_STRING = ""
UNKNOWN = "Unknown"

TEMPO_DEFAULT_ID = "unknown"

# Schedule day type reported by Tempo Core for days with required time
WORKING_DAY = "WORKING_DAY"
