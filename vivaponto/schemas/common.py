"""
Shared field types
"""
from typing import Annotated, Optional
from pydantic import StringConstraints

TIME_PATTERN = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"

# "HH:MM" on the 24h clock
ClockTime = Annotated[str, StringConstraints(strip_whitespace=True, pattern=TIME_PATTERN)]
OptionalClockTime = Optional[ClockTime]

NonBlank = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
