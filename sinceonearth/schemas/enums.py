from enum import Enum

class FlightStatus(str, Enum):
    scheduled = "scheduled"
    landed = "Landed"
