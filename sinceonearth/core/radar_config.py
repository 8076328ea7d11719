# --------------------------------------------------
# PRESENCE
# --------------------------------------------------

# How long a reported location stays live
PRESENCE_STALE_TTL_SECONDS = 120

# --------------------------------------------------
# PROXIMITY
# --------------------------------------------------

DEFAULT_RADIUS_KM = 10

# Mean Earth radius, spherical approximation
EARTH_RADIUS_KM = 6371
