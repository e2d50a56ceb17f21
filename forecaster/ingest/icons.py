"""Map NWS icon URLs to condition names.

Reference: https://api.weather.gov/icons
"""

# Order matters: the first short code found in the URL wins.
NOAA_ICON_CODES: dict[str, str] = {
    "wind_skc": "clear",
    "wind_few": "partly-cloudy",
    "wind_sct": "partly-cloudy",
    "wind_bkn": "cloudy",
    "wind_ovc": "cloudy",
    "snow": "snow",
    "rain_snow": "snow",
    "rain_sleet": "sleet",
    "snow_sleet": "snow",
    "fzra": "Freezing rain",
    "rain_fzra": "rain",
    "snow_fzra": "snow",
    "sleet": "sleet",
    "rain": "rain",
    "rain_showers": "rain",
    "rain_showers_hi": "rain",
    "tsra": "thunderstorm",
    "tsra_sct": "thunderstorm",
    "tsra_hi": "thunderstorm",
    "tornado": "tornado",
    "hurricane": "tornado",
    "tropical_storm": "storm",
    "dust": "fog",
    "smoke": "fog",
    "haze": "fog",
    "hot": "clear",
    "cold": "clear",
    "blizzard": "snow",
    "fog": "fog",
    "skc": "clear",
    "few": "partly-cloudy",
    "sct": "partly-cloudy",
    "bkn": "cloudy",
    "ovc": "cloudy",
}

_DAY_NIGHT_NAMES = ("clear", "partly-cloudy")


def icon_name(icon: object) -> str | None:
    """Return the condition name for an icon URL, or None if unrecognized."""
    if not isinstance(icon, str):
        return None
    for code, name in NOAA_ICON_CODES.items():
        if code not in icon:
            continue
        if name in _DAY_NIGHT_NAMES:
            return f"{name}-night" if "night" in icon else f"{name}-day"
        return name
    return None
