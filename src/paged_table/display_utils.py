"""Display utilities for prettifying record field names."""

_ACRONYMS = {"id", "url", "api"}

_RENAMES = {
    "artist_display": "Artists",
    "place_of_origin": "Place of Origin",
}


def prettify_name(name: str) -> str:
    """Convert snake_case field names to Title Case column headers.

    Examples::

        prettify_name("date_start")       # -> "Date Start"
        prettify_name("record_id")        # -> "Record ID"
        prettify_name("place_of_origin")  # -> "Place of Origin"
    """
    if name in _RENAMES:
        return _RENAMES[name]
    words = name.replace("_", " ").split()
    return " ".join(
        w.upper() if w.lower() in _ACRONYMS else w.capitalize()
        for w in words
    )
