"""Mapping of URL paths onto bucket and object key."""

from bucketfs.url import DELIMITER


def resolve_bucket_and_key(path: str, delimiter: str = DELIMITER) -> tuple[str, str]:
    """Split a URL path into bucket name and object key.

    The path is split on the delimiter into at most three fields, so the key
    keeps any further delimiters it contains:

        ""              -> ("", "")          storage root
        "/photos"       -> ("photos", "")    bucket root
        "/photos/"      -> ("photos", "")
        "/photos/a/b"   -> ("photos", "a/b")

    Malformed input, such as a key without a bucket ("//a"), degrades to the
    storage root; there are no error cases.

    Args:
        path: URL path, normally starting with the delimiter
        delimiter: Path separator

    Returns:
        Tuple of (bucket, key)
    """
    fields = path.split(delimiter, 2)
    # A key is only meaningful below a bucket
    if len(fields) < 2 or not fields[1]:
        return "", ""
    if len(fields) == 2:
        return fields[1], ""
    return fields[1], fields[2]
