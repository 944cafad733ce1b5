"""Content fingerprints for change detection."""

FINGERPRINT_SEED = 5381
FINGERPRINT_MASK = 0xFFFFFFFF


def fingerprint(content: str) -> int:
    """
    Compute a 32-bit djb2 fingerprint of some content.

    The hash runs over UTF-16 code units so that characters outside the basic
    multilingual plane contribute two units each, matching fingerprints stored
    by other clients of the same history format.

    Args:
        content: Text to fingerprint

    Returns:
        Unsigned 32-bit fingerprint
    """
    value = FINGERPRINT_SEED
    data = content.encode('utf-16-le', 'surrogatepass')
    for low, high in zip(data[0::2], data[1::2]):
        value = (value * 33 + (low | (high << 8))) & FINGERPRINT_MASK

    return value


def content_changed(content: str, expected: int) -> bool:
    """Check whether content no longer matches a previously taken fingerprint."""
    return fingerprint(content) != expected
