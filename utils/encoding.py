"""Encoding detection utilities"""

import chardet


def detect_encoding_bytes(raw: bytes) -> str:
    """
    Detect the encoding of raw file content with fallback support

    Args:
        raw: File content (only the first 8KB are inspected)

    Returns:
        Detected encoding string
    """
    # Check for BOM
    if raw.startswith(b'\xef\xbb\xbf'):
        return 'utf-8-sig'

    sample = raw[:8192]
    try:
        sample.decode('utf-8')
        return 'utf-8'
    except UnicodeDecodeError as e:
        # Multi-byte sequence cut by the sample boundary
        if len(raw) > len(sample) and e.start >= len(sample) - 3:
            return 'utf-8'

    result = chardet.detect(sample)
    if result['encoding'] and result['confidence'] > 0.7:
        return result['encoding']

    # Fallback: try common encodings
    for encoding in ['cp1252', 'iso-8859-1']:
        try:
            sample.decode(encoding)
            return encoding
        except (UnicodeDecodeError, LookupError):
            continue

    # Final fallback
    return 'latin-1'
