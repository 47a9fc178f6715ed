"""Low-level codecs and MRZ formatting helpers."""
