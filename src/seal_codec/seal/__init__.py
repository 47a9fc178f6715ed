"""Visible digital seal codec."""

from .digital_seal import DigitalSeal, DigitalSealV3, DigitalSealV4, decode_seal

__all__ = ["DigitalSeal", "DigitalSealV3", "DigitalSealV4", "decode_seal"]
