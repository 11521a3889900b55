"""
Input source enumeration for the listen race.
"""

from __future__ import annotations

from enum import Enum


class InputSource(str, Enum):
    """
    Which racing producer settled first.

    SPEECH:
        The recogniser returned an utterance.

    KEYPRESS:
        The operator pressed a key.
    """

    SPEECH = "SPEECH"
    KEYPRESS = "KEYPRESS"
