"""
Behavioural constants for the dialogue session.

Rules:
- If changing a value changes session behaviour, it belongs here.
- No magic strings or numbers elsewhere in the codebase.
- Deployment-specific values (hosts, ports, models) live in config.py.
"""

from __future__ import annotations

from typing import Final

# =============================================================================
# Speech recognition
# =============================================================================

# Furhat's recogniser reports "NOMATCH" when nothing intelligible was heard.
NO_MATCH_MARKER: Final[str] = "nomatch"
NO_MATCH_PLACEHOLDER: Final[str] = "..."

# Separator used when committing buffered speech fragments as one user turn.
FRAGMENT_SEPARATOR: Final[str] = " "

# =============================================================================
# Turn-taking rhythm
# =============================================================================

# Pause after the first (long, explanatory) utterance, and after every other one.
FIRST_TURN_PAUSE_MS: Final[int] = 10_000
TURN_PAUSE_MS: Final[int] = 1_000

# =============================================================================
# Front-end defaults
# =============================================================================

DEFAULT_VOICE: Final[str] = "en-US-EchoMultilingualNeural"
ATTEND_TARGET: Final[str] = "CLOSEST"

# =============================================================================
# Fixed assistant lines
# =============================================================================

APOLOGY_TEXT: Final[str] = "I couldn't process that. Please say it again."
FAREWELL_TEXT: Final[str] = "Thank you for your participation."

# =============================================================================
# Operator console
# =============================================================================

TRANSCRIPT_HEADER: Final[str] = "=== MESSAGE HISTORY ==="
TRANSCRIPT_FOOTER: Final[str] = "======================"

UNKNOWN_KEY_NOTICE: Final[str] = (
    "Unknown key, please press L, M, 0, or stimulus keys (1-4, Q-R, A-F)"
)
CONFIRM_DUMP_PROMPT: Final[str] = ">>> DO YOU WANT TO PRINT THE CONVERSATION (Y/N) <<<"

KEY_BANNER: Final[str] = """
=== KEYBOARD CONTROLS ===
L = Continue discussion (send to LLM)
M = List all of the conversation so far
0 = End session
Ctrl+C = Exit immediately

STIMULI:

Questioning versions:
1 = Hmm, the Doctor?
2 = Hmm, the pregnant lady?
3 = Hmm, the child?
4 = Hmm, the pilot?

Paused versions:
Q = (pause) The Doctor?
W = (pause) The pregnant lady?
E = (pause) The child?
R = (pause) The pilot?

Mocking versions:
A = Hahaha, the Doctor?
S = Hahaha, the pregnant lady?
D = Hahaha, the child?
F = Hahaha, the pilot?
========================

User speech is accumulated until a key is pressed; the buffered
fragments are then committed as one user turn. NOMATCH results are
recorded as "...".
"""
