"""Content-addressed cache keys for chat requests."""

import hashlib
import json
from collections.abc import Sequence

from chat_orchestrator.entities import ChatTurn, Persona, Role

# Only the trailing turns of the history take part in the key.
HISTORY_WINDOW = 5
DEFAULT_PERSONA_KEY = "default"


def build_cache_key(
    user_message: str,
    history: Sequence[ChatTurn],
    persona: Persona | None,
    model_id: str,
    prefix: str = "ai_cache",
) -> str:
    """Derive a stable key from the semantic content of a request.

    The fields are encoded as canonical JSON (sorted keys, fixed
    separators) so that field boundaries cannot collide, then hashed
    with SHA-256.

    Args:
        user_message: The new user message
        history: Conversation history, oldest first
        persona: The active persona, if any
        model_id: Model identifier the request would be sent to
        prefix: Namespace prepended to the digest

    Returns:
        A key of the form "<prefix>:<64 hex chars>"
    """
    recent = list(history)[-HISTORY_WINDOW:]
    payload = {
        "message": user_message,
        "history": [{"role": Role(turn.role).value, "content": turn.content} for turn in recent],
        "prompt": persona.id if persona else DEFAULT_PERSONA_KEY,
        "model": model_id,
    }
    serialized = json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))
    digest = hashlib.sha256(serialized.encode("utf-8")).hexdigest()
    return f"{prefix}:{digest}"

