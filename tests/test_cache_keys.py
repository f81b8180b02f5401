"""
Tests for content-addressed cache keys.
"""

import re

from chat_orchestrator.entities import ChatTurn, Persona, Role
from chat_orchestrator.services import build_cache_key

PERSONA = Persona(id="p-1", name="Joven Simpático", content="...", is_active=True)


def _history(count: int) -> list[ChatTurn]:
    return [
        ChatTurn(role=Role.USER if i % 2 == 0 else Role.ASSISTANT, content=f"mensaje {i}")
        for i in range(count)
    ]


def test_key_format():
    """Keys are a prefix plus a fixed-length hex digest."""
    key = build_cache_key("Hola", [], None, "model-a")
    assert re.fullmatch(r"ai_cache:[0-9a-f]{64}", key)

    key = build_cache_key("Hola", [], None, "model-a", prefix="other")
    assert key.startswith("other:")


def test_same_content_same_key():
    """Equal inputs give equal keys, independent of object identity."""
    first = build_cache_key("Hola", _history(3), PERSONA, "model-a")
    second = build_cache_key("Hola", _history(3), Persona(id="p-1", name="x", content="y"), "model-a")
    assert first == second


def test_only_last_five_turns_count():
    """Turns older than the trailing five do not affect the key."""
    history = _history(8)
    changed = [ChatTurn(role=Role.USER, content="algo distinto")] + history[1:]

    assert build_cache_key("Hola", history, None, "m") == build_cache_key("Hola", changed, None, "m")


def test_turn_ids_do_not_count():
    """Only role and content of a turn take part in the key."""
    plain = [ChatTurn(role=Role.ASSISTANT, content="hola")]
    tagged = [ChatTurn(role=Role.ASSISTANT, content="hola", persona_id="p-9")]

    assert build_cache_key("x", plain, None, "m") == build_cache_key("x", tagged, None, "m")


def test_each_field_changes_key():
    """Changing any single field gives a different key."""
    history = _history(5)
    base = build_cache_key("Hola", history, PERSONA, "model-a")

    last_content = history[:-1] + [ChatTurn(role=history[-1].role, content="otro")]
    flipped = Role.ASSISTANT if history[-1].role is Role.USER else Role.USER
    last_role = history[:-1] + [ChatTurn(role=flipped, content=history[-1].content)]

    variants = [
        build_cache_key("Hola!", history, PERSONA, "model-a"),
        build_cache_key("Hola", last_content, PERSONA, "model-a"),
        build_cache_key("Hola", last_role, PERSONA, "model-a"),
        build_cache_key("Hola", history, None, "model-a"),
        build_cache_key("Hola", history, Persona(id="p-2", name="n", content="c"), "model-a"),
        build_cache_key("Hola", history, PERSONA, "model-b"),
    ]
    assert base not in variants
    assert len(set(variants)) == len(variants)


def test_turn_role_changes_key():
    """The same text said by the other side is a different conversation."""
    said_by_user = [ChatTurn(role=Role.USER, content="hola")]
    said_by_assistant = [ChatTurn(role=Role.ASSISTANT, content="hola")]

    assert build_cache_key("x", said_by_user, None, "m") != build_cache_key("x", said_by_assistant, None, "m")


def test_field_boundaries_do_not_collide():
    """Moving text across a field boundary gives a different key."""
    first = build_cache_key("ab", [ChatTurn(role=Role.USER, content="c")], None, "m")
    second = build_cache_key("a", [ChatTurn(role=Role.USER, content="bc")], None, "m")
    assert first != second


def test_string_roles_match_enum_roles():
    """Roles given as plain strings hash like the enum values."""
    enum_turns = [ChatTurn(role=Role.USER, content="hola")]
    str_turns = [ChatTurn(role="USER", content="hola")]  # type: ignore[arg-type]

    assert build_cache_key("x", enum_turns, None, "m") == build_cache_key("x", str_turns, None, "m")


def test_no_collisions_in_corpus():
    """A corpus of distinct requests maps to distinct keys."""
    keys = set()
    count = 0
    for i in range(40):
        for model in ("model-a", "model-b"):
            for persona in (None, PERSONA):
                for turns in (0, 1, 5):
                    keys.add(build_cache_key(f"pregunta {i}", _history(turns), persona, model))
                    count += 1

    assert len(keys) == count


def test_handles_empty_and_unicode_input():
    """Empty and non-ASCII text produce valid keys."""
    assert build_cache_key("", [], None, "") != build_cache_key("ñ", [], None, "")
    assert build_cache_key("¿Qué tal? 😊", _history(2), PERSONA, "m").startswith("ai_cache:")
