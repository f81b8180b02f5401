"""Offline responder.

Produces a canned, persona-flavoured reply without touching the
network. Used when no API key is configured and as the last resort
when the provider call fails.
"""

import random
from enum import Enum

from chat_orchestrator.entities import AIReply, Persona


class PersonaStyle(str, Enum):
    YOUNG = "young"
    TRADITIONAL = "traditional"
    BEGINNER = "beginner"
    PROFESSIONAL = "professional"
    DEFAULT = "default"


# Checked in order; the first name fragment found wins.
STYLE_MARKERS: list[tuple[str, PersonaStyle]] = [
    ("Joven", PersonaStyle.YOUNG),
    ("Tradicional", PersonaStyle.TRADITIONAL),
    ("Gringo", PersonaStyle.BEGINNER),
    ("Profesional", PersonaStyle.PROFESSIONAL),
]

STYLE_REPLIES: dict[PersonaStyle, tuple[str, ...]] = {
    PersonaStyle.YOUNG: (
        "¡Hey! ¡Qué tal! Me parece genial lo que me dices 😊",
        "Oye, eso suena súper interesante. ¿Me cuentas más?",
        "¡Wow! No sabía eso. Gracias por compartirlo conmigo.",
        "Está buenísimo lo que me comentas. ¿Y qué más?",
    ),
    PersonaStyle.TRADITIONAL: (
        "Buenos días. Le agradezco su consulta. Permítame ayudarle.",
        "Estimado usuario, he recibido su mensaje. ¿En qué puedo asistirle?",
        "Su consulta es muy importante para nosotros. Le responderé con gusto.",
        "Muchas gracias por contactarnos. Estaré encantado de ayudarle.",
    ),
    PersonaStyle.BEGINNER: (
        "Hello amigo! I understand poco español but I try to help.",
        "Ah sí, I think I comprendo what you say. Very interesante!",
        "Sorry if my español is not perfecto, but I want to ayudar.",
        "Thank you for your mensaje. Is very importante for me.",
    ),
    PersonaStyle.PROFESSIONAL: (
        "Gracias por su mensaje. Para avanzar, ¿podría indicarme el objetivo concreto?",
        "Entendido. Le propongo revisar el tema en tres puntos: contexto, opciones y siguiente paso.",
        "He registrado su consulta. ¿Qué plazo y prioridad tiene este asunto?",
        "Perfecto. Con más detalles podré darle una recomendación precisa.",
    ),
    PersonaStyle.DEFAULT: (
        "Entiendo tu consulta. ¿Podrías darme más detalles?",
        "Gracias por tu mensaje. Estoy aquí para ayudarte.",
        "Interesante punto de vista. ¿Qué opinas sobre esto?",
        "Me parece una buena pregunta. Déjame pensarlo...",
        "Claro, puedo ayudarte con eso. ¿Necesitas algo específico?",
    ),
}

# (keywords, reply) pairs; only the first matching group applies.
KEYWORD_REPLIES: list[tuple[tuple[str, ...], str]] = [
    (("hola", "buenos"), "¡Hola! Un gusto saludarte. ¿En qué puedo ayudarte hoy?"),
    (("gracias",), "¡De nada! Es un placer poder ayudarte."),
    (("adiós", "chau"), "¡Hasta luego! Que tengas un excelente día."),
]


def classify_persona(persona: Persona | None) -> PersonaStyle:
    """Map a persona to an offline reply style by its name."""
    if persona is None:
        return PersonaStyle.DEFAULT

    for marker, style in STYLE_MARKERS:
        if marker in persona.name:
            return style
    return PersonaStyle.DEFAULT


class OfflineResponder:
    """Generates fallback replies that never fail.

    Example:
        ```python
        responder = OfflineResponder()
        reply = responder.generate("Hola", persona)
        ```
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def candidates(self, user_message: str, persona: Persona | None) -> list[str]:
        """List the replies ``generate`` picks from."""
        replies = list(STYLE_REPLIES[classify_persona(persona)])

        lowered = (user_message or "").lower()
        for keywords, reply in KEYWORD_REPLIES:
            if any(keyword in lowered for keyword in keywords):
                replies.insert(0, reply)
                break

        return replies

    def generate(self, user_message: str, persona: Persona | None) -> AIReply:
        """Pick a reply for the message.

        Args:
            user_message: The user's message (may be empty)
            persona: The active persona, if any

        Returns:
            A non-empty reply tagged with the persona id
        """
        content = self._rng.choice(self.candidates(user_message, persona))
        return AIReply(content=content, persona_id=persona.id if persona else None)
