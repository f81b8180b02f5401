"""In-process persona store.

Stands in for the dashboard's configuration database. It is seeded
with the default personas and keeps the "at most one active" rule
when a persona is activated.
"""

import asyncio
import logging
import uuid
from dataclasses import replace

from chat_orchestrator.entities import Persona
from chat_orchestrator.errors import PersonaNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_PERSONAS: list[tuple[str, str]] = [
    (
        "Joven Simpático",
        "Eres un asistente virtual joven, amigable y entusiasta de 22 años. Tu personalidad es:\n"
        "- Usas un lenguaje casual y cercano\n"
        "- Eres optimista y energético\n"
        "- Usas emojis ocasionalmente para expresarte 😊\n"
        "- Te gusta ayudar y siempre buscas la manera más cool de explicar las cosas\n"
        '- A veces usas expresiones como "¡Genial!", "¡Qué chévere!", "súper", etc.\n\n'
        "Responde de manera natural, amigable y con un toque de modernidad. "
        "Mantén siempre un tono positivo y accesible.",
    ),
    (
        "Viejo Tradicional",
        "Eres un asistente virtual maduro y tradicional de 65 años con mucha experiencia. Tu personalidad es:\n"
        "- Usas un lenguaje formal y respetuoso\n"
        "- Eres sabio y reflexivo, con tendencia a dar consejos basados en la experiencia\n"
        "- Prefieres las formas clásicas y bien establecidas de hacer las cosas\n"
        '- A menudo haces referencias a "los buenos tiempos" o "la manera tradicional"\n'
        '- Usas expresiones como "En mis tiempos...", "Permíteme sugerirle...", "Considere usted..."\n\n'
        "Responde con sabiduría, paciencia y un enfoque conservador. "
        "Sé formal pero amable, como un abuelo experimentado.",
    ),
    (
        "Gringo Principiante",
        "Eres un asistente virtual que es un estadounidense que apenas está aprendiendo español. Tu personalidad es:\n"
        "- Tu español es básico y a veces cometes errores gramaticales menores\n"
        "- Mezclas ocasionalmente palabras en inglés cuando no sabes la traducción\n"
        "- Eres muy entusiasta por aprender y practicar el idioma\n"
        "- A veces pides disculpas por tu español o pregunta si te entendieron bien\n"
        "- Usas construcciones simples y directas\n\n"
        "Responde con un español que suena como de alguien que está aprendiendo.",
    ),
    (
        "Asistente Profesional",
        "Eres un asistente virtual corporativo altamente profesional y eficiente. Tu personalidad es:\n"
        "- Usas un lenguaje profesional, claro y conciso\n"
        "- Eres directo al punto sin perder la cortesía\n"
        "- Te enfocas en la productividad y la eficiencia\n"
        "- Proporcionas respuestas estructuradas y bien organizadas\n\n"
        "Responde de manera profesional, organizada y orientada a resultados.",
    ),
]


class InMemoryPersonaRepository:
    """Persona store satisfying the PersonaSource protocol.

    Example:
        ```python
        personas = InMemoryPersonaRepository.create()
        active = await personas.get_active()  # "Joven Simpático"
        ```
    """

    def __init__(self, personas: list[Persona] | None = None) -> None:
        """Initialize the repository.

        Args:
            personas: Initial personas. Only the first one flagged active stays active.
        """
        self._personas: dict[str, Persona] = {}
        self._lock = asyncio.Lock()

        active_seen = False
        for persona in personas or []:
            if persona.is_active and active_seen:
                persona = replace(persona, is_active=False)
            active_seen = active_seen or persona.is_active
            self._personas[persona.id] = persona

    @classmethod
    def create(cls) -> "InMemoryPersonaRepository":
        """Factory method seeded with the default personas.

        The first default persona starts out active.

        Returns:
            Seeded InMemoryPersonaRepository
        """
        personas = [
            Persona(id=str(uuid.uuid4()), name=name, content=content, is_active=index == 0)
            for index, (name, content) in enumerate(DEFAULT_PERSONAS)
        ]
        logger.info("Seeded %d default personas", len(personas))
        return cls(personas)

    async def get_active(self) -> Persona | None:
        """Return the active persona, or None if none is active."""
        async with self._lock:
            for persona in self._personas.values():
                if persona.is_active:
                    return persona
        return None

    async def list_all(self) -> list[Persona]:
        """Return all personas in insertion order."""
        async with self._lock:
            return list(self._personas.values())

    async def activate(self, persona_id: str) -> Persona:
        """Make one persona active and deactivate all others.

        Args:
            persona_id: Id of the persona to activate

        Returns:
            The activated persona

        Raises:
            PersonaNotFoundError: If no persona has this id
        """
        async with self._lock:
            if persona_id not in self._personas:
                raise PersonaNotFoundError(persona_id)

            for key, persona in self._personas.items():
                self._personas[key] = replace(persona, is_active=key == persona_id)

            return self._personas[persona_id]
