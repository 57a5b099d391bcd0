import os
from dataclasses import dataclass
from typing import Optional

# Inteiros de 32 bits com sinal
INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1

INPUT_PROMPT = " ? "


@dataclass(frozen=True)
class Settings:
    """
    Configuração do IDE web. O núcleo do interpretador não lê o ambiente;
    recebe estas opções por argumento.
    """
    host: str = "0.0.0.0"
    port: int = 8000
    input_prompt: str = INPUT_PROMPT
    max_steps: Optional[int] = 100_000
    max_sessions: int = 100
    session_ttl: float = 3600.0

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        max_steps = environ.get("BASIC_MAX_STEPS")
        return cls(
            host=environ.get("BASIC_HOST", cls.host),
            port=int(environ.get("BASIC_PORT", cls.port)),
            max_steps=int(max_steps) if max_steps else cls.max_steps,
            max_sessions=int(environ.get("BASIC_MAX_SESSIONS", cls.max_sessions)),
            session_ttl=float(environ.get("BASIC_SESSION_TTL", cls.session_ttl)),
        )
