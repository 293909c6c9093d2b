"""Natural-language solver for SmartCalc.

Sends free-text math questions ("sqrt of 134 + 5") to a local LLM server
through the ollama client and returns the answer as display text. Every
failure resolves to an error sentinel so callers can route it through
the same path as a successful answer.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from jinja2 import Environment, PackageLoader, select_autoescape
from ollama import AsyncClient

from .config import CalcConfig

__all__ = ["Solver", "SolveOutcome", "clean_answer", "ERROR", "MODEL_MISSING"]

logger = logging.getLogger(__name__)

ERROR = "Error"
MODEL_MISSING = "Error: Model Not Configured"

_FENCE = re.compile(r"^```[\w-]*\s*|\s*```$")


@lru_cache(maxsize=1)
def _templates() -> Environment:
    return Environment(
        loader=PackageLoader("smartcalc", "templates"),
        autoescape=select_autoescape(),
        trim_blocks=True,
        lstrip_blocks=True,
    )


@dataclass(frozen=True)
class SolveOutcome:
    """Result of one solver call.

    Attributes:
        query: The question as asked.
        result: Answer text on success.
        error: Error sentinel on failure.
    """

    query: str
    result: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def display(self) -> str:
        """Text to show and record, whether or not the solve worked."""
        return self.result if self.ok else self.error


def clean_answer(text: Optional[str]) -> str:
    """Strip whitespace, code fences and stray backticks from a model answer."""
    text = (text or "").strip()
    text = _FENCE.sub("", text).strip()
    return text.strip("`").strip()


class Solver:
    """Answers math questions with an LLM.

    Example:
        >>> solver = Solver(CalcConfig(solver_model="llama3.2"))
        >>> outcome = asyncio.run(solver.solve("half of 84"))
        >>> outcome.display
        '42'
    """

    def __init__(self, config: Optional[CalcConfig] = None, client=None):
        """Initialize the solver.

        Args:
            config: Solver settings. Defaults are used when omitted.
            client: Object with an async chat() like ollama.AsyncClient.
                A new one is built from the configured host for every
                solve when omitted.
        """
        self.config = config or CalcConfig()
        self._client = client

    def connect(self):
        """Return the client for one solve.

        An injected client is reused. Otherwise a new AsyncClient is built
        per call: its connection pool is bound to the event loop that first
        uses it, and each CLI question runs in its own loop.
        """
        if self._client is not None:
            return self._client
        return AsyncClient(host=self.config.solver_host)

    def system_instruction(self) -> str:
        """Render the system prompt sent with every question."""
        template = _templates().get_template("solver_prompt.j2")
        return template.render(decimal_places=self.config.solver_decimal_places).strip()

    async def solve(self, query: str) -> SolveOutcome:
        """Ask the model one question.

        Args:
            query: Free-text math question.

        Returns:
            SolveOutcome with the answer, or with an error sentinel when
            the model is not configured, times out, fails, or answers
            with nothing.
        """
        if not self.config.solver_model:
            logger.warning("No solver model configured")
            return SolveOutcome(query=query, error=MODEL_MISSING)

        messages = [
            {"role": "system", "content": self.system_instruction()},
            {"role": "user", "content": query},
        ]
        logger.debug("Solving %r with %s", query, self.config.solver_model)

        client = self.connect()
        try:
            response = await asyncio.wait_for(
                client.chat(
                    model=self.config.solver_model,
                    messages=messages,
                    options={"temperature": self.config.solver_temperature},
                ),
                timeout=self.config.solver_timeout,
            )
            answer = clean_answer(response["message"]["content"])
        except asyncio.TimeoutError:
            logger.error("Solver timed out after %ss", self.config.solver_timeout)
            return SolveOutcome(query=query, error=ERROR)
        except Exception as e:
            logger.error("Solver error: %s", e)
            return SolveOutcome(query=query, error=ERROR)

        if not answer:
            logger.warning("Solver returned an empty answer for %r", query)
            return SolveOutcome(query=query, error=ERROR)

        return SolveOutcome(query=query, result=answer)
