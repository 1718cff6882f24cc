"""Generadores falsos y respuestas de prueba compartidas por los tests."""

from __future__ import annotations

import asyncio
import json
import re
from typing import Callable

VALIDATION_MARKER = "Decide whether it is related to COLORS"
COLOR_MARKER = "Given this color description"
SUGGESTION_MARKER = "I need color recommendations for"

VALID_VERDICT = json.dumps({"valid": True, "reason": "names a color", "impliedContext": ""})

_PHRASE_RE = re.compile(r'(?:color description|user input|recommendations for): "(.*?)"', re.DOTALL)


def phrase_of(prompt: str) -> str:
    match = _PHRASE_RE.search(prompt)
    assert match, prompt
    return match.group(1)


def color_json(name: str, hex_code: str, description: str = "a clear color") -> str:
    return json.dumps({"colorName": name, "hexCode": hex_code, "description": description})


Reply = Callable[[str], "str | Exception"]


class FakeGenerator:
    """Scripted `TextGenerator`: `reply(prompt)` returns text or an exception to raise."""

    def __init__(self, reply: Reply) -> None:
        self._reply = reply
        self.prompts: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def kinds(self) -> list[str]:
        out = []
        for prompt in self.prompts:
            if VALIDATION_MARKER in prompt:
                out.append("validate")
            elif SUGGESTION_MARKER in prompt:
                out.append("suggest")
            else:
                out.append("resolve")
        return out

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            result = self._reply(prompt)
        finally:
            self.in_flight -= 1
        if isinstance(result, Exception):
            raise result
        return result


def always_valid(resolve: Callable[[str], "str | Exception"]) -> Reply:
    """Validator always accepts; color prompts are answered by `resolve(phrase)`."""

    def reply(prompt: str) -> "str | Exception":
        if VALIDATION_MARKER in prompt:
            return VALID_VERDICT
        return resolve(phrase_of(prompt))

    return reply

