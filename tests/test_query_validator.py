import asyncio
import json

import pytest

from colorsense.core.config import AppSettings
from colorsense.core.errors import ConfigurationError, GenerationServiceError
from colorsense.core.services.query_validator import QueryValidator, build_validation_prompt

from tests.helpers import VALIDATION_MARKER, FakeGenerator


def _validator(reply, settings):
    generator = FakeGenerator(reply)
    return QueryValidator(generator, settings), generator


def test_prompt_embeds_text_and_asks_for_json():
    prompt = build_validation_prompt("rainy afternoon")
    assert '"rainy afternoon"' in prompt
    assert VALIDATION_MARKER in prompt
    assert '"impliedContext"' in prompt


def test_valid_verdict_with_surrounding_prose(settings):
    reply = 'Verdict:\n{"valid": true, "reason": "it is a color", "impliedContext": ""}\nThanks'
    validator, generator = _validator(lambda prompt: reply, settings)

    verdict = asyncio.run(validator.validate("sage green"))

    assert verdict.valid is True
    assert verdict.reason == "it is a color"
    assert verdict.implied_context is None
    assert len(generator.prompts) == 1


def test_invalid_verdict_keeps_implied_context(settings):
    reply = json.dumps({"valid": False, "reason": "a mood", "impliedContext": "soft muted greys"})
    validator, _ = _validator(lambda prompt: reply, settings)

    verdict = asyncio.run(validator.validate("melancholy"))

    assert verdict.valid is False
    assert verdict.implied_context == "soft muted greys"


@pytest.mark.parametrize(
    "reply",
    [
        "VALID",
        "",
        '{"reason": "missing the verdict"}',
        GenerationServiceError("boom"),
        RuntimeError("unexpected"),
    ],
)
def test_failures_fall_back_to_configured_verdict(settings, reply):
    validator, _ = _validator(lambda prompt: reply, settings)

    verdict = asyncio.run(validator.validate("teal"))

    assert verdict.valid is True
    assert verdict.reason.startswith("validator_unavailable:")


def test_fail_closed_policy():
    strict = AppSettings(_env_file=None, ai_api_key="test-key", validator_fallback_valid=False)
    validator, _ = _validator(lambda prompt: "not json", strict)

    verdict = asyncio.run(validator.validate("teal"))

    assert verdict.valid is False


def test_missing_credential_raises_before_calling(unconfigured_settings):
    validator, generator = _validator(lambda prompt: "{}", unconfigured_settings)

    with pytest.raises(ConfigurationError):
        asyncio.run(validator.validate("teal"))
    assert generator.prompts == []
