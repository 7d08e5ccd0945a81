# services/extractor.py

import logging
from asyncio import wait_for, TimeoutError
from collections.abc import Mapping
from typing import Any, Dict, Union

from core.outcome import FailureKind, StageFailure
from core.ports import CompletionService
from core.schema import IntentSchema

logger = logging.getLogger("extractor")


def render_prompt(template: str, text: str, schema: IntentSchema) -> str:
    return template.replace("{{fields}}", schema.describe()).replace("{{text}}", text or "")


async def extract_intent(
    service: CompletionService,
    template: str,
    text: str,
    schema: IntentSchema,
    timeout: float = 30,
) -> Union[Dict[str, Any], StageFailure]:
    """
    One call to the completion service. No retries.
    Returns the untrusted candidate dict or an ExtractionFailure.
    """
    prompt = render_prompt(template, text, schema)
    logger.info(f"[EXTRACT] schema={schema.name}, text_length={len(text or '')}")

    try:
        candidate = await wait_for(service.extract(prompt, schema), timeout=timeout)
    except TimeoutError:
        logger.warning(f"[EXTRACT TIMEOUT] schema={schema.name}, timeout={timeout}")
        return StageFailure(
            kind=FailureKind.EXTRACTION_FAILURE,
            message=f"Intent extraction timed out after {timeout:g}s",
        )
    except Exception as e:
        logger.warning(f"[EXTRACT ERROR] schema={schema.name}, error={e}")
        return StageFailure(
            kind=FailureKind.EXTRACTION_FAILURE,
            message=f"Intent extraction failed: {e}",
        )

    if not isinstance(candidate, Mapping):
        return StageFailure(
            kind=FailureKind.EXTRACTION_FAILURE,
            message=(
                "Intent extraction returned unparseable output "
                f"({type(candidate).__name__})"
            ),
        )

    return dict(candidate)
