"""
Demo showing how to use freeplay-lite.

Fetches a prompt template, renders it, simulates a model reply and records
the completion and trace:
    pip install -e ".[examples]"
    export FREEPLAY_API_KEY="your-key"
    export FREEPLAY_PROJECT_ID="your-project-id"
    python demo.py "my prompt" latest
"""

import logging
import sys
import time
import uuid

from dotenv import load_dotenv

import freeplay_lite
from freeplay_lite import CallInfo, Message, PromptTemplate, Usage

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

load_dotenv()

VARIABLES = {
    "name": "Jairo",
    "language": "Spanish",
}


def simulate_llm_response(variables: dict) -> str:
    """Stand-in for a real model call."""
    return f"¡Hola {variables['name']}! Es un placer saludarte en {variables['language']}."


def main(prompt_name: str, environment: str = "latest") -> int:
    config = freeplay_lite.Configuration.from_env()
    try:
        config.validate()
    except freeplay_lite.ConfigurationError as e:
        logger.error("%s", e)
        return 1

    client = freeplay_lite.create_client(config=config)

    result = client.fetch_template(name=prompt_name, environment=environment)
    if not result.ok:
        logger.error("Failed to fetch prompt template (status %s): %s", result.status_code,
                     result.error_message or result.body)
        return 1

    template = PromptTemplate.from_dict(result.body)
    rendered = freeplay_lite.render(template, VARIABLES)
    logger.info("Rendered %d messages from %s", len(rendered), template.name)

    start = time.time()
    reply = simulate_llm_response(VARIABLES)
    end = time.time()

    session_id = str(uuid.uuid4())
    trace_id = str(uuid.uuid4())
    call_info = CallInfo(
        model=template.metadata.model or "unknown",
        provider=template.metadata.provider or "unknown",
        start_time=start,
        end_time=end,
        usage=Usage(
            prompt_tokens=freeplay_lite.estimate_message_tokens(rendered),
            completion_tokens=freeplay_lite.estimate_tokens(reply),
        ),
    )

    completion = client.record_completion(
        session_id=session_id,
        messages=rendered + [Message(role="assistant", content=reply)],
        inputs=VARIABLES,
        call_info=call_info,
        trace_id=trace_id,
        prompt_version_id=template.version_id,
        environment=environment,
    )
    if not completion.ok:
        logger.error("Failed to record completion (status %s): %s", completion.status_code, completion.body)
        return 1

    trace = client.record_trace(
        session_id=session_id,
        trace_id=trace_id,
        input=VARIABLES,
        output=reply,
        agent_name="greeting-demo",
    )
    if not trace.ok:
        logger.error("Failed to record trace (status %s): %s", trace.status_code, trace.body)
        return 1

    logger.info("Recorded session %s, trace %s", session_id, trace_id)
    return 0


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python demo.py <prompt_name> [environment]")
        sys.exit(1)
    sys.exit(main(*sys.argv[1:3]))
