"""Agent entry point: natural-language request in, user-facing reply out.

The orchestrator builds the instruction prompt, asks the completion
provider for a reply, and hands that reply to the parser and dispatcher.

Streaming requests are buffered: every fragment from the provider is
collected before anything is parsed, because a function call can only be
recognized from its complete JSON body. The caller therefore receives a
single chunk once the provider stream has ended. Store writes only happen
after the full reply is available, so abandoning a request while the model
is still generating never leaves a partial write behind.
"""

from typing import Iterator, Optional

from agent.dispatcher import IntentDispatcher, utc_today
from agent.parser import parse
from categorization import REQUIRED_CATEGORIES
from llm.prompts.loader import PromptManager
from llm.providers.base import CompletionProvider
from logger import get_logger, user_context

logger = get_logger()

PROVIDER_ERROR_MESSAGE = (
    "An error occurred while processing your request. Please try again later."
)

PROMPT_NAME = "agent"


class AgentOrchestrator:
    """Runs the prompt -> completion -> parse -> dispatch pipeline."""

    def __init__(
        self,
        services,
        provider: CompletionProvider,
        prompt_manager: Optional[PromptManager] = None,
        dispatcher: Optional[IntentDispatcher] = None,
    ):
        """Initialize the orchestrator.

        Args:
            services: Services container used by the default dispatcher.
            provider: Completion provider that generates replies.
            prompt_manager: Prompt loader, defaults to llm/prompts.
            dispatcher: Intent dispatcher, built from services by default.
        """
        self.services = services
        self.provider = provider
        self.prompt_manager = prompt_manager or PromptManager()
        self.dispatcher = dispatcher or IntentDispatcher(
            services, recent_limit=services.config.agent_recent_limit
        )

    def build_prompt(self, user_prompt: str) -> str:
        """Render the instruction prompt followed by the user's request."""
        rendered = self.prompt_manager.render_prompt(
            PROMPT_NAME,
            {
                "categories": "\n".join(f"- {name}" for name in REQUIRED_CATEGORIES),
                "today": utc_today().isoformat(),
                "request": user_prompt,
            },
        )
        logger.debug(f"Rendered agent prompt version {rendered['version']}")
        return rendered["system_prompt"] + "\n" + rendered["user_prompt"]

    def handle(self, prompt: str, user_id: str) -> str:
        """Process a request and return the complete reply.

        Args:
            prompt: The user's natural-language request.
            user_id: Owner of any transactions read or written.

        Returns:
            The dispatcher's message, or a fixed error message if the
            completion provider failed.

        Raises:
            ValueError: If prompt or user_id is empty.
        """
        _validate_request(prompt, user_id)

        with user_context(user_id):
            logger.info(f"Handling agent request: {prompt}")
            try:
                reply = self.provider.complete(self.build_prompt(prompt))
            except Exception as e:
                logger.error(f"Completion provider failed: {e}")
                return PROVIDER_ERROR_MESSAGE

            logger.info("Received response from completion provider")
            return self._dispatch(reply, user_id)

    def handle_streaming(self, prompt: str, user_id: str) -> Iterator[str]:
        """Process a request and yield the reply as chunks.

        The provider stream is consumed to the end before parsing, so this
        yields exactly one chunk: the dispatcher's message or a fixed error
        message.

        Raises:
            ValueError: If prompt or user_id is empty (raised on first
                iteration).
        """
        _validate_request(prompt, user_id)

        with user_context(user_id):
            logger.info(f"Streaming agent request: {prompt}")
            fragments = []
            try:
                for fragment in self.provider.complete_streaming(
                    self.build_prompt(prompt)
                ):
                    fragments.append(fragment)
            except Exception as e:
                logger.error(f"Completion provider failed mid-stream: {e}")
                message = PROVIDER_ERROR_MESSAGE
            else:
                logger.info(
                    f"Received {len(fragments)} fragment(s) from completion provider"
                )
                message = self._dispatch("".join(fragments), user_id)

        yield message

    def _dispatch(self, reply: str, user_id: str) -> str:
        intent = parse(reply)
        logger.debug(f"Parsed model reply as {type(intent).__name__}")
        return self.dispatcher.dispatch(intent, user_id)


def _validate_request(prompt: str, user_id: str) -> None:
    if not prompt or not prompt.strip():
        raise ValueError("Prompt cannot be empty.")
    if not user_id or not user_id.strip():
        raise ValueError("User ID cannot be empty.")
