"""Prompt construction and post-processing of generated text."""

from typing import Callable

PROMPT_TEMPLATE = """
Respond to users' questions in a clean, structured format.
- Your answers should be concise and clear.
- If you use lists, separate each item with a line break and number it.
- Avoid unnecessary repetition and provide specific advice that reflects the user's context.
{message}
"""

PostProcessor = Callable[[str, str], str]


def build_prompt(message: str, template: str = PROMPT_TEMPLATE) -> str:
    """Embed the user message into the instructional template."""

    # str.replace keeps braces inside the message or template literal.
    return template.replace("{message}", message)


def strip_prompt_echo(generated_text: str, prompt: str) -> str:
    """Remove the echoed prompt that text-generation models prepend to their output.

    Only the first occurrence is removed. When nothing is left after trimming,
    the untouched generated text is returned instead.
    """

    cleaned = generated_text.replace(prompt, "", 1).strip()
    return cleaned or generated_text


def passthrough(generated_text: str, prompt: str) -> str:
    return generated_text
