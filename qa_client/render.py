"""Turn conversation messages into rich renderables."""

from rich.console import RenderableType
from rich.markdown import Markdown
from rich.text import Text

from qa_client.models import Message

CODE_THEME = "monokai"


def render(message: Message) -> RenderableType:
    """Return the displayable form of ``message``. Pure; nothing is printed."""

    if message.is_error:
        return Text(message.text, style="bold red")
    if message.sender == "ai":
        return Markdown(message.text, code_theme=CODE_THEME)
    return Text(message.text)
